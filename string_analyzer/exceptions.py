from fastapi import status
from typing import Any, Dict, Optional


class StringAnalyzerError(Exception):
    """Base class for every recoverable error raised by the analyzer core"""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Invalid request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_detail(self) -> Dict[str, Any]:
        return {"error": self.message}


class MissingFieldError(StringAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Invalid request body or missing "value" field'


class WrongTypeError(StringAnalyzerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = 'Invalid data type for "value" (must be string)'


class StringAlreadyExistsError(StringAnalyzerError):
    status_code = status.HTTP_409_CONFLICT
    message = "String already exists in the system"


class StringNotFoundError(StringAnalyzerError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "String does not exist in the system"


class FilterValidationError(StringAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid query parameter values or types"

    def __init__(self, parameter: str, reason: str):
        self.parameter = parameter
        super().__init__(f"Invalid query parameter: {parameter} {reason}")


class UnparseableQueryError(StringAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Unable to parse natural language query"


class ConflictingFiltersError(StringAnalyzerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = "Query parsed but resulted in conflicting filters"

    def __init__(self, reason: str, parsed_filters: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.parsed_filters = parsed_filters or {}
        super().__init__()

    def to_detail(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "details": self.reason,
            "parsed_filters": self.parsed_filters,
        }


class InternalError(StringAnalyzerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"
