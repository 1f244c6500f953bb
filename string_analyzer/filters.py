"""
Structured string filters.

A FilterSpec is built either from query parameters (parse_query_filters) or
from a natural language sentence (see nl_query.translate); both are applied
to stored records the same way by apply_filters.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
import re

from string_analyzer.exceptions import FilterValidationError
from string_analyzer.schemas.string import StringRecord

_NON_NEGATIVE_INT = re.compile(r"[0-9]+")


class FilterSpec(BaseModel):
    """Optional predicates, ANDed together; an empty spec matches everything"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    contains_character: Optional[str] = Field(None, min_length=1, max_length=1)

    def as_filters(self) -> Dict[str, Any]:
        """Only the predicates that are set, as echoed back to clients"""
        return self.model_dump(exclude_none=True)


# ------------------------------------------------------------------------------
# QUERY PARAMETER VALIDATION
# ------------------------------------------------------------------------------
def _parse_bool(name: str, raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise FilterValidationError(name, "must be true or false")


def _parse_non_negative_int(name: str, raw: str) -> int:
    if not _NON_NEGATIVE_INT.fullmatch(raw):
        raise FilterValidationError(name, "must be a non-negative integer")
    return int(raw)


def _parse_single_character(name: str, raw: str) -> str:
    if len(raw) != 1:
        raise FilterValidationError(name, "must be a single character")
    return raw


_PARAMETER_PARSERS: Dict[str, Callable[[str, str], Any]] = {
    "is_palindrome": _parse_bool,
    "min_length": _parse_non_negative_int,
    "max_length": _parse_non_negative_int,
    "word_count": _parse_non_negative_int,
    "contains_character": _parse_single_character,
}


def parse_query_filters(params: Mapping[str, str]) -> FilterSpec:
    """
    Validate raw query parameters into a FilterSpec.

    Unknown parameters are ignored. The first invalid parameter raises
    FilterValidationError.
    """
    values = {}
    for name, parser in _PARAMETER_PARSERS.items():
        raw = params.get(name)
        if raw is None:
            continue
        values[name] = parser(name, raw)

    return FilterSpec(**values)


# ------------------------------------------------------------------------------
# FILTER ENGINE
# ------------------------------------------------------------------------------
def matches(spec: FilterSpec, record: StringRecord) -> bool:
    """Check a single record against every predicate present in spec"""
    props = record.properties

    if spec.is_palindrome is not None and props.is_palindrome != spec.is_palindrome:
        return False

    if spec.min_length is not None and props.length < spec.min_length:
        return False

    if spec.max_length is not None and props.length > spec.max_length:
        return False

    if spec.word_count is not None and props.word_count != spec.word_count:
        return False

    if spec.contains_character is not None and spec.contains_character not in record.value:
        return False

    return True


def apply_filters(spec: FilterSpec, records: Iterable[StringRecord]) -> List[StringRecord]:
    """Return the records matching spec, in their original order"""
    return [record for record in records if matches(spec, record)]
