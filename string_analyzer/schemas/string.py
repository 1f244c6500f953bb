from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List
from datetime import datetime


class StringProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringRecord(BaseModel):
    """A stored string; `id` is the SHA-256 digest of its value"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class StringListResponse(BaseModel):
    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery
