from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from typing import Any
import logging

from string_analyzer.crud import strings as crud
from string_analyzer.crud.store import RecordStore
from string_analyzer.database import get_store
from string_analyzer.exceptions import StringAnalyzerError
from string_analyzer.filters import parse_query_filters
from string_analyzer.schemas.string import (
    InterpretedQuery,
    NaturalLanguageResponse,
    StringListResponse,
    StringRecord,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(exc: StringAnalyzerError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())


@router.post("/strings", response_model=StringRecord, status_code=status.HTTP_201_CREATED)
def create_string(payload: Any = Body(None), store: RecordStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if the string already exists.
    """
    try:
        value = crud.extract_value(payload)
        return crud.create_string_analysis(store, value)
    except StringAnalyzerError as e:
        logger.warning(f"Rejected string submission: {e.message}")
        raise _http_error(e)


@router.get("/strings", response_model=StringListResponse)
def get_all_strings(request: Request, store: RecordStore = Depends(get_store)):
    """
    Get all strings with optional filtering:
    is_palindrome, min_length, max_length, word_count, contains_character.
    """
    try:
        spec = parse_query_filters(request.query_params)
    except StringAnalyzerError as e:
        raise _http_error(e)

    data = crud.get_all_strings(store, spec)
    return StringListResponse(data=data, count=len(data), filters_applied=spec.as_filters())


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    store: RecordStore = Depends(get_store),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    try:
        data, spec = crud.filter_by_natural_language(store, query)
    except StringAnalyzerError as e:
        logger.info(f"Could not interpret query {query!r}: {e.message}")
        raise _http_error(e)

    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=InterpretedQuery(original=query, parsed_filters=spec.as_filters()),
    )


@router.get("/strings/{string_value:path}", response_model=StringRecord)
def get_string(string_value: str, store: RecordStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if the string doesn't exist.
    """
    try:
        return crud.get_string_by_value(store, string_value)
    except StringAnalyzerError as e:
        raise _http_error(e)


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: RecordStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if the string doesn't exist.
    """
    try:
        crud.delete_string(store, string_value)
    except StringAnalyzerError as e:
        raise _http_error(e)
    return None
