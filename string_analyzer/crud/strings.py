from datetime import datetime, timezone
from typing import Any, List, Mapping, Tuple
import logging

from string_analyzer.crud.store import RecordStore
from string_analyzer.exceptions import MissingFieldError, StringNotFoundError, WrongTypeError
from string_analyzer.filters import FilterSpec, apply_filters
from string_analyzer.nl_query import parse_natural_language_query
from string_analyzer.schemas.string import StringRecord
from string_analyzer.utils import analyze_string, compute_sha256

logger = logging.getLogger(__name__)


def extract_value(payload: Any) -> str:
    """Pull the string to analyze out of a request body"""
    if not isinstance(payload, Mapping) or "value" not in payload:
        raise MissingFieldError()

    value = payload["value"]
    if not isinstance(value, str):
        raise WrongTypeError()

    # JSON allows escapes such as "\ud800" that are not Unicode text
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise WrongTypeError('Invalid "value": must be valid Unicode text (lone surrogates are not allowed)')
    return value


def create_string_analysis(store: RecordStore, value: str) -> StringRecord:
    """Analyze a string and store it; duplicates raise StringAlreadyExistsError"""
    properties = analyze_string(value)
    record = StringRecord(
        id=properties.sha256_hash,
        value=value,
        properties=properties,
        created_at=datetime.now(timezone.utc),
    )

    store.insert(record)
    logger.info(f"Stored string {record.id[:12]} (length {properties.length})")
    return record


def get_string_by_value(store: RecordStore, value: str) -> StringRecord:
    """Get string analysis by its literal value"""
    record = store.get(compute_sha256(value))
    if record is None:
        raise StringNotFoundError()
    return record


def delete_string(store: RecordStore, value: str) -> None:
    """Delete string analysis by its literal value"""
    digest = compute_sha256(value)
    if not store.delete(digest):
        raise StringNotFoundError()
    logger.info(f"Deleted string {digest[:12]}")


def get_all_strings(store: RecordStore, spec: FilterSpec) -> List[StringRecord]:
    """Get all strings matching the given filters"""
    return apply_filters(spec, store.all())


def filter_by_natural_language(store: RecordStore, query: str) -> Tuple[List[StringRecord], FilterSpec]:
    """Translate query into filters and apply them; returns matches and the filters used"""
    spec = parse_natural_language_query(query)
    logger.info(f"Interpreted {query!r} as {spec.as_filters()}")
    return get_all_strings(store, spec), spec
