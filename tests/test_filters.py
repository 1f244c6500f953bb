# tests/test_filters.py
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from string_analyzer.exceptions import FilterValidationError
from string_analyzer.filters import FilterSpec, apply_filters, parse_query_filters
from string_analyzer.schemas.string import StringRecord
from string_analyzer.utils import analyze_string


def make_records(*values):
    records = []
    for value in values:
        props = analyze_string(value)
        records.append(
            StringRecord(
                id=props.sha256_hash,
                value=value,
                properties=props,
                created_at=datetime.now(timezone.utc),
            )
        )
    return records


SAMPLE = ["", "a", "aa", "aba", "ab cd"]


# ---------------------------------------------------------
# Parameter validation
# ---------------------------------------------------------
def test_empty_params_give_empty_spec():
    spec = parse_query_filters({})

    assert spec.as_filters() == {}


def test_all_params_parsed():
    spec = parse_query_filters(
        {
            "is_palindrome": "false",
            "min_length": "2",
            "max_length": "10",
            "word_count": "0",
            "contains_character": "Z",
        }
    )

    assert spec.as_filters() == {
        "is_palindrome": False,
        "min_length": 2,
        "max_length": 10,
        "word_count": 0,
        "contains_character": "Z",
    }


def test_unknown_params_are_ignored():
    spec = parse_query_filters({"limit": "5", "is_palindrome": "true"})

    assert spec.as_filters() == {"is_palindrome": True}


@pytest.mark.parametrize(
    "params",
    [
        {"is_palindrome": "yes"},
        {"is_palindrome": "True"},
        {"is_palindrome": "1"},
        {"min_length": "-1"},
        {"min_length": "abc"},
        {"max_length": "2.5"},
        {"word_count": ""},
        {"word_count": "+3"},
        {"contains_character": ""},
        {"contains_character": "ab"},
    ],
)
def test_invalid_params_raise(params):
    with pytest.raises(FilterValidationError) as exc_info:
        parse_query_filters(params)

    assert exc_info.value.parameter == next(iter(params))


def test_filter_spec_rejects_bad_values():
    with pytest.raises(ValidationError):
        FilterSpec(min_length=-1)
    with pytest.raises(ValidationError):
        FilterSpec(contains_character="xy")


# ---------------------------------------------------------
# Filter engine
# ---------------------------------------------------------
def values(records):
    return [r.value for r in records]


def test_empty_spec_matches_everything():
    records = make_records(*SAMPLE)

    assert apply_filters(FilterSpec(), records) == records


def test_min_length_and_palindrome_conjunction():
    records = make_records(*SAMPLE)

    matched = apply_filters(FilterSpec(min_length=2, is_palindrome=True), records)

    assert values(matched) == ["aa", "aba"]


def test_length_bounds_are_inclusive():
    records = make_records(*SAMPLE)

    assert values(apply_filters(FilterSpec(min_length=1, max_length=2), records)) == ["a", "aa"]


def test_word_count_exact_match():
    records = make_records(*SAMPLE)

    assert values(apply_filters(FilterSpec(word_count=2), records)) == ["ab cd"]
    assert values(apply_filters(FilterSpec(word_count=0), records)) == [""]


def test_non_palindromes():
    records = make_records(*SAMPLE)

    assert values(apply_filters(FilterSpec(is_palindrome=False), records)) == ["ab cd"]


def test_contains_character_is_case_sensitive():
    records = make_records("Apple", "banana", "cherry")

    assert values(apply_filters(FilterSpec(contains_character="a"), records)) == ["banana"]
    assert values(apply_filters(FilterSpec(contains_character="A"), records)) == ["Apple"]
    assert values(apply_filters(FilterSpec(contains_character=" "), records)) == []


def test_apply_preserves_order():
    records = make_records("zz", "aa", "mm")

    assert values(apply_filters(FilterSpec(min_length=2), records)) == ["zz", "aa", "mm"]
