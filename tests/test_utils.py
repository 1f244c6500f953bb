# tests/test_utils.py
import hashlib

import pytest

from string_analyzer.utils import (
    EMPTY_TEXT_WORD_COUNT,
    analyze_string,
    compute_sha256,
    count_words,
    get_character_frequency,
    is_palindrome,
)


def test_sha256_is_stable_lowercase_hex():
    digest = compute_sha256("hello world")

    assert digest == hashlib.sha256(b"hello world").hexdigest()
    assert digest == compute_sha256("hello world")
    assert digest == digest.lower()
    assert len(digest) == 64


def test_sha256_hashes_utf8_bytes():
    assert compute_sha256("é") == hashlib.sha256("é".encode("utf-8")).hexdigest()


def test_sha256_accepts_lone_surrogates():
    assert len(compute_sha256("\ud800")) == 64


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Level", True),
        ("level!", False),
        ("racecar", True),
        ("a", True),
        ("", True),
        ("ab", False),
        # whitespace and punctuation are compared literally
        ("nurses run", False),
        ("a b a", True),
        ("A man, a plan", False),
    ],
)
def test_is_palindrome(text, expected):
    assert is_palindrome(text) is expected


def test_count_words_collapses_whitespace():
    assert count_words("  hello   big\tworld \n") == 3
    assert count_words("single") == 1


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_empty_text_has_no_words(text):
    assert EMPTY_TEXT_WORD_COUNT == 0
    assert count_words(text) == 0


def test_character_frequency_is_case_sensitive():
    assert get_character_frequency("aAa b") == {"a": 2, "A": 1, " ": 1, "b": 1}


def test_analyze_string():
    props = analyze_string("Hello World")

    assert props.length == 11
    assert props.is_palindrome is False
    # H e l o ' ' W r d
    assert props.unique_characters == 8
    assert props.word_count == 2
    assert props.sha256_hash == compute_sha256("Hello World")
    assert props.character_frequency_map["l"] == 3
    assert props.character_frequency_map["H"] == 1
    assert "h" not in props.character_frequency_map


def test_analyze_empty_string():
    props = analyze_string("")

    assert props.length == 0
    assert props.is_palindrome is True
    assert props.unique_characters == 0
    assert props.word_count == 0
    assert props.character_frequency_map == {}
    assert props.sha256_hash == hashlib.sha256(b"").hexdigest()


def test_analyze_string_is_deterministic():
    assert analyze_string("Was it a car") == analyze_string("Was it a car")
