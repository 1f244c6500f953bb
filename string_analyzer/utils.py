import hashlib
from collections import Counter
from typing import Dict

from string_analyzer.schemas.string import StringProperties

# Empty and whitespace-only strings contain no words
EMPTY_TEXT_WORD_COUNT = 0


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string's UTF-8 bytes"""
    # surrogatepass keeps lone surrogates hashable
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, every character counts)"""
    folded = text.casefold()
    return folded == folded[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string (case-sensitive)"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by runs of whitespace"""
    words = text.split()
    if not words:
        return EMPTY_TEXT_WORD_COUNT
    return len(words)


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character, keyed by the raw character"""
    return dict(Counter(text))


def analyze_string(value: str) -> StringProperties:
    """Analyze a string and return all computed properties"""
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=count_unique_characters(value),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=get_character_frequency(value),
    )
