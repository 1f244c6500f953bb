"""
Keyword-based translation of plain English filter requests.

Examples:
- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters"   -> {min_length: 11}
- "strings containing the letter z"     -> {contains_character: "z"}

This is not a parser. The query is lower-cased, whitespace is collapsed, and
each rule in RULES is searched for independently. Whatever matches is merged
into one FilterSpec:

- contains_character goes to the first rule that sets it, so a named letter
  beats the "first vowel" heuristic, which beats a bare "contains x".
- any other field set to two different values is a conflict.

A bare "contains x" reads "a" followed by another word as the article, so
"contain a palindrome" sets no character. Word counts are exact only: "more
than", "at least" and "at most" N words are not recognised.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple
import logging
import re

from string_analyzer.exceptions import ConflictingFiltersError, UnparseableQueryError
from string_analyzer.filters import FilterSpec

logger = logging.getLogger(__name__)

FIRST_VOWEL = "a"


@dataclass(frozen=True)
class Rule:
    name: str
    pattern: re.Pattern
    build: Callable[[re.Match], Dict[str, Any]]

    def apply(self, query: str) -> Dict[str, Any]:
        match = self.pattern.search(query)
        if not match:
            return {}
        return self.build(match)


def _number(match: re.Match) -> int:
    return int(match.group(1))


RULES: Tuple[Rule, ...] = (
    Rule(
        "palindrome",
        re.compile(r"palindrom(?:e|ic)"),
        lambda m: {"is_palindrome": True},
    ),
    Rule(
        "single_word",
        re.compile(r"\b(?:single|one)[ -]word\b"),
        lambda m: {"word_count": 1},
    ),
    Rule(
        "longer_than",
        re.compile(r"\b(?:longer|more) than (\d+) (?:characters?|chars?)\b"),
        lambda m: {"min_length": _number(m) + 1},
    ),
    Rule(
        "shorter_than",
        re.compile(r"\b(?:shorter|less|fewer) than (\d+) (?:characters?|chars?)\b"),
        lambda m: {"max_length": _number(m) - 1},
    ),
    Rule(
        "word_count",
        re.compile(r"(?<!than )(?<!least )(?<!most )\b(?:exactly )?(\d+) words?\b"),
        lambda m: {"word_count": _number(m)},
    ),
    Rule(
        "named_letter",
        re.compile(r"\bletter ([a-z])\b"),
        lambda m: {"contains_character": m.group(1)},
    ),
    Rule(
        "first_vowel",
        re.compile(r"\bfirst vowel\b"),
        lambda m: {"contains_character": FIRST_VOWEL},
    ),
    Rule(
        "contains",
        re.compile(r"\bcontain(?:s|ing)? (?!a \w)(\S)(?=$|[\s.,;:!?])"),
        lambda m: {"contains_character": m.group(1)},
    ),
)

# Fields where the earliest matching rule wins instead of conflicting
FIRST_MATCH_WINS = {"contains_character"}


def normalize_query(query: str) -> str:
    return " ".join(query.lower().split())


def _merge(query: str) -> Tuple[Dict[str, Any], List[str]]:
    parsed: Dict[str, Any] = {}
    conflicts: List[str] = []

    for rule in RULES:
        for field, value in rule.apply(query).items():
            if field not in parsed:
                parsed[field] = value
            elif field in FIRST_MATCH_WINS:
                logger.debug(f"Rule {rule.name} ignored, {field} already set")
            elif parsed[field] != value:
                conflicts.append(f"{field} is both {parsed[field]} and {value}")

    return parsed, conflicts


def parse_natural_language_query(query: str) -> FilterSpec:
    """
    Translate a natural language query into a FilterSpec.

    Raises UnparseableQueryError when nothing is recognised and
    ConflictingFiltersError when the recognised pieces contradict each other.
    """
    parsed, conflicts = _merge(normalize_query(query))

    if not parsed:
        raise UnparseableQueryError()

    max_length = parsed.get("max_length")
    if max_length is not None and max_length < 0:
        conflicts.append("no string is shorter than 0 characters")

    min_length = parsed.get("min_length")
    if min_length is not None and max_length is not None and min_length > max_length:
        conflicts.append("min_length cannot be greater than max_length")

    if conflicts:
        raise ConflictingFiltersError("; ".join(conflicts), parsed_filters=parsed)

    return FilterSpec(**parsed)
