"""Lexical keyword matching: per-category counts and located spans."""

from __future__ import annotations

import re
from collections.abc import Mapping

from src.classification.models import Category, CategoryCounts, KeywordMatch, empty_category_map
from src.classification.taxonomy import KEYWORDS


def _keyword_pattern(keyword: str) -> str:
    """Escape a keyword; inner whitespace matches any whitespace run."""
    return r"\s+".join(re.escape(word) for word in keyword.split())


def compile_category_pattern(keywords: tuple[str, ...]) -> re.Pattern[str] | None:
    """Compile one case-insensitive, word-bounded pattern for a keyword list.

    Alternatives are ordered longest first so that a phrase such as
    ``"once upon a time"`` consumes its span before ``"once"`` can match it.
    """
    if not keywords:
        return None
    ordered = sorted(keywords, key=len, reverse=True)
    alternation = "|".join(_keyword_pattern(k) for k in ordered)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


class KeywordMatcher:
    """Scans transcripts for taxonomy terms.

    Patterns are compiled once per category at construction; instances hold
    no other state and are safe to share between threads.
    """

    def __init__(self, taxonomy: Mapping[Category, tuple[str, ...]] = KEYWORDS) -> None:
        self._patterns: dict[Category, re.Pattern[str] | None] = {
            category: compile_category_pattern(tuple(taxonomy.get(category, ())))
            for category in Category
        }

    def count(self, transcript: object) -> CategoryCounts:
        """Count keyword occurrences per category.

        Empty, blank or non-string input yields all-zero counts.
        """
        counts = empty_category_map()
        if not isinstance(transcript, str) or not transcript.strip():
            return counts
        for category, pattern in self._patterns.items():
            if pattern is not None:
                counts[category] = sum(1 for _ in pattern.finditer(transcript))
        return counts

    def locate(self, transcript: object) -> list[KeywordMatch]:
        """Return every keyword match with offsets into the original transcript.

        Ordered by category, then by position.  A word listed under several
        categories yields one match per category.
        """
        if not isinstance(transcript, str) or not transcript.strip():
            return []
        matches: list[KeywordMatch] = []
        for category, pattern in self._patterns.items():
            if pattern is None:
                continue
            for m in pattern.finditer(transcript):
                matches.append(
                    KeywordMatch(
                        text=m.group(0),
                        category=category,
                        start_index=m.start(),
                        end_index=m.end(),
                    )
                )
        return matches


default_matcher = KeywordMatcher()


def count_keywords(transcript: object) -> CategoryCounts:
    """Count taxonomy keyword occurrences per category in *transcript*."""
    return default_matcher.count(transcript)


def locate_keywords(transcript: object) -> list[KeywordMatch]:
    """Locate taxonomy keywords in *transcript* for highlighting."""
    return default_matcher.locate(transcript)
