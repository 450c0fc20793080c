"""Data models for transcript classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Category(StrEnum):
    """Developmental talk category. Declaration order is the iteration order."""

    SCIENCE = "science"
    SOCIAL = "social"
    LITERATURE = "literature"
    LANGUAGE = "language"


class ClassificationMethod(StrEnum):
    """Which signals produced the final scores."""

    KEYWORD_ONLY = "keyword-only"
    HYBRID = "hybrid"


class SemanticOutcome(StrEnum):
    """Result of the semantic step of the pipeline."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


CategoryCounts = dict[Category, int]
CategoryScores = dict[Category, int]


def empty_category_map() -> dict[Category, int]:
    """Return a mapping with every category set to zero."""
    return {category: 0 for category in Category}


@dataclass(frozen=True)
class KeywordMatch:
    """A taxonomy keyword located in a transcript."""

    text: str
    category: Category
    start_index: int
    end_index: int


@dataclass(frozen=True)
class EvidenceSegment:
    """A transcript span attributed to a category by semantic similarity."""

    text: str
    category: Category
    similarity: float
    start_index: int | None = None
    end_index: int | None = None


@dataclass
class SemanticClassificationResult:
    """Scores, raw strengths and evidence from one semantic classification."""

    scores: CategoryScores
    strengths: dict[Category, float] = field(default_factory=dict)
    segments: list[EvidenceSegment] = field(default_factory=list)


@dataclass(frozen=True)
class FusedScores:
    """Final per-category scores tagged with the method that produced them."""

    scores: CategoryScores
    method: ClassificationMethod


@dataclass
class AnalysisResult:
    """Complete output of :func:`src.classification.pipeline.analyze_transcript`."""

    counts: CategoryCounts
    keyword_scores: CategoryScores
    scores: CategoryScores
    method: ClassificationMethod
    segments: list[EvidenceSegment | KeywordMatch]
    semantic_outcome: SemanticOutcome
    semantic: SemanticClassificationResult | None = None
