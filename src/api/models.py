"""Pydantic request/response schemas for the Classroom Talk API."""

from __future__ import annotations

from pydantic import BaseModel

from src.classification.models import (
    AnalysisResult,
    Category,
    ClassificationMethod,
    EvidenceSegment,
    KeywordMatch,
    SemanticOutcome,
)


class AnalyzeRequest(BaseModel):
    """Request body for the /api/analyze endpoint."""

    transcript: str


class SegmentResponse(BaseModel):
    """A highlighted transcript span attributed to a category."""

    text: str
    category: Category
    start_index: int | None = None
    end_index: int | None = None
    similarity: float | None = None
    source: str = "keyword"

    @classmethod
    def from_segment(cls, segment: EvidenceSegment | KeywordMatch) -> SegmentResponse:
        if isinstance(segment, EvidenceSegment):
            return cls(
                text=segment.text,
                category=segment.category,
                start_index=segment.start_index,
                end_index=segment.end_index,
                similarity=segment.similarity,
                source="semantic",
            )
        return cls(
            text=segment.text,
            category=segment.category,
            start_index=segment.start_index,
            end_index=segment.end_index,
        )


class AnalyzeResponse(BaseModel):
    """Response body for the /api/analyze endpoint."""

    counts: dict[Category, int]
    keyword_scores: dict[Category, int]
    scores: dict[Category, int]
    semantic_scores: dict[Category, int] | None = None
    classification_method: ClassificationMethod
    semantic_outcome: SemanticOutcome
    segments: list[SegmentResponse] = []

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalyzeResponse:
        return cls(
            counts=result.counts,
            keyword_scores=result.keyword_scores,
            scores=result.scores,
            semantic_scores=result.semantic.scores if result.semantic is not None else None,
            classification_method=result.method,
            semantic_outcome=result.semantic_outcome,
            segments=[SegmentResponse.from_segment(s) for s in result.segments],
        )


class WeightsResponse(BaseModel):
    """Response body for the /api/classifier/weights endpoint."""

    semantic_weight: float
    keyword_weight: float
