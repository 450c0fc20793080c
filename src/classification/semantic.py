"""Retrieval-based semantic classification against the labelled knowledge base.

Each transcript sentence is embedded and compared (cosine similarity) with
every reference entry of every category.  A sentence's strength for a
category is its best match among that category's entries; the category
strength aggregates sentence strengths (``max`` or mean of the top ``k``)
and is mapped onto 0-100 with a linear ramp between a floor and a ceiling.
Sentences whose strength reaches the similarity threshold become evidence
segments.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

from src.classification.exceptions import ClassificationUnavailable, InvalidInput
from src.classification.models import (
    Category,
    EvidenceSegment,
    SemanticClassificationResult,
)
from src.classification.scoring import clamp_score
from src.classification.segmentation import TranscriptSegment, split_sentences
from src.knowledge_base.embeddings import embed_texts
from src.knowledge_base.storage import KnowledgeBase, SupabaseKnowledgeBase
from src.pipeline_config import ScoringConfig, SimilarityAggregation, load_scoring_config

logger = logging.getLogger(__name__)

Embedder = Callable[[list[str]], Sequence[Sequence[float]]]


def _unit_rows(matrix: np.ndarray) -> np.ndarray:
    """Scale each row to unit length; zero rows stay zero."""
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    return matrix / np.where(norms == 0, 1.0, norms)


def aggregate_strength(
    similarities: np.ndarray,
    method: SimilarityAggregation,
    top_k: int,
) -> float:
    """Collapse per-segment similarities into one category strength."""
    if similarities.size == 0:
        return 0.0
    if method is SimilarityAggregation.MAX:
        return float(similarities.max())
    top = np.sort(similarities)[::-1][:top_k]
    return float(top.mean())


def strength_to_score(strength: float, floor: float, ceiling: float) -> int:
    """Map a similarity strength onto 0-100 (monotonic, saturating)."""
    fraction = (strength - floor) / (ceiling - floor)
    return clamp_score(min(1.0, max(0.0, fraction)) * 100)


class SemanticClassifier:
    """Scores transcripts by embedding similarity to knowledge base entries.

    Args:
        knowledge_base: Source of labelled reference embeddings.  Defaults to
            the Supabase-backed knowledge base.
        embedder: Callable turning a list of texts into embedding vectors.
        config: Scoring configuration (threshold, aggregation, ramp).
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase | None = None,
        embedder: Embedder = embed_texts,
        config: ScoringConfig | None = None,
    ) -> None:
        self.knowledge_base = knowledge_base if knowledge_base is not None else SupabaseKnowledgeBase()
        self.embedder = embedder
        self.config = config or load_scoring_config()

    def _embed_segments(self, segments: list[TranscriptSegment]) -> np.ndarray:
        try:
            matrix = np.asarray(self.embedder([s.text for s in segments]), dtype=float)
        except ClassificationUnavailable:
            raise
        except Exception as exc:
            raise ClassificationUnavailable(f"Embedding backend failed: {exc}") from exc

        if matrix.ndim != 2 or matrix.shape[0] != len(segments):
            raise ClassificationUnavailable(
                f"Embedding backend returned shape {matrix.shape} for {len(segments)} segments"
            )
        return _unit_rows(matrix)

    def _reference_matrix(self, category: Category, dimensions: int) -> np.ndarray | None:
        try:
            entries = self.knowledge_base.lookup_by_category(category)
        except ClassificationUnavailable:
            raise
        except Exception as exc:
            raise ClassificationUnavailable(
                f"Knowledge base lookup failed for {category.value}: {exc}"
            ) from exc

        if not entries:
            return None
        try:
            matrix = np.asarray([e.embedding for e in entries], dtype=float)
        except ValueError as exc:
            raise ClassificationUnavailable(
                f"Knowledge base embeddings for {category.value} have mixed lengths"
            ) from exc
        if matrix.ndim != 2 or matrix.shape[1] != dimensions:
            raise ClassificationUnavailable(
                f"Knowledge base embeddings for {category.value} do not match "
                f"the transcript embedding dimension ({dimensions})"
            )
        return _unit_rows(matrix)

    def classify(self, transcript: str) -> SemanticClassificationResult:
        """Classify *transcript* into per-category semantic scores and evidence.

        Raises:
            InvalidInput: If the transcript is empty or not text.
            ClassificationUnavailable: If embedding or retrieval fails, or the
                knowledge base holds no entries at all.  No partial results
                are returned.
        """
        if not isinstance(transcript, str) or not transcript.strip():
            raise InvalidInput("Transcript must be a non-empty string")

        cfg = self.config
        segments = split_sentences(transcript, max_words=cfg.segment_max_words)
        if not segments:
            raise InvalidInput("Transcript contains no classifiable text")

        segment_vectors = self._embed_segments(segments)
        dimensions = segment_vectors.shape[1]

        # segment x category strength; NaN marks categories without references
        strengths_by_segment = np.full((len(segments), len(Category)), np.nan)
        for col, category in enumerate(Category):
            references = self._reference_matrix(category, dimensions)
            if references is None:
                logger.warning("No knowledge base entries for category %s", category.value)
                continue
            similarities = segment_vectors @ references.T
            strengths_by_segment[:, col] = similarities.max(axis=1)

        if np.isnan(strengths_by_segment).all():
            raise ClassificationUnavailable("Knowledge base contains no reference entries")

        strengths: dict[Category, float] = {}
        scores: dict[Category, int] = {}
        for col, category in enumerate(Category):
            column = strengths_by_segment[:, col]
            if np.isnan(column).all():
                strengths[category] = 0.0
                scores[category] = 0
                continue
            strength = aggregate_strength(column, cfg.similarity_aggregation, cfg.similarity_top_k)
            strengths[category] = round(strength, 4)
            scores[category] = strength_to_score(
                strength, cfg.semantic_score_floor, cfg.semantic_score_ceiling
            )

        evidence: list[EvidenceSegment] = []
        for row, segment in enumerate(segments):
            for col, category in enumerate(Category):
                similarity = strengths_by_segment[row, col]
                if not np.isnan(similarity) and similarity > cfg.similarity_threshold:
                    evidence.append(
                        EvidenceSegment(
                            text=segment.text,
                            category=category,
                            similarity=round(float(similarity), 4),
                            start_index=segment.start_index,
                            end_index=segment.end_index,
                        )
                    )

        logger.info(
            "Semantic classification: %d segments, %d evidence, scores=%s",
            len(segments),
            len(evidence),
            scores,
        )
        return SemanticClassificationResult(scores=scores, strengths=strengths, segments=evidence)
