"""Pipeline configuration: strategy enums and ScoringConfig dataclass."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from src.classification.exceptions import ConfigurationError
from src.config import Settings, get_settings

# Tolerance when checking that fusion weights sum to 1
WEIGHT_SUM_TOLERANCE = 1e-6


class SimilarityAggregation(str, Enum):
    """How per-segment similarities collapse into one strength per category."""

    MAX = "max"
    TOP_K_MEAN = "top_k_mean"


@dataclass(frozen=True)
class ScoringConfig:
    """Immutable configuration for the classification pipeline.

    Defaults mirror :class:`src.config.Settings`.  Every instance is
    validated on construction, so an invalid combination never reaches the
    scorers.

    Raises:
        ConfigurationError: If weights do not sum to 1, the saturation
            threshold is not positive, or the semantic ramp is inverted.
    """

    rag_enabled: bool = False
    semantic_weight: float = 0.7
    keyword_weight: float = 0.3
    keyword_saturation: int = 20
    similarity_threshold: float = 0.40
    similarity_aggregation: SimilarityAggregation = SimilarityAggregation.TOP_K_MEAN
    similarity_top_k: int = 3
    semantic_score_floor: float = 0.20
    semantic_score_ceiling: float = 0.60
    semantic_timeout_seconds: float = 30.0
    segment_max_words: int = 60

    def __post_init__(self) -> None:
        for name in ("semantic_weight", "keyword_weight"):
            value = getattr(self, name)
            if value is None or not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be between 0 and 1, got {value}")
        total = self.semantic_weight + self.keyword_weight
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ConfigurationError(
                f"Fusion weights must sum to 1 (semantic={self.semantic_weight}, "
                f"keyword={self.keyword_weight}, sum={total})"
            )
        if self.keyword_saturation <= 0:
            raise ConfigurationError(
                f"keyword_saturation must be positive, got {self.keyword_saturation}"
            )
        if not -1.0 <= self.similarity_threshold <= 1.0:
            raise ConfigurationError(
                f"similarity_threshold must be a cosine similarity in [-1, 1], "
                f"got {self.similarity_threshold}"
            )
        if self.semantic_score_floor >= self.semantic_score_ceiling:
            raise ConfigurationError(
                "semantic_score_floor must be below semantic_score_ceiling "
                f"({self.semantic_score_floor} >= {self.semantic_score_ceiling})"
            )
        if self.similarity_top_k < 1:
            raise ConfigurationError(f"similarity_top_k must be >= 1, got {self.similarity_top_k}")
        if self.segment_max_words < 1:
            raise ConfigurationError(f"segment_max_words must be >= 1, got {self.segment_max_words}")
        if self.semantic_timeout_seconds <= 0:
            raise ConfigurationError(
                f"semantic_timeout_seconds must be positive, got {self.semantic_timeout_seconds}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> ScoringConfig:
        """Build a validated config from application settings."""
        try:
            aggregation = SimilarityAggregation(settings.similarity_aggregation)
        except ValueError as exc:
            raise ConfigurationError(
                f"Unknown similarity aggregation: {settings.similarity_aggregation!r}"
            ) from exc

        return cls(
            rag_enabled=settings.rag_enabled,
            semantic_weight=settings.rag_weight,
            keyword_weight=settings.keyword_weight,
            keyword_saturation=settings.keyword_saturation,
            similarity_threshold=settings.similarity_threshold,
            similarity_aggregation=aggregation,
            similarity_top_k=settings.similarity_top_k,
            semantic_score_floor=settings.semantic_score_floor,
            semantic_score_ceiling=settings.semantic_score_ceiling,
            semantic_timeout_seconds=settings.semantic_timeout_seconds,
            segment_max_words=settings.segment_max_words,
        )


@lru_cache(maxsize=1)
def load_scoring_config() -> ScoringConfig:
    """Return the cached scoring config built from the current settings.

    Raises:
        ConfigurationError: If the configured values are inconsistent.
    """
    return ScoringConfig.from_settings(get_settings())
