"""Score normalisation and hybrid fusion of lexical and semantic scores."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from src.classification.exceptions import ConfigurationError
from src.classification.models import (
    Category,
    CategoryCounts,
    CategoryScores,
    ClassificationMethod,
    FusedScores,
)
from src.pipeline_config import WEIGHT_SUM_TOLERANCE, ScoringConfig

logger = logging.getLogger(__name__)

# Keyword occurrences needed for a category to reach 100
DEFAULT_SATURATION = 20


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up."""
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    """Round *value* and clamp it to the 0-100 score range."""
    return max(0, min(100, round_half_up(value)))


def normalize_counts(counts: CategoryCounts, saturation: int = DEFAULT_SATURATION) -> CategoryScores:
    """Map raw keyword counts to 0-100 scores.

    ``score = min(100, round(count / saturation * 100))``; counts at or above
    *saturation* score exactly 100.

    Raises:
        ConfigurationError: If *saturation* is not positive.
    """
    if saturation <= 0:
        raise ConfigurationError(f"saturation must be positive, got {saturation}")
    return {
        category: min(100, round_half_up(max(0, counts.get(category, 0)) / saturation * 100))
        for category in Category
    }


class HybridScorer:
    """Fuses semantic and lexical scores under fixed weights.

    Args:
        semantic_weight: Weight applied to semantic scores.
        keyword_weight: Weight applied to lexical scores.

    Raises:
        ConfigurationError: If a weight is missing, out of range, or the two
            do not sum to 1.
    """

    def __init__(self, semantic_weight: float, keyword_weight: float) -> None:
        for name, value in (("semantic_weight", semantic_weight), ("keyword_weight", keyword_weight)):
            if value is None or not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be between 0 and 1, got {value!r}")
        if abs(semantic_weight + keyword_weight - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ConfigurationError(
                f"Fusion weights must sum to 1, got {semantic_weight} + {keyword_weight}"
            )
        self._semantic_weight = semantic_weight
        self._keyword_weight = keyword_weight

    @classmethod
    def from_config(cls, config: ScoringConfig) -> HybridScorer:
        return cls(config.semantic_weight, config.keyword_weight)

    def get_weights(self) -> dict[str, float]:
        """Return the active fusion weights."""
        return {
            "semantic_weight": self._semantic_weight,
            "keyword_weight": self._keyword_weight,
        }

    def combine(
        self,
        semantic: Mapping[Category, int] | None,
        lexical: Mapping[Category, int],
    ) -> FusedScores:
        """Combine semantic and lexical scores.

        Absent semantic scores are a valid state: the lexical scores are
        returned verbatim, tagged ``keyword-only``.
        """
        if semantic is None:
            return FusedScores(
                scores={category: lexical.get(category, 0) for category in Category},
                method=ClassificationMethod.KEYWORD_ONLY,
            )

        fused = {
            category: clamp_score(
                self._semantic_weight * semantic.get(category, 0)
                + self._keyword_weight * lexical.get(category, 0)
            )
            for category in Category
        }
        logger.debug("Fused scores %s with weights %s", fused, self.get_weights())
        return FusedScores(scores=fused, method=ClassificationMethod.HYBRID)
