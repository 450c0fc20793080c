"""Tests for score normalisation and hybrid fusion."""

from __future__ import annotations

import math

import pytest

from src.classification.exceptions import ConfigurationError
from src.classification.lexical import count_keywords
from src.classification.models import Category, ClassificationMethod
from src.classification.scoring import (
    HybridScorer,
    clamp_score,
    normalize_counts,
    round_half_up,
)
from src.pipeline_config import ScoringConfig

SCIENCE, SOCIAL, LITERATURE, LANGUAGE = list(Category)


def _scores(science: int, social: int, literature: int, language: int) -> dict[Category, int]:
    return {SCIENCE: science, SOCIAL: social, LITERATURE: literature, LANGUAGE: language}


# ---------------------------------------------------------------------------
# Rounding helpers
# ---------------------------------------------------------------------------


class TestRounding:
    def test_half_rounds_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(12.5) == 13
        assert round_half_up(0.49) == 0

    def test_clamp(self) -> None:
        assert clamp_score(-3.2) == 0
        assert clamp_score(100.4) == 100
        assert clamp_score(250) == 100
        assert clamp_score(41.6) == 42


# ---------------------------------------------------------------------------
# Normaliser
# ---------------------------------------------------------------------------


class TestNormalizeCounts:
    def test_zero_counts(self) -> None:
        assert normalize_counts(_scores(0, 0, 0, 0)) == _scores(0, 0, 0, 0)

    def test_linear_below_saturation(self) -> None:
        assert normalize_counts(_scores(1, 3, 7, 10)) == _scores(5, 15, 35, 50)

    def test_saturates_at_threshold(self) -> None:
        assert normalize_counts(_scores(20, 21, 100, 19)) == _scores(100, 100, 100, 95)

    def test_half_up_rounding(self) -> None:
        # 1 / 8 * 100 == 12.5
        assert normalize_counts(_scores(1, 0, 0, 0), saturation=8)[SCIENCE] == 13

    def test_missing_categories_default_to_zero(self) -> None:
        assert normalize_counts({SCIENCE: 4}) == _scores(20, 0, 0, 0)

    @pytest.mark.parametrize("saturation", [0, -5])
    def test_non_positive_saturation_raises(self, saturation: int) -> None:
        with pytest.raises(ConfigurationError):
            normalize_counts(_scores(1, 1, 1, 1), saturation=saturation)

    def test_monotonic(self) -> None:
        previous = -1
        for count in range(0, 45):
            score = normalize_counts(_scores(count, 0, 0, 0))[SCIENCE]
            assert score >= previous
            assert 0 <= score <= 100
            previous = score

    def test_bounded_for_real_transcripts(self) -> None:
        text = "Why? " * 30 + "Hello friend, let's read a story about a dragon."
        scores = normalize_counts(count_keywords(text))
        assert all(0 <= s <= 100 for s in scores.values())
        assert scores[SCIENCE] == 100


# ---------------------------------------------------------------------------
# Hybrid scorer
# ---------------------------------------------------------------------------


class TestHybridScorer:
    def test_absent_semantic_returns_lexical(self) -> None:
        lexical = _scores(10, 20, 30, 40)
        fused = HybridScorer(0.7, 0.3).combine(None, lexical)
        assert fused.scores == lexical
        assert fused.method is ClassificationMethod.KEYWORD_ONLY

    def test_absent_semantic_copies_scores(self) -> None:
        lexical = _scores(10, 20, 30, 40)
        fused = HybridScorer(0.7, 0.3).combine(None, lexical)
        assert fused.scores is not lexical

    def test_weighted_combination(self) -> None:
        semantic = _scores(80, 40, 0, 100)
        lexical = _scores(20, 40, 50, 100)
        fused = HybridScorer(0.7, 0.3).combine(semantic, lexical)
        assert fused.scores == _scores(62, 40, 15, 100)
        assert fused.method is ClassificationMethod.HYBRID

    @pytest.mark.parametrize(
        ("semantic_weight", "keyword_weight"),
        [(0.7, 0.3), (0.5, 0.5), (1.0, 0.0), (0.0, 1.0), (0.25, 0.75)],
    )
    def test_matches_formula(self, semantic_weight: float, keyword_weight: float) -> None:
        scorer = HybridScorer(semantic_weight, keyword_weight)
        for s, lex in [(0, 0), (13, 87), (55, 21), (100, 100), (99, 1)]:
            fused = scorer.combine(_scores(s, s, s, s), _scores(lex, lex, lex, lex))
            expected = max(0, min(100, math.floor(semantic_weight * s + keyword_weight * lex + 0.5)))
            assert set(fused.scores.values()) == {expected}

    def test_get_weights(self) -> None:
        assert HybridScorer(0.6, 0.4).get_weights() == {
            "semantic_weight": 0.6,
            "keyword_weight": 0.4,
        }

    def test_from_config(self) -> None:
        config = ScoringConfig(semantic_weight=0.55, keyword_weight=0.45)
        assert HybridScorer.from_config(config).get_weights()["semantic_weight"] == 0.55

    @pytest.mark.parametrize(
        ("semantic_weight", "keyword_weight"),
        [(0.5, 0.6), (0.2, 0.2), (-0.1, 1.1), (None, 1.0)],
    )
    def test_invalid_weights_raise(self, semantic_weight: float, keyword_weight: float) -> None:
        with pytest.raises(ConfigurationError):
            HybridScorer(semantic_weight, keyword_weight)

    def test_deterministic(self) -> None:
        scorer = HybridScorer(0.7, 0.3)
        a = scorer.combine(_scores(33, 66, 99, 1), _scores(5, 10, 15, 20))
        b = scorer.combine(_scores(33, 66, 99, 1), _scores(5, 10, 15, 20))
        assert a == b
