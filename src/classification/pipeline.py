"""End-to-end transcript analysis: lexical -> semantic -> fusion -> segments."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from src.classification.exceptions import (
    ClassificationUnavailable,
    ConfigurationError,
    InvalidInput,
)
from src.classification.lexical import count_keywords, locate_keywords
from src.classification.models import (
    AnalysisResult,
    EvidenceSegment,
    KeywordMatch,
    SemanticClassificationResult,
    SemanticOutcome,
)
from src.classification.scoring import HybridScorer, normalize_counts
from src.pipeline_config import ScoringConfig, load_scoring_config

logger = logging.getLogger(__name__)


class Classifier(Protocol):
    def classify(self, transcript: str) -> SemanticClassificationResult: ...


def _classify_with_timeout(
    classifier: Classifier,
    transcript: str,
    timeout: float,
) -> SemanticClassificationResult:
    """Run ``classifier.classify`` on a worker thread, giving up after *timeout*.

    Raises:
        ClassificationUnavailable: If the call does not finish in time.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="semantic-classifier")
    future = executor.submit(classifier.classify, transcript)
    try:
        return future.result(timeout=timeout)
    except TimeoutError as exc:
        raise ClassificationUnavailable(
            f"Semantic classification timed out after {timeout:.1f}s"
        ) from exc
    finally:
        # Abandon a still-running call instead of blocking on it
        executor.shutdown(wait=False, cancel_futures=True)


def _attempt_semantic(
    transcript: str,
    config: ScoringConfig,
    classifier: Classifier | None,
) -> tuple[SemanticClassificationResult | None, SemanticOutcome]:
    """Run semantic classification if enabled; never raises for backend errors."""
    if not config.rag_enabled:
        logger.info("Semantic classification is disabled (RAG_ENABLED is not set)")
        return None, SemanticOutcome.SKIPPED
    if not transcript.strip():
        logger.info("Skipping semantic classification (empty transcript)")
        return None, SemanticOutcome.SKIPPED

    try:
        if classifier is None:
            from src.classification.semantic import SemanticClassifier

            classifier = SemanticClassifier(config=config)
        result = _classify_with_timeout(classifier, transcript, config.semantic_timeout_seconds)
    except ConfigurationError:
        raise
    except (InvalidInput, ClassificationUnavailable) as exc:
        logger.warning("Semantic classification failed, falling back to keyword-only: %s", exc)
        return None, SemanticOutcome.FAILED
    except Exception:
        logger.exception("Unexpected semantic classification error, falling back to keyword-only")
        return None, SemanticOutcome.FAILED

    logger.info("Semantic scores: %s (%d segments)", result.scores, len(result.segments))
    return result, SemanticOutcome.SUCCESS


def analyze_transcript(
    transcript: str | None,
    *,
    config: ScoringConfig | None = None,
    classifier: Classifier | None = None,
) -> AnalysisResult:
    """Classify a transcript into the four talk categories.

    Lexical scoring always runs.  Semantic classification runs only when
    enabled and the transcript is non-empty; any failure there degrades to
    keyword-only scores instead of raising.

    Args:
        transcript: Transcript text (``None`` and non-strings are treated as empty).
        config: Scoring configuration; defaults to the cached settings-based config.
        classifier: Semantic classifier; defaults to a Supabase/OpenAI-backed
            :class:`~src.classification.semantic.SemanticClassifier`.

    Returns:
        Counts, keyword and final scores, classification method, evidence
        segments and the semantic outcome.

    Raises:
        ConfigurationError: If the scoring configuration is invalid.
    """
    cfg = config or load_scoring_config()
    text = transcript if isinstance(transcript, str) else ""

    # 1. Lexical
    counts = count_keywords(text)
    keyword_scores = normalize_counts(counts, cfg.keyword_saturation)
    logger.info(
        "Keyword analysis: %d characters, %d words, counts=%s, scores=%s",
        len(text),
        len(text.split()),
        counts,
        keyword_scores,
    )

    # 2. Semantic
    semantic, outcome = _attempt_semantic(text, cfg, classifier)

    # 3. Fuse
    scorer = HybridScorer.from_config(cfg)
    fused = scorer.combine(semantic.scores if semantic is not None else None, keyword_scores)
    if semantic is not None:
        logger.info("Hybrid scores: %s (weights %s)", fused.scores, scorer.get_weights())

    # 4. Evidence segments
    segments: list[EvidenceSegment | KeywordMatch]
    if semantic is not None and semantic.segments:
        segments = list(semantic.segments)
    else:
        segments = list(locate_keywords(text))
        if segments:
            logger.info("Using keyword-based segments for highlighting: %d", len(segments))

    return AnalysisResult(
        counts=counts,
        keyword_scores=keyword_scores,
        scores=fused.scores,
        method=fused.method,
        segments=segments,
        semantic_outcome=outcome,
        semantic=semantic,
    )
