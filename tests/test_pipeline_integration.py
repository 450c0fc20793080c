"""End-to-end integration tests for hybrid classification against live backends.

# MANUAL RUN REQUIRED: These tests require a live OpenAI key and a Supabase
# project whose knowledge_base_embeddings table has been populated.
# Run manually with: pytest -m expensive tests/test_pipeline_integration.py -v
# Ensure .env has OPENAI_API_KEY, SUPABASE_URL, SUPABASE_KEY set.
#
# These tests are NOT run in CI (marked @pytest.mark.expensive).
#
# WHAT IS TESTED:
#   1. The knowledge base returns reference entries for every category
#   2. A clearly science-flavoured transcript classifies as hybrid
#   3. Science outscores the other categories and evidence offsets are valid
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from src.classification.models import Category, ClassificationMethod, EvidenceSegment
from src.classification.pipeline import analyze_transcript
from src.classification.semantic import SemanticClassifier
from src.knowledge_base.storage import SupabaseKnowledgeBase
from src.pipeline_config import load_scoring_config

SCIENCE_TRANSCRIPT = (
    "Let's find out what happens when we put the seed in the dark closet. "
    "I think it will not grow because plants need sunlight. "
    "We can measure it with the ruler every day and write down what we see."
)


@pytest.mark.expensive
def test_knowledge_base_has_every_category() -> None:
    kb = SupabaseKnowledgeBase()
    for category in Category:
        entries = kb.lookup_by_category(category)
        assert entries, f"No knowledge base entries for {category.value}"
        assert len({len(e.embedding) for e in entries}) == 1


@pytest.mark.expensive
def test_hybrid_classification_golden_path() -> None:
    """Live embed -> retrieve -> fuse for a science transcript.

    Requires: OPENAI_API_KEY, SUPABASE_URL, SUPABASE_KEY
    """
    config = replace(load_scoring_config(), rag_enabled=True, semantic_timeout_seconds=60.0)
    result = analyze_transcript(
        SCIENCE_TRANSCRIPT,
        config=config,
        classifier=SemanticClassifier(config=config),
    )

    assert result.method is ClassificationMethod.HYBRID, "Semantic path failed; check credentials"
    assert result.semantic is not None
    assert result.semantic.scores[Category.SCIENCE] == max(result.semantic.scores.values())
    for segment in result.segments:
        if isinstance(segment, EvidenceSegment):
            assert segment.start_index is not None and segment.end_index is not None
            assert SCIENCE_TRANSCRIPT[segment.start_index : segment.end_index] == segment.text
