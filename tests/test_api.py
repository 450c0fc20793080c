"""Tests for API endpoints (no external API keys required)."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from src.api.main import app
from src.classification.exceptions import ClassificationUnavailable
from src.classification.models import Category, EvidenceSegment, SemanticClassificationResult
from src.pipeline_config import ScoringConfig

client = TestClient(app)

SCIENTIST_SENTENCE = "The scientist observed the experiment and made a prediction."


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_analyze_validation():
    """Analyze endpoint requires a transcript field."""
    response = client.post("/api/analyze", json={})
    assert response.status_code == 422


def test_analyze_keyword_only():
    with patch(
        "src.classification.pipeline.load_scoring_config",
        return_value=ScoringConfig(rag_enabled=False),
    ):
        response = client.post("/api/analyze", json={"transcript": SCIENTIST_SENTENCE})

    assert response.status_code == 200
    body = response.json()
    assert body["counts"] == {"science": 4, "social": 0, "literature": 0, "language": 0}
    assert body["scores"] == body["keyword_scores"]
    assert body["scores"]["science"] == 20
    assert body["semantic_scores"] is None
    assert body["classification_method"] == "keyword-only"
    assert body["semantic_outcome"] == "skipped"
    assert body["segments"][0] == {
        "text": "scientist",
        "category": "science",
        "start_index": 4,
        "end_index": 13,
        "similarity": None,
        "source": "keyword",
    }


def test_analyze_empty_transcript():
    """Empty string is a valid str; the result is all zeros, never an error."""
    with patch(
        "src.classification.pipeline.load_scoring_config",
        return_value=ScoringConfig(rag_enabled=True),
    ):
        response = client.post("/api/analyze", json={"transcript": ""})

    assert response.status_code == 200
    body = response.json()
    assert set(body["scores"].values()) == {0}
    assert body["segments"] == []
    assert body["classification_method"] == "keyword-only"


def test_analyze_semantic_unavailable_falls_back():
    """An embedding/knowledge base outage still returns 200 with keyword-only scores."""
    with (
        patch(
            "src.classification.pipeline.load_scoring_config",
            return_value=ScoringConfig(rag_enabled=True),
        ),
        patch("src.classification.semantic.SemanticClassifier") as mock_cls,
    ):
        mock_cls.return_value.classify.side_effect = ClassificationUnavailable("supabase down")
        response = client.post("/api/analyze", json={"transcript": SCIENTIST_SENTENCE})

    assert response.status_code == 200
    body = response.json()
    assert body["classification_method"] == "keyword-only"
    assert body["semantic_outcome"] == "failed"
    assert body["scores"] == body["keyword_scores"]


def test_analyze_hybrid():
    semantic = SemanticClassificationResult(
        scores={
            Category.SCIENCE: 80,
            Category.SOCIAL: 0,
            Category.LITERATURE: 0,
            Category.LANGUAGE: 0,
        },
        segments=[EvidenceSegment(SCIENTIST_SENTENCE, Category.SCIENCE, 0.81, 0, 60)],
    )
    with (
        patch(
            "src.classification.pipeline.load_scoring_config",
            return_value=ScoringConfig(rag_enabled=True),
        ),
        patch("src.classification.semantic.SemanticClassifier") as mock_cls,
    ):
        mock_cls.return_value.classify.return_value = semantic
        response = client.post("/api/analyze", json={"transcript": SCIENTIST_SENTENCE})

    assert response.status_code == 200
    body = response.json()
    assert body["classification_method"] == "hybrid"
    assert body["semantic_scores"]["science"] == 80
    # 0.7 * 80 + 0.3 * 20
    assert body["scores"]["science"] == 62
    assert body["segments"] == [
        {
            "text": SCIENTIST_SENTENCE,
            "category": "science",
            "start_index": 0,
            "end_index": 60,
            "similarity": 0.81,
            "source": "semantic",
        }
    ]


def test_weights():
    with patch(
        "src.api.routes.analysis.load_scoring_config",
        return_value=ScoringConfig(semantic_weight=0.6, keyword_weight=0.4),
    ):
        response = client.get("/api/classifier/weights")

    assert response.status_code == 200
    assert response.json() == {"semantic_weight": 0.6, "keyword_weight": 0.4}
