"""Analysis endpoints: classify transcripts and inspect fusion weights."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from src.api.models import AnalyzeRequest, AnalyzeResponse, WeightsResponse
from src.classification.pipeline import analyze_transcript
from src.classification.scoring import HybridScorer
from src.pipeline_config import load_scoring_config

router = APIRouter()


@router.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
    """Score a transcript across the four talk categories.

    Always succeeds for a valid body; a semantic backend outage is reported
    through ``classification_method="keyword-only"`` rather than an error.
    """
    # Embedding and knowledge base calls block; keep them off the event loop
    result = await asyncio.to_thread(analyze_transcript, request.transcript)
    return AnalyzeResponse.from_result(result)


@router.get("/api/classifier/weights", response_model=WeightsResponse)
async def weights() -> WeightsResponse:
    """Return the active semantic/keyword fusion weights."""
    scorer = HybridScorer.from_config(load_scoring_config())
    return WeightsResponse(**scorer.get_weights())
