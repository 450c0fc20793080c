"""Embedding helpers using OpenAI text-embedding-3-small."""

from __future__ import annotations

from openai import OpenAI, OpenAIError

from src.classification.exceptions import ClassificationUnavailable
from src.config import settings


def embed_texts(
    texts: list[str],
    model: str | None = None,
    timeout: float | None = None,
    dimensions: int | None = None,
) -> list[list[float]]:
    """Embed a list of texts using the OpenAI embeddings API.

    Args:
        texts: Strings to embed.
        model: OpenAI embedding model name (defaults to ``settings.embedding_model``).
        timeout: Request timeout in seconds (defaults to
            ``settings.semantic_timeout_seconds``).
        dimensions: Output vector width (defaults to
            ``settings.embedding_dimensions``). Must match the width of the
            stored knowledge base embeddings.

    Returns:
        A list of embedding vectors (one per input text, in input order).

    Raises:
        ClassificationUnavailable: If the API call fails.
    """
    if not texts:
        return []
    try:
        client = OpenAI(
            api_key=settings.openai_api_key or None,
            timeout=timeout or settings.semantic_timeout_seconds,
        )
        response = client.embeddings.create(
            input=texts,
            model=model or settings.embedding_model,
            dimensions=dimensions or settings.embedding_dimensions,
        )
    except OpenAIError as exc:
        raise ClassificationUnavailable(f"Embedding request failed: {exc}") from exc
    ordered = sorted(response.data, key=lambda item: item.index)
    return [item.embedding for item in ordered]
