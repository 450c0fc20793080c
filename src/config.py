from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    openai_api_key: str = ""

    # Supabase (knowledge base of labelled reference embeddings)
    supabase_url: str = ""
    supabase_key: str = ""
    knowledge_base_table: str = "knowledge_base_embeddings"

    # Embeddings (must match the knowledge base vector width)
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536

    # Semantic (RAG) classification
    rag_enabled: bool = False
    similarity_threshold: float = 0.40
    similarity_aggregation: str = "top_k_mean"
    similarity_top_k: int = 3
    semantic_score_floor: float = 0.20
    semantic_score_ceiling: float = 0.60
    semantic_timeout_seconds: float = 30.0
    segment_max_words: int = 60

    # Score fusion
    rag_weight: float = 0.7
    keyword_weight: float = 0.3
    keyword_saturation: int = 20

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
