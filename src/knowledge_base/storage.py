"""Supabase-backed read access to the classification knowledge base."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Protocol, cast

from supabase import Client, create_client

from src.classification.exceptions import ClassificationUnavailable
from src.classification.models import Category
from src.config import settings
from src.knowledge_base.models import KnowledgeBaseEntry

logger = logging.getLogger(__name__)

_ENTRY_COLUMNS = "text,category,embedding,metadata,source"

# Matches the default PostgREST max-rows on hosted Supabase
DEFAULT_PAGE_SIZE = 1000


class KnowledgeBase(Protocol):
    """Read interface the semantic classifier depends on."""

    def lookup_by_category(self, category: Category) -> list[KnowledgeBaseEntry]: ...


def get_supabase_client() -> Client:
    """Create and return a Supabase client from environment variables."""
    return create_client(
        settings.supabase_url or os.getenv("SUPABASE_URL", ""),
        settings.supabase_key or os.getenv("SUPABASE_KEY", ""),
    )


def parse_embedding(value: Any) -> tuple[float, ...]:
    """Coerce a stored embedding into a tuple of floats.

    pgvector columns come back from PostgREST as their text form
    (``"[0.1,0.2]"``); JSON arrays are accepted as well.
    """
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, list | tuple) or not value:
        raise ValueError("embedding must be a non-empty list of numbers")
    return tuple(float(x) for x in value)


def row_to_entry(row: dict[str, Any]) -> KnowledgeBaseEntry:
    """Convert a ``knowledge_base_embeddings`` row into a :class:`KnowledgeBaseEntry`."""
    return KnowledgeBaseEntry(
        text=str(row["text"]),
        category=Category(row["category"]),
        embedding=parse_embedding(row["embedding"]),
        metadata=dict(row.get("metadata") or {}),
        source=row.get("source") or "knowledgeBase",
    )


class SupabaseKnowledgeBase:
    """Reads reference entries from the ``knowledge_base_embeddings`` table.

    The client is created lazily so constructing the knowledge base never
    touches the network.
    """

    def __init__(
        self,
        client: Client | None = None,
        table: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._client = client
        self._table = table or settings.knowledge_base_table
        self._page_size = page_size

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def lookup_by_category(self, category: Category) -> list[KnowledgeBaseEntry]:
        """Return all reference entries for *category*.

        PostgREST caps every response at its ``max-rows`` setting, so rows
        are fetched in ``page_size`` pages ordered by ``id`` until a short
        page comes back.

        Raises:
            ClassificationUnavailable: If Supabase cannot be reached or a row
                is malformed.
        """
        entries: list[KnowledgeBaseEntry] = []
        offset = 0
        try:
            while True:
                result = (
                    self.client.table(self._table)
                    .select(_ENTRY_COLUMNS)
                    .eq("category", category.value)
                    .order("id")
                    .range(offset, offset + self._page_size - 1)
                    .execute()
                )
                # Supabase .data is typed as JSON (broad union); cast to concrete type.
                rows = cast(list[dict[str, Any]], result.data or [])
                entries.extend(row_to_entry(row) for row in rows)
                if len(rows) < self._page_size:
                    break
                offset += self._page_size
        except Exception as exc:
            raise ClassificationUnavailable(
                f"Knowledge base lookup failed for category {category.value!r}: {exc}"
            ) from exc

        logger.debug("Loaded %d knowledge base entries for %s", len(entries), category.value)
        return entries
