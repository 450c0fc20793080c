"""Data models for the classification knowledge base."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.classification.models import Category


@dataclass(frozen=True)
class KnowledgeBaseEntry:
    """A labelled reference snippet and its embedding."""

    text: str
    category: Category
    embedding: tuple[float, ...]
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)
    source: str = "knowledgeBase"
