"""Error taxonomy for transcript classification."""

from __future__ import annotations


class ClassifierError(Exception):
    """Base class for all classification errors."""


class InvalidInput(ClassifierError, ValueError):
    """Transcript is empty or not text; raised by the semantic path only."""


class ClassificationUnavailable(ClassifierError):
    """Embedding backend or knowledge base unreachable or erroring."""


class ConfigurationError(ClassifierError, ValueError):
    """Scoring configuration is missing or inconsistent."""
