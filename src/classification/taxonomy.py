"""Static keyword taxonomy for the four developmental talk categories.

Each category maps to a curated tuple of words and phrases.  Lists may share
entries (``"answer"`` is both science and social talk); a shared entry counts
towards every category that lists it.  Duplicates inside a single list are
collapsed when the table is built.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from src.classification.models import Category

_SCIENCE = (
    "experiment", "experiments", "hypothesis", "observe", "observed", "observation",
    "predict", "prediction", "measure", "test", "data", "result",
    "science", "scientist", "discover", "investigate", "analyze", "research", "study",
    "evidence", "theory", "fact", "prove", "conclusion", "question", "answer", "why",
    "how", "what", "when", "where", "because", "reason", "cause", "effect", "change",
    "grow", "plant", "animal", "nature", "weather", "water", "air", "earth", "space",
    "star", "planet", "moon", "sun", "light", "dark", "hot", "cold", "big", "small",
    "heavy", "fast", "slow", "up", "down", "inside", "outside", "color",
    "shape", "size", "number", "count", "more", "less", "same", "different",
)

_SOCIAL = (
    "friend", "share", "help", "together", "feelings", "happy", "sad", "angry", "excited",
    "scared", "worried", "proud", "sorry", "thank", "please", "welcome", "hello", "goodbye",
    "play", "game", "fun", "laugh", "smile", "cry", "hug", "love", "care", "kind",
    "nice", "mean", "fair", "unfair", "right", "wrong", "good", "bad", "yes", "no",
    "maybe", "okay", "sure", "family", "mom", "dad", "parent", "brother", "sister",
    "baby", "child", "people", "person", "group", "team", "class", "school", "teacher",
    "student", "learn", "teach", "listen", "talk", "say", "tell", "ask", "answer",
    "understand", "know", "think", "remember", "forget", "want", "need", "like", "dislike",
)

_LITERATURE = (
    "story", "character", "beginning", "ending", "imagine", "pretend", "make-believe",
    "fairy tale", "tale", "book", "read", "page", "chapter", "title", "author", "writer",
    "write", "draw", "picture", "illustration", "drawing", "art", "create", "make",
    "once upon a time", "once", "long ago", "happily ever after", "the end", "begin",
    "start", "finish", "end", "first", "last", "next", "then", "after", "before",
    "prince", "princess", "king", "queen", "castle", "dragon", "magic", "wizard",
    "witch", "fairy", "giant", "dwarf", "hero", "villain", "adventure", "journey",
    "travel", "visit", "go", "come", "arrive", "leave", "return", "home", "place",
    "where", "there", "here", "far", "near", "find", "lose", "search", "look", "see",
    "watch", "show", "hide", "appear", "disappear", "wish", "dream", "hope",
)

_LANGUAGE = (
    "word", "sentence", "speak", "listen", "communicate", "talk", "say", "tell",
    "speech", "language", "voice", "sound", "noise", "quiet", "loud", "soft",
    "whisper", "shout", "yell", "call", "name", "label", "describe", "explain",
    "mean", "meaning", "understand", "comprehend", "know", "learn", "teach",
    "question", "ask", "answer", "reply", "respond", "conversation", "discuss",
    "chat", "pronounce", "pronunciation",
    "letter", "alphabet", "read", "write", "spell", "spelling", "grammar", "noun",
    "verb", "adjective", "phrase", "paragraph", "story", "book",
    "dictionary", "vocabulary", "term", "expression", "idiom",
)


def _dedupe(keywords: Iterable[str]) -> tuple[str, ...]:
    """Lower-case, strip and drop repeated keywords, keeping first-seen order."""
    seen: dict[str, None] = {}
    for keyword in keywords:
        normalized = " ".join(keyword.lower().split())
        if normalized:
            seen.setdefault(normalized, None)
    return tuple(seen)


KEYWORDS: Mapping[Category, tuple[str, ...]] = MappingProxyType(
    {
        Category.SCIENCE: _dedupe(_SCIENCE),
        Category.SOCIAL: _dedupe(_SOCIAL),
        Category.LITERATURE: _dedupe(_LITERATURE),
        Category.LANGUAGE: _dedupe(_LANGUAGE),
    }
)


def keywords_for(category: Category | str) -> tuple[str, ...]:
    """Return the keywords registered for *category* (enum or string value)."""
    return KEYWORDS[Category(category)]
