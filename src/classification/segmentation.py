"""Split transcripts into sentence-level segments that keep source offsets."""

from __future__ import annotations

import re
from dataclasses import dataclass

# A sentence ends at a line break or at terminal punctuation followed by
# whitespace, so "3.5" stays whole
_SENTENCE_RE = re.compile(r"[^\n]+?(?:[.!?]+(?=\s|$)|$)", re.MULTILINE)
_WORD_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class TranscriptSegment:
    """A span of the transcript submitted for embedding."""

    text: str
    start_index: int
    end_index: int


def _window_words(transcript: str, start: int, end: int, max_words: int) -> list[TranscriptSegment]:
    """Split ``transcript[start:end]`` into consecutive windows of *max_words* words."""
    words = list(_WORD_RE.finditer(transcript, start, end))
    segments: list[TranscriptSegment] = []
    for pos in range(0, len(words), max_words):
        window = words[pos : pos + max_words]
        seg_start = window[0].start()
        seg_end = window[-1].end()
        segments.append(TranscriptSegment(transcript[seg_start:seg_end], seg_start, seg_end))
    return segments


def split_sentences(transcript: str, max_words: int = 60) -> list[TranscriptSegment]:
    """Split *transcript* into sentences with character offsets.

    Sentences longer than *max_words* words are split into word windows.
    Fragments with no letters or digits (stray punctuation) are dropped.

    Args:
        transcript: Raw transcript text.
        max_words: Maximum words per segment.

    Returns:
        Segments in transcript order.
    """
    if not transcript or not transcript.strip():
        return []

    segments: list[TranscriptSegment] = []
    for match in _SENTENCE_RE.finditer(transcript):
        raw = match.group(0)
        start = match.start() + (len(raw) - len(raw.lstrip()))
        end = match.end() - (len(raw) - len(raw.rstrip()))
        text = transcript[start:end]
        if not any(ch.isalnum() for ch in text):
            continue
        if len(text.split()) <= max_words:
            segments.append(TranscriptSegment(text, start, end))
        else:
            segments.extend(_window_words(transcript, start, end, max_words))
    return segments
