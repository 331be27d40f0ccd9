# citerag/ingestion/chunking/chunker.py
"""
Boundary-aware chunker with bounded overlap.

Splits normalized text into overlapping segments, cutting at the latest
paragraph break, sentence end or space found in a lookahead window past the
target size, instead of cutting mid-sentence.

Token budgets are converted to characters with a fixed ratio of 4 characters
per token. This is an approximation tuned for English prose: chunk sizes vary
for non-English or code-like text, and no tokenizer is consulted.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

from citerag.core.chunk import DEFAULT_SECTION, Chunk
from citerag.logging.logger import get_logger
from citerag.logging.tags import CHUNKING

logger = get_logger(__name__)

CHARS_PER_TOKEN = 4
LOOKAHEAD_CHARS = 1000
MIN_BOUNDARY_RATIO = 0.4
MAX_OVERLAP_RATIO = 0.15

_PARAGRAPH_BREAK = "\n\n"
_SENTENCE_ENDINGS = (". ", "! ", "? ")
_CJK_SENTENCE_ENDINGS = ("。\n", "！\n", "？\n")  # 。！？ before a newline

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


# =============================================================================
# Helpers
# =============================================================================


def tokens_to_chars(tokens: int) -> int:
    """Approximate a token budget in characters (never below 1)."""
    return max(1, math.floor(tokens * CHARS_PER_TOKEN))


def normalize_text(raw: str) -> str:
    """Unify line endings, collapse 3+ newlines to a paragraph break, trim."""
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    return _EXCESS_NEWLINES.sub(_PARAGRAPH_BREAK, text).strip()


def find_boundary(
    text: str,
    start: int,
    target_end: int,
    lookahead: int = LOOKAHEAD_CHARS,
) -> int:
    """
    Find a cut point for the chunk starting at ``start``.

    Searches ``text[start : target_end + lookahead]`` for paragraph breaks,
    sentence endings and spaces. Candidates in the first 40% of the window
    are ignored; among the rest the latest offset wins, whatever its kind.
    The returned offset includes the first boundary character.

    Returns ``target_end`` (a hard cut) when no candidate is eligible.
    """
    window_end = min(target_end + lookahead, len(text))
    window = text[start:window_end]

    paragraph = window.rfind(_PARAGRAPH_BREAK)
    sentence = max(window.rfind(s) for s in _SENTENCE_ENDINGS + _CJK_SENTENCE_ENDINGS)
    space = window.rfind(" ")

    min_good = math.floor(len(window) * MIN_BOUNDARY_RATIO)
    eligible = [i for i in (paragraph, sentence, space) if i >= min_good]

    if eligible:
        return start + max(eligible) + 1
    return target_end


# =============================================================================
# Chunker
# =============================================================================


@dataclass
class BoundaryChunker:
    """
    Overlapping, boundary-aware chunker.

    Args:
        chunk_tokens: Target chunk size in approximate tokens (default: 1000)
        overlap_tokens: Requested overlap in approximate tokens (default: 150).
            Effective overlap is capped at 15% of the target size.
        max_chunks: Hard cap on emitted chunks; extra text is dropped silently.

    Example:
        >>> chunker = BoundaryChunker(chunk_tokens=250, overlap_tokens=30)
        >>> chunker.chunker_id
        'boundary:250:30'
        >>> chunks = chunker.chunk(text)
    """

    plugin_name: str = field(default="boundary", repr=False)
    chunk_tokens: int = 1000
    overlap_tokens: int = 150
    max_chunks: Optional[int] = None

    def __post_init__(self) -> None:
        if self.chunk_tokens < 1:
            raise ValueError(f"chunk_tokens must be >= 1, got {self.chunk_tokens}")
        if self.overlap_tokens < 0:
            raise ValueError(f"overlap_tokens must be >= 0, got {self.overlap_tokens}")
        if self.max_chunks is not None and self.max_chunks < 0:
            raise ValueError(f"max_chunks must be >= 0, got {self.max_chunks}")

    @property
    def chunker_id(self) -> str:
        """Format: "boundary:{chunk_tokens}:{overlap_tokens}"."""
        return f"{self.plugin_name}:{self.chunk_tokens}:{self.overlap_tokens}"

    @property
    def target_chars(self) -> int:
        return tokens_to_chars(self.chunk_tokens)

    @property
    def overlap_chars(self) -> int:
        return min(
            tokens_to_chars(self.overlap_tokens) if self.overlap_tokens > 0 else 0,
            math.floor(self.target_chars * MAX_OVERLAP_RATIO),
        )

    def chunk(self, raw_text: str) -> List[Chunk]:
        """Split ``raw_text`` into chunks with strictly increasing positions from 0."""
        text = normalize_text(raw_text)
        if not text:
            return []

        target_chars = self.target_chars
        overlap_chars = self.overlap_chars
        limit = math.inf if self.max_chunks is None else self.max_chunks
        length = len(text)

        chunks: List[Chunk] = []
        start = 0
        reached_end = False

        while start < length and len(chunks) < limit:
            naive_end = min(start + target_chars, length)

            # The remainder fits in one chunk: take all of it.
            if naive_end == length:
                end = length
            else:
                end = find_boundary(text, start, naive_end)

            if end <= start:
                end = naive_end

            piece = text[start:end].strip()
            if piece:
                chunks.append(Chunk(text=piece, section=DEFAULT_SECTION, position=len(chunks)))

            if end >= length:
                reached_end = True
                break

            start += max(1, (end - start) - overlap_chars)

        if not reached_end and start < length:
            logger.info(f"{CHUNKING} max_chunks={self.max_chunks} reached; remaining text dropped")

        logger.debug(
            f"{CHUNKING} {len(chunks)} chunk(s) from {length} chars "
            f"(target={target_chars}, overlap={overlap_chars})"
        )
        return chunks


def chunk_text(
    raw_text: str,
    chunk_tokens: int = 1000,
    overlap_tokens: int = 150,
    max_chunks: Optional[int] = None,
) -> List[Chunk]:
    """Functional shortcut for ``BoundaryChunker(...).chunk(raw_text)``."""
    chunker = BoundaryChunker(
        chunk_tokens=chunk_tokens,
        overlap_tokens=overlap_tokens,
        max_chunks=max_chunks,
    )
    return chunker.chunk(raw_text)


__all__ = [
    "CHARS_PER_TOKEN",
    "LOOKAHEAD_CHARS",
    "BoundaryChunker",
    "chunk_text",
    "find_boundary",
    "normalize_text",
    "tokens_to_chars",
]
