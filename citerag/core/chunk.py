# citerag/core/chunk.py
"""
Chunk - the unit of embedding and indexing.

Chunks are produced only by the chunker and live for a single ingestion
request: they are embedded, paired with their vectors and written to the
vector store as IndexedRecords.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SECTION = "body"


class Chunk(BaseModel):
    """
    A trimmed, non-empty slice of normalized text.

    Attributes:
        text: Chunk text (never empty)
        section: Section label; always "body" for plain text input
        position: Zero-based sequence index, unique within one chunking run
    """

    text: str = Field(..., min_length=1, description="Chunk text content")
    section: str = Field(DEFAULT_SECTION, description="Section label")
    position: int = Field(..., ge=0, description="Sequence index within the chunking run")

    model_config = ConfigDict(frozen=True)


__all__ = ["Chunk", "DEFAULT_SECTION"]
