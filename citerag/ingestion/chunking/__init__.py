# citerag/ingestion/chunking/__init__.py
"""Boundary-aware text chunking."""

from citerag.ingestion.chunking.chunker import (
    CHARS_PER_TOKEN,
    BoundaryChunker,
    chunk_text,
    normalize_text,
)

__all__ = ["CHARS_PER_TOKEN", "BoundaryChunker", "chunk_text", "normalize_text"]
