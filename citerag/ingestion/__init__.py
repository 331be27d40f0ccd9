# citerag/ingestion/__init__.py
"""Ingestion: chunking plus the chunk → embed → store pipeline."""

from citerag.ingestion.chunking import BoundaryChunker, chunk_text
from citerag.ingestion.pipeline import IngestionPipeline

__all__ = ["BoundaryChunker", "chunk_text", "IngestionPipeline"]
