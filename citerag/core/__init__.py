# citerag/core/__init__.py
"""
Core data model and error taxonomy shared by ingestion and question answering.

Public API:
    - Chunk: a bounded segment of normalized source text
    - DocumentMetadata, IndexedRecord, RetrievedHit, Source: record shapes
    - IngestResult, AnswerResult: pipeline outputs
    - Exceptions: CiteRagError and its subclasses
"""

from .chunk import Chunk
from .exceptions import (
    CiteRagError,
    ConfigurationError,
    EmbeddingCountMismatchError,
    EmbeddingError,
    GenerationError,
    PipelineError,
    QueryError,
    RerankError,
    VectorStoreError,
)
from .records import (
    AnswerResult,
    DocumentMetadata,
    IndexedRecord,
    IngestResult,
    RetrievedHit,
    Source,
)

__all__ = [
    "Chunk",
    "DocumentMetadata",
    "IndexedRecord",
    "RetrievedHit",
    "Source",
    "IngestResult",
    "AnswerResult",
    "CiteRagError",
    "ConfigurationError",
    "QueryError",
    "EmbeddingError",
    "EmbeddingCountMismatchError",
    "VectorStoreError",
    "RerankError",
    "GenerationError",
    "PipelineError",
]
