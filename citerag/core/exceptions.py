# citerag/core/exceptions.py
"""
All exceptions raised by citerag.

Hierarchy:
    CiteRagError
    ├── ConfigurationError - missing credentials/endpoints, invalid config
    ├── QueryError - invalid input, rejected before any external call
    ├── EmbeddingError - Embedding Service failure
    │   └── EmbeddingCountMismatchError - batch returned the wrong vector count
    ├── VectorStoreError - Vector Store write or query failure
    ├── RerankError - Reranking Service failure
    ├── GenerationError - Generation Service failure
    └── PipelineError - orchestration failure outside the stages above

Nothing here is retried. The first failure aborts the request it belongs to.
Empty retrieval results are not errors.
"""

from __future__ import annotations

from typing import Optional


class CiteRagError(Exception):
    """
    Base exception for all citerag errors.

    Callers can catch every pipeline failure with a single handler:

        >>> try:
        ...     result = pipeline.answer("What is X?")
        ... except CiteRagError as e:
        ...     print(f"Request failed: {e}")
    """

    pass


class ConfigurationError(CiteRagError):
    """
    The deployment is misconfigured.

    Raised during client or context construction, before any work starts:
    - COHERE_API_KEY not set
    - Unknown plugin name
    - Config file missing, unparseable or failing schema validation
    """

    pass


class QueryError(CiteRagError):
    """Invalid input (empty text or query, non-positive limits, length mismatch)."""

    pass


class EmbeddingError(CiteRagError):
    """Embedding Service call failed."""

    pass


class EmbeddingCountMismatchError(EmbeddingError):
    """
    An embedding batch returned a different number of vectors than texts sent.

    Fatal for the whole request: partial embeddings cannot be realigned with
    the chunks they belong to.
    """

    def __init__(self, expected: int, actual: int, batch_start: int):
        self.expected = expected
        self.actual = actual
        self.batch_start = batch_start
        super().__init__(
            f"Embedding count mismatch at batch starting {batch_start}: "
            f"expected {expected}, got {actual}"
        )


class VectorStoreError(CiteRagError):
    """
    Vector Store write or query failed.

    For write failures, ``inserted_so_far`` reports how many records earlier
    batches already committed. Those are not rolled back.
    """

    def __init__(self, message: str, inserted_so_far: Optional[int] = None):
        self.inserted_so_far = inserted_so_far
        super().__init__(message)


class RerankError(CiteRagError):
    """Reranking Service call failed."""

    pass


class GenerationError(CiteRagError):
    """Generation Service call failed."""

    pass


class PipelineError(CiteRagError):
    """Pipeline orchestration failed outside a specific collaborator call."""

    pass


__all__ = [
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
