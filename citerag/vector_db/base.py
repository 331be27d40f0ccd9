# citerag/vector_db/base.py
"""
Vector Store protocol.

A store owns one collection of IndexedRecords. Records are immutable once
written: there is no update path, only recreate_index() (drop everything)
followed by new writes.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from citerag.core.records import IndexedRecord, RetrievedHit


@runtime_checkable
class VectorStore(Protocol):
    collection: str

    def ensure_index(self, vector_size: int) -> None:
        """Create the collection (cosine metric) if it does not exist yet."""
        ...

    def recreate_index(self, vector_size: int) -> None:
        """Drop the collection if present, then create it empty."""
        ...

    def delete_index(self) -> bool:
        """Drop the collection. Returns False when it did not exist."""
        ...

    def write_batch(self, records: Sequence[IndexedRecord]) -> Any:
        """Persist one batch. Returns the store's raw confirmation."""
        ...

    def query(
        self,
        vector: List[float],
        limit: int,
        doc_id: Optional[str] = None,
    ) -> List[RetrievedHit]:
        """Nearest records to ``vector``, closest first, optionally scoped to one document."""
        ...


__all__ = ["VectorStore"]
