# citerag/vector_db/plugins/memory.py
"""
In-process vector store backed by numpy.

Brute-force cosine distance over every stored vector. Meant for tests and
small local runs; contents vanish with the process.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from citerag.core.exceptions import VectorStoreError
from citerag.core.records import IndexedRecord, RetrievedHit
from citerag.logging.logger import get_logger
from citerag.logging.tags import VECTOR_DB

logger = get_logger(__name__)


@dataclass
class InMemoryVectorStore:
    plugin_name: str = field(default="memory", repr=False)
    collection: str = "DocChunk"

    _records: Optional[Dict[str, IndexedRecord]] = field(init=False, repr=False, default=None)
    _vector_size: Optional[int] = field(init=False, repr=False, default=None)
    _lock: threading.Lock = field(init=False, repr=False, default_factory=threading.Lock)

    @property
    def exists(self) -> bool:
        return self._records is not None

    def __len__(self) -> int:
        return len(self._records or {})

    def ensure_index(self, vector_size: int) -> None:
        with self._lock:
            if self._records is None:
                self._records = {}
                self._vector_size = vector_size
                logger.info(f"{VECTOR_DB} Created in-memory collection '{self.collection}'")

    def recreate_index(self, vector_size: int) -> None:
        with self._lock:
            self._records = {}
            self._vector_size = vector_size

    def delete_index(self) -> bool:
        with self._lock:
            existed = self._records is not None
            self._records = None
            self._vector_size = None
            return existed

    def write_batch(self, records: Sequence[IndexedRecord]) -> List[str]:
        """Store records; returns the ids written (one per record)."""
        with self._lock:
            if self._records is None:
                raise VectorStoreError(f"Collection '{self.collection}' does not exist")
            for record in records:
                if self._vector_size is not None and len(record.vector) != self._vector_size:
                    raise VectorStoreError(
                        f"Vector size {len(record.vector)} does not match "
                        f"collection size {self._vector_size}"
                    )
            for record in records:
                self._records[record.chunk_id] = record
            return [record.chunk_id for record in records]

    def query(
        self,
        vector: List[float],
        limit: int,
        doc_id: Optional[str] = None,
    ) -> List[RetrievedHit]:
        with self._lock:
            if not self._records:
                return []
            candidates = [
                r for r in self._records.values() if not doc_id or r.doc_id == doc_id
            ]

        if not candidates or limit <= 0:
            return []

        matrix = np.asarray([r.vector for r in candidates], dtype=float)
        q = np.asarray(vector, dtype=float)

        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(q)
        norms[norms == 0] = 1.0
        distances = 1.0 - (matrix @ q) / norms

        order = np.argsort(distances, kind="stable")[:limit]
        return [
            RetrievedHit.from_payload(
                candidates[i].chunk_id,
                candidates[i].payload(),
                distance=float(distances[i]),
            )
            for i in order
        ]


__all__ = ["InMemoryVectorStore"]
