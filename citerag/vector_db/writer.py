# citerag/vector_db/writer.py
"""
Vector Upsert Pipeline.

Turns (chunk, vector) pairs plus document metadata into IndexedRecords and
writes them to a VectorStore in fixed-size batches.

Stores report success in different shapes; confirmed_count() reads the
number of records a batch confirmed from any of them:
    [obj, obj, ...]                    one entry per written record
    {"results": {"objects": [...]}}    nested object list
    {"count": 3}                       explicit count
    {"status": "completed"}            whole batch confirmed
Anything else confirms nothing.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, List, Tuple

from citerag.core.chunk import Chunk
from citerag.core.exceptions import QueryError, VectorStoreError
from citerag.core.records import DocumentMetadata, IndexedRecord
from citerag.core.utils import as_plain, extract_path, get_attr
from citerag.logging.logger import get_logger
from citerag.logging.tags import VECTOR_DB
from citerag.vector_db.base import VectorStore

logger = get_logger(__name__)

DEFAULT_UPSERT_BATCH_SIZE = 200

_CONFIRMED_STATUSES = {"completed", "acknowledged"}


# =============================================================================
# Utility Functions
# =============================================================================


def build_records(
    chunks: Sequence[Chunk],
    vectors: Sequence[Sequence[float]],
    metadata: DocumentMetadata,
) -> List[IndexedRecord]:
    """
    Pair chunks with vectors. Each record gets a fresh chunk_id.

    Chunk position and section are carried over; everything else comes from
    the document metadata.
    """
    return [
        IndexedRecord(
            doc_id=metadata.doc_id,
            chunk_id=str(uuid.uuid4()),
            source=metadata.source,
            title=metadata.title,
            section=chunk.section,
            position=chunk.position,
            text=chunk.text,
            url=metadata.url,
            published_at=metadata.published_at,
            vector=[float(x) for x in vector],
        )
        for chunk, vector in zip(chunks, vectors)
    ]


def confirmed_count(response: Any, sent: int) -> int:
    """Number of records a write_batch response confirms."""
    response = as_plain(response)

    if response is None:
        return 0
    if isinstance(response, Sequence) and not isinstance(response, (str, bytes)):
        return len(response)

    objects = extract_path(response, "results.objects")
    if isinstance(objects, Sequence) and not isinstance(objects, (str, bytes)):
        return len(objects)

    count = get_attr(response, "count")
    if isinstance(count, int) and not isinstance(count, bool):
        return count

    status = get_attr(response, "status")
    status = getattr(status, "value", status)
    if isinstance(status, str) and status.lower() in _CONFIRMED_STATUSES:
        return sent

    return 0


# =============================================================================
# Pipeline
# =============================================================================


@dataclass
class VectorUpsertPipeline:
    """
    Batched writer for one VectorStore.

    Batches run in order unless max_workers > 1. On a batch failure earlier
    batches stay committed and VectorStoreError reports how many made it.
    """

    store: VectorStore
    batch_size: int = DEFAULT_UPSERT_BATCH_SIZE
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.max_workers <= 0:
            raise ValueError("max_workers must be positive")

    def upsert(
        self,
        chunks: Sequence[Chunk],
        vectors: Sequence[Sequence[float]],
        metadata: DocumentMetadata,
    ) -> int:
        """
        Write all chunks and return the number of records the store confirmed.

        Raises:
            QueryError: chunks and vectors differ in length
            VectorStoreError: A batch write failed
        """
        if len(chunks) != len(vectors):
            raise QueryError(
                f"Got {len(chunks)} chunks but {len(vectors)} vectors"
            )
        if not chunks:
            return 0

        records = build_records(chunks, vectors, metadata)
        batches = [
            (start, records[start : start + self.batch_size])
            for start in range(0, len(records), self.batch_size)
        ]

        logger.info(
            f"{VECTOR_DB} Upserting {len(records)} records for doc_id='{metadata.doc_id}' "
            f"into '{self.store.collection}' ({len(batches)} batches)"
        )

        if self.max_workers > 1 and len(batches) > 1:
            inserted = self._write_parallel(batches)
        else:
            inserted = 0
            for batch in batches:
                inserted += self._write_batch(batch, inserted)

        if inserted < len(records):
            logger.warning(
                f"{VECTOR_DB} Store confirmed {inserted} of {len(records)} records "
                f"for doc_id='{metadata.doc_id}'"
            )
        else:
            logger.debug(f"{VECTOR_DB} Upserted {inserted} records")

        return inserted

    def _write_parallel(self, batches: List[Tuple[int, List[IndexedRecord]]]) -> int:
        inserted = 0
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self._write_batch, batch, None) for batch in batches]
            failure = None
            for future in futures:
                try:
                    inserted += future.result()
                except VectorStoreError as e:
                    failure = failure or e

        if failure is not None:
            raise VectorStoreError(str(failure), inserted_so_far=inserted) from failure
        return inserted

    def _write_batch(
        self,
        batch: Tuple[int, List[IndexedRecord]],
        inserted_so_far: Any,
    ) -> int:
        start, records = batch
        try:
            response = self.store.write_batch(records)
        except Exception as e:
            logger.error(f"{VECTOR_DB} Batch starting at record {start} failed: {e}")
            raise VectorStoreError(
                f"Batch starting at record {start} failed: {e}",
                inserted_so_far=inserted_so_far,
            ) from e

        return confirmed_count(response, len(records))


__all__ = [
    "DEFAULT_UPSERT_BATCH_SIZE",
    "build_records",
    "confirmed_count",
    "VectorUpsertPipeline",
]
