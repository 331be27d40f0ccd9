# citerag/ingestion/pipeline.py
"""
Ingestion orchestration.

Flow:
    text ─► BoundaryChunker ─► EmbeddingBatcher (purpose="document")
         ─► VectorStore.ensure_index ─► VectorUpsertPipeline ─► IngestResult

Ingestion is not transactional: if an upsert batch fails, earlier batches
stay in the store and the raised VectorStoreError says how many.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from citerag.core.exceptions import CiteRagError, PipelineError, QueryError
from citerag.core.records import DocumentMetadata, IngestResult
from citerag.ingestion.chunking.chunker import BoundaryChunker
from citerag.llm.embedding import EmbeddingBatcher
from citerag.logging.logger import get_logger
from citerag.logging.tags import INGEST
from citerag.vector_db.writer import VectorUpsertPipeline

logger = get_logger(__name__)


@dataclass
class IngestionPipeline:
    """
    Chunk, embed and store one document.

    Usage:
        pipeline = IngestionPipeline(chunker, embedder, writer)
        result = pipeline.ingest(text, title="Refund policy", url="https://example.com/refunds")
        print(result.doc_id, result.inserted_count)
    """

    chunker: BoundaryChunker
    embedder: EmbeddingBatcher
    writer: VectorUpsertPipeline

    def ingest(
        self,
        text: str,
        title: str = "Untitled",
        source: str = "upload",
        url: Optional[str] = None,
        doc_id: Optional[str] = None,
    ) -> IngestResult:
        """
        Raises:
            QueryError: Empty text
            EmbeddingError: Embedding failed or returned the wrong vector count
            VectorStoreError: A write batch failed
            PipelineError: Any other unexpected failure
        """
        if not text or not text.strip():
            raise QueryError("Text must not be empty")

        metadata = DocumentMetadata(
            doc_id=doc_id or str(uuid.uuid4()),
            title=title or "Untitled",
            source=source or "upload",
            url=url or "",
            published_at="",
        )

        try:
            return self._ingest(text, metadata)
        except CiteRagError:
            raise
        except Exception as e:
            logger.error(f"{INGEST} Ingestion failed for doc_id='{metadata.doc_id}': {e}")
            raise PipelineError(f"Ingestion pipeline failed: {e}") from e

    def _ingest(self, text: str, metadata: DocumentMetadata) -> IngestResult:
        chunks = self.chunker.chunk(text)
        logger.info(f"{INGEST} doc_id='{metadata.doc_id}': {len(chunks)} chunk(s)")
        if not chunks:
            return IngestResult(doc_id=metadata.doc_id, chunks=0, embedded=0, inserted_count=0)

        vectors = self.embedder.embed([c.text for c in chunks], purpose="document")

        self.writer.store.ensure_index(len(vectors[0]))
        inserted = self.writer.upsert(chunks, vectors, metadata)

        logger.info(
            f"{INGEST} doc_id='{metadata.doc_id}': embedded={len(vectors)}, inserted={inserted}"
        )
        return IngestResult(
            doc_id=metadata.doc_id,
            chunks=len(chunks),
            embedded=len(vectors),
            inserted_count=inserted,
        )


__all__ = ["IngestionPipeline"]
