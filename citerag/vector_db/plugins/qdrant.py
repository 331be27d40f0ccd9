# citerag/vector_db/plugins/qdrant.py
"""
Qdrant vector store.

Collections use unnamed cosine vectors. Each record's chunk_id (a UUID) is
the point id; everything else goes into the payload, with a keyword index on
doc_id so scoped queries stay cheap.

Environment variables:
    QDRANT_URL: server URL when none is configured (default: http://localhost:6333)
    QDRANT_API_KEY: API key for secured deployments (optional)

Qdrant reports cosine *similarity*; query() converts it to distance
(1 - score) so that smaller is closer across all stores.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from qdrant_client import QdrantClient
from qdrant_client.http import models

from citerag.core.exceptions import ConfigurationError, VectorStoreError
from citerag.core.records import IndexedRecord, RetrievedHit
from citerag.logging.logger import get_logger
from citerag.logging.tags import VECTOR_DB

logger = get_logger(__name__)

URL_ENV_VAR = "QDRANT_URL"
API_KEY_ENV_VAR = "QDRANT_API_KEY"
DEFAULT_URL = "http://localhost:6333"

DOC_ID_FIELD = "doc_id"


@dataclass
class QdrantVectorStore:
    """
    Usage:
        store = QdrantVectorStore(url="http://localhost:6333", collection="DocChunk")
        store.ensure_index(vector_size=1024)
    """

    plugin_name: str = field(default="qdrant", repr=False)
    collection: str = "DocChunk"
    url: Optional[str] = None
    api_key: Optional[str] = field(default=None, repr=False)
    timeout: int = 30

    _client: Any = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self.url = self.url or os.getenv(URL_ENV_VAR) or DEFAULT_URL
        self.api_key = self.api_key or os.getenv(API_KEY_ENV_VAR)

        try:
            self._client = QdrantClient(url=self.url, api_key=self.api_key, timeout=self.timeout)
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize Qdrant client for {self.url}") from e

    # =========================================================================
    # Collection Management
    # =========================================================================

    def _exists(self) -> bool:
        try:
            return bool(self._client.collection_exists(self.collection))
        except Exception as e:
            raise VectorStoreError(f"Cannot reach Qdrant at {self.url}: {e}") from e

    def _create(self, vector_size: int) -> None:
        logger.info(
            f"{VECTOR_DB} Creating collection '{self.collection}' (dim={vector_size}, cosine)"
        )
        try:
            self._client.create_collection(
                collection_name=self.collection,
                vectors_config=models.VectorParams(
                    size=vector_size,
                    distance=models.Distance.COSINE,
                ),
            )
            self._client.create_payload_index(
                collection_name=self.collection,
                field_name=DOC_ID_FIELD,
                field_schema=models.PayloadSchemaType.KEYWORD,
            )
        except Exception as e:
            raise VectorStoreError(
                f"Failed to create collection '{self.collection}': {e}"
            ) from e

    def ensure_index(self, vector_size: int) -> None:
        if self._exists():
            logger.debug(f"{VECTOR_DB} Collection '{self.collection}' already exists")
            return
        self._create(vector_size)

    def recreate_index(self, vector_size: int) -> None:
        self.delete_index()
        self._create(vector_size)

    def delete_index(self) -> bool:
        if not self._exists():
            return False
        try:
            self._client.delete_collection(collection_name=self.collection)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to delete collection '{self.collection}': {e}"
            ) from e
        logger.info(f"{VECTOR_DB} Deleted collection '{self.collection}'")
        return True

    # =========================================================================
    # Core Operations
    # =========================================================================

    def write_batch(self, records: Sequence[IndexedRecord]) -> Any:
        points = [
            models.PointStruct(
                id=record.chunk_id,
                vector=list(record.vector),
                payload=record.payload(),
            )
            for record in records
        ]
        return self._client.upsert(
            collection_name=self.collection,
            points=points,
            wait=True,
        )

    def query(
        self,
        vector: List[float],
        limit: int,
        doc_id: Optional[str] = None,
    ) -> List[RetrievedHit]:
        if not self._exists():
            logger.warning(
                f"{VECTOR_DB} Collection '{self.collection}' does not exist; nothing to retrieve"
            )
            return []

        query_filter = None
        if doc_id:
            query_filter = models.Filter(
                must=[
                    models.FieldCondition(
                        key=DOC_ID_FIELD,
                        match=models.MatchValue(value=doc_id),
                    )
                ]
            )

        try:
            result = self._client.query_points(
                collection_name=self.collection,
                query=list(vector),
                limit=limit,
                query_filter=query_filter,
                with_payload=True,
            )
        except Exception as e:
            raise VectorStoreError(f"Query against '{self.collection}' failed: {e}") from e

        return [
            RetrievedHit.from_payload(
                point.id,
                point.payload or {},
                distance=None if point.score is None else 1.0 - float(point.score),
            )
            for point in result.points
        ]


__all__ = ["QdrantVectorStore"]
