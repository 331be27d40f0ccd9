# citerag/vector_db/__init__.py
"""
Vector store layer.

- VectorStore: protocol every backend implements
- VectorUpsertPipeline: batched, order-preserving writer
- get_vector_store(): backend factory ("qdrant", "memory")
"""

from citerag.vector_db.base import VectorStore
from citerag.vector_db.registry import available_vector_stores, get_vector_store
from citerag.vector_db.writer import VectorUpsertPipeline, build_records, confirmed_count

__all__ = [
    "VectorStore",
    "VectorUpsertPipeline",
    "build_records",
    "confirmed_count",
    "available_vector_stores",
    "get_vector_store",
]
