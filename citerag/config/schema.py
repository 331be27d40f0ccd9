# citerag/config/schema.py
"""
Configuration schema for citerag.

This is the single source of truth for configuration shape. Defaults live in
default.yaml; the models here validate the merged result.

Schema hierarchy:
- CiteRagConfig: root
  - EmbeddingConfig, RerankConfig, ChatConfig: model service plugins
  - VectorDBConfig: vector store plugin and write batching
  - ChunkingConfig: chunker budgets
  - AskConfig: retrieval/rerank limits
  - LoggingConfig: log level
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Model Services
# =============================================================================


class EmbeddingConfig(BaseModel):
    """Embedding Service settings. ``model`` fixes the embedding space."""

    plugin_name: str = Field("cohere", description="Embedding plugin name")
    model: str = Field("embed-english-v3.0", description="Embedding model identifier")
    batch_size: int = Field(96, ge=1, description="Provider batch-size limit")
    max_workers: int = Field(1, ge=1, description="Concurrent embedding batches")

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class RerankConfig(BaseModel):
    """Reranking Service settings."""

    plugin_name: str = Field("cohere", description="Rerank plugin name")
    model: str = Field("rerank-english-v3.0", description="Rerank model identifier")

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class ChatConfig(BaseModel):
    """Generation Service settings."""

    plugin_name: str = Field("cohere", description="Chat plugin name")
    model: str = Field("command-r-plus", description="Generation model identifier")
    temperature: float = Field(0.2, ge=0.0, le=2.0, description="Sampling temperature")

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


# =============================================================================
# Vector Store
# =============================================================================


class VectorDBConfig(BaseModel):
    """
    Vector store settings.

    Example YAML:
        vector_db:
          plugin_name: qdrant
          collection: DocChunk
          url: http://localhost:6333
          upsert_batch_size: 200
    """

    plugin_name: Literal["qdrant", "memory"] = Field("qdrant", description="Store plugin")
    collection: str = Field("DocChunk", min_length=1, description="Collection (index) name")
    url: str = Field("http://localhost:6333", description="Store endpoint")
    vector_size: int = Field(1024, ge=1, description="Dimension used by init-index")
    upsert_batch_size: int = Field(200, ge=1, description="Records per write batch")
    max_workers: int = Field(1, ge=1, description="Concurrent write batches")

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Pipelines
# =============================================================================


class ChunkingConfig(BaseModel):
    """Chunker budgets, in approximate tokens (4 chars per token)."""

    chunk_tokens: int = Field(1000, ge=1)
    overlap_tokens: int = Field(150, ge=0)
    max_chunks: Optional[int] = Field(800, ge=0, description="Hard cap; null for no cap")

    model_config = ConfigDict(extra="forbid")


class AskConfig(BaseModel):
    """Default limits for question answering."""

    top_k: int = Field(12, ge=1, description="Candidates retrieved from the store")
    final_n: int = Field(6, ge=1, description="Candidates kept after reranking")

    model_config = ConfigDict(extra="forbid")


class LoggingConfig(BaseModel):
    level: str = Field("INFO")

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v!r}")
        return level


# =============================================================================
# Root
# =============================================================================


class CiteRagConfig(BaseModel):
    """Root configuration consumed by AppContext."""

    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    rerank: RerankConfig = Field(default_factory=RerankConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    vector_db: VectorDBConfig = Field(default_factory=VectorDBConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    ask: AskConfig = Field(default_factory=AskConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "EmbeddingConfig",
    "RerankConfig",
    "ChatConfig",
    "VectorDBConfig",
    "ChunkingConfig",
    "AskConfig",
    "LoggingConfig",
    "CiteRagConfig",
]
