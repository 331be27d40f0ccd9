# citerag/runtime.py
"""
Application-lifetime context.

AppContext owns every external client for one process: the embedding,
rerank and chat plugins and the vector store handle. Each is created on
first use, exactly once, even when several threads ask at the same time.
Pipelines are cheap and built per call from these shared clients.

Usage:
    ctx = AppContext.from_config_path("citerag.yaml")
    result = ctx.answer_pipeline().answer("What changed in v2?")
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, Optional, Union

from citerag.config.loader import load_config
from citerag.config.schema import CiteRagConfig
from citerag.engine.pipeline import AnswerPipeline
from citerag.ingestion.chunking.chunker import BoundaryChunker
from citerag.ingestion.pipeline import IngestionPipeline
from citerag.llm.embedding import EmbeddingBatcher
from citerag.llm.registry import get_llm_plugin
from citerag.logging.logger import get_logger
from citerag.logging.tags import PIPELINE
from citerag.vector_db.registry import get_vector_store
from citerag.vector_db.writer import VectorUpsertPipeline

logger = get_logger(__name__)


class AppContext:
    """
    Lazily built, thread-safe holder of the process-wide clients.

    Any client can be injected up front (tests pass fakes this way); injected
    clients are used as-is and never rebuilt.
    """

    def __init__(
        self,
        config: Optional[CiteRagConfig] = None,
        *,
        embedding_plugin: Any = None,
        rerank_plugin: Any = None,
        chat_plugin: Any = None,
        vector_store: Any = None,
    ):
        self.config = config or CiteRagConfig()
        self._embedding_plugin = embedding_plugin
        self._rerank_plugin = rerank_plugin
        self._chat_plugin = chat_plugin
        self._vector_store = vector_store
        self._lock = threading.Lock()

    @classmethod
    def from_config_path(cls, path: Optional[Union[str, Path]] = None) -> "AppContext":
        return cls(load_config(path))

    def _get_or_create(self, attr: str, factory: Callable[[], Any]) -> Any:
        value = getattr(self, attr)
        if value is not None:
            return value
        with self._lock:
            value = getattr(self, attr)
            if value is None:
                value = factory()
                setattr(self, attr, value)
        return value

    # =========================================================================
    # Clients
    # =========================================================================

    @property
    def embedding_plugin(self) -> Any:
        cfg = self.config.embedding
        return self._get_or_create(
            "_embedding_plugin",
            lambda: get_llm_plugin("embedding", cfg.plugin_name, model=cfg.model),
        )

    @property
    def rerank_plugin(self) -> Any:
        cfg = self.config.rerank
        return self._get_or_create(
            "_rerank_plugin",
            lambda: get_llm_plugin("rerank", cfg.plugin_name, model=cfg.model),
        )

    @property
    def chat_plugin(self) -> Any:
        cfg = self.config.chat
        return self._get_or_create(
            "_chat_plugin",
            lambda: get_llm_plugin("chat", cfg.plugin_name, model=cfg.model),
        )

    @property
    def vector_store(self) -> Any:
        return self._get_or_create("_vector_store", self._create_vector_store)

    def _create_vector_store(self) -> Any:
        cfg = self.config.vector_db
        logger.info(f"{PIPELINE} Connecting vector store '{cfg.plugin_name}' ({cfg.collection})")
        if cfg.plugin_name == "memory":
            return get_vector_store("memory", collection=cfg.collection)
        return get_vector_store(cfg.plugin_name, collection=cfg.collection, url=cfg.url)

    # =========================================================================
    # Pipelines
    # =========================================================================

    def chunker(self) -> BoundaryChunker:
        cfg = self.config.chunking
        return BoundaryChunker(
            chunk_tokens=cfg.chunk_tokens,
            overlap_tokens=cfg.overlap_tokens,
            max_chunks=cfg.max_chunks,
        )

    def embedder(self) -> EmbeddingBatcher:
        cfg = self.config.embedding
        return EmbeddingBatcher(
            self.embedding_plugin,
            batch_size=cfg.batch_size,
            max_workers=cfg.max_workers,
        )

    def ingestion_pipeline(self) -> IngestionPipeline:
        # Resolve every client first so configuration errors surface before any work.
        embedder = self.embedder()
        cfg = self.config.vector_db
        writer = VectorUpsertPipeline(
            self.vector_store,
            batch_size=cfg.upsert_batch_size,
            max_workers=cfg.max_workers,
        )
        return IngestionPipeline(chunker=self.chunker(), embedder=embedder, writer=writer)

    def answer_pipeline(self) -> AnswerPipeline:
        return AnswerPipeline(
            embedder=self.embedder(),
            store=self.vector_store,
            reranker=self.rerank_plugin,
            chat=self.chat_plugin,
            temperature=self.config.chat.temperature,
        )


__all__ = ["AppContext"]
