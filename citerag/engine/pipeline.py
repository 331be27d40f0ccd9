# citerag/engine/pipeline.py
"""
Retrieval-Rerank-Answer Pipeline.

Flow:
    query ─► embed (purpose="query") ─► vector query (top_k, optional doc_id)
          ─► rerank (top min(final_n, hits)) ─► numbered prompt ─► chat
          ─► answer text + numbered sources

Zero hits, or a rerank that resolves to nothing, short-circuits to
"I don't know." with no sources; rerank and chat are then never called.
Every stage is a hard dependency of the next; the first failure aborts.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from citerag.core.exceptions import CiteRagError, PipelineError, QueryError
from citerag.core.records import AnswerResult, RetrievedHit, Source
from citerag.engine.prompt import build_prompt
from citerag.llm.chat import NO_ANSWER, ChatPlugin, extract_answer_text
from citerag.llm.embedding import EmbeddingBatcher
from citerag.llm.rerank import RerankPlugin, ranked_indices, resolve_ranking
from citerag.logging.logger import get_logger
from citerag.logging.tags import CHAT, PIPELINE, RERANK
from citerag.vector_db.base import VectorStore

logger = get_logger(__name__)

DEFAULT_TOP_K = 12
DEFAULT_FINAL_N = 6
SOURCE_SNIPPET_CHARS = 300
ELLIPSIS = "…"


# =============================================================================
# Helpers
# =============================================================================


def rerank_document(hit: RetrievedHit) -> str:
    """Composite string sent to the reranker: ``title - section: text``."""
    prefix = ""
    if hit.title:
        prefix += f"{hit.title} - "
    if hit.section:
        prefix += f"{hit.section}: "
    return prefix + hit.text


def truncate_snippet(text: str, limit: int = SOURCE_SNIPPET_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def build_sources(hits: Sequence[RetrievedHit]) -> List[Source]:
    """One Source per hit, numbered from 1 in the given order."""
    return [
        Source(
            n=n,
            title=hit.title or "Untitled",
            section=hit.section,
            position=hit.position,
            source=hit.source,
            url=hit.url,
            snippet=truncate_snippet(hit.text),
        )
        for n, hit in enumerate(hits, start=1)
    ]


# =============================================================================
# Pipeline
# =============================================================================


@dataclass
class AnswerPipeline:
    """
    Answers a question from indexed records with numbered citations.

    Usage:
        pipeline = AnswerPipeline(embedder, store, reranker, chat)
        result = pipeline.answer("What is the refund window?", doc_id="policy-7")
        print(result.answer_text)
        for src in result.sources:
            print(src.n, src.title)
    """

    embedder: EmbeddingBatcher
    store: VectorStore
    reranker: RerankPlugin
    chat: ChatPlugin
    temperature: float = 0.2

    def answer(
        self,
        query: str,
        top_k: int = DEFAULT_TOP_K,
        final_n: int = DEFAULT_FINAL_N,
        doc_id: Optional[str] = None,
    ) -> AnswerResult:
        """
        Raises:
            QueryError: Empty query or non-positive top_k / final_n
            EmbeddingError, VectorStoreError, RerankError, GenerationError:
                The corresponding stage failed
        """
        if not query or not query.strip():
            raise QueryError("Query must not be empty")
        if top_k <= 0 or final_n <= 0:
            raise QueryError("top_k and final_n must be positive")

        t0 = time.perf_counter()
        scope = f" doc_id='{doc_id}'" if doc_id else ""
        logger.info(f"{PIPELINE} Answering query (top_k={top_k}, final_n={final_n}){scope}")

        try:
            return self._answer(query, top_k, final_n, doc_id or None, t0)
        except CiteRagError:
            raise
        except Exception as e:
            logger.error(f"{PIPELINE} Answer failed: {e}")
            raise PipelineError(f"Answer pipeline failed: {e}") from e

    def _answer(
        self,
        query: str,
        top_k: int,
        final_n: int,
        doc_id: Optional[str],
        t0: float,
    ) -> AnswerResult:
        # 1) embed query
        query_vector = self.embedder.embed([query], purpose="query")[0]

        # 2) retrieve
        hits = self.store.query(query_vector, limit=top_k, doc_id=doc_id)
        logger.info(f"{PIPELINE} Retrieved {len(hits)} hits")
        if not hits:
            return self._no_result(t0)

        # 3) rerank
        top_n = min(final_n, len(hits))
        response = self.reranker.rerank(
            query,
            [rerank_document(hit) for hit in hits],
            top_n,
        )
        picked = resolve_ranking(ranked_indices(response), hits)
        logger.info(f"{RERANK} Picked {len(picked)} of {len(hits)} hits")
        if not picked:
            return self._no_result(t0)

        # 4) prompt + 5) generate
        prompt = build_prompt(query, picked)
        response = self.chat.chat(prompt, temperature=self.temperature)
        answer_text = extract_answer_text(response)
        logger.debug(f"{CHAT} Answer has {len(answer_text)} chars")

        # 6) sources, numbered like the prompt
        result = AnswerResult(
            answer_text=answer_text,
            sources=build_sources(picked),
            timing_ms=_elapsed_ms(t0),
        )
        logger.info(f"{PIPELINE} Answered with {len(result.sources)} sources in {result.timing_ms:.0f}ms")
        return result

    def _no_result(self, t0: float) -> AnswerResult:
        logger.info(f"{PIPELINE} No usable context; answering '{NO_ANSWER}'")
        return AnswerResult(
            answer_text=NO_ANSWER,
            sources=[],
            had_no_result=True,
            timing_ms=_elapsed_ms(t0),
        )


def _elapsed_ms(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000.0


__all__ = [
    "DEFAULT_TOP_K",
    "DEFAULT_FINAL_N",
    "SOURCE_SNIPPET_CHARS",
    "rerank_document",
    "truncate_snippet",
    "build_sources",
    "AnswerPipeline",
]
