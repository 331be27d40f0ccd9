# citerag/llm/plugins/cohere.py
"""
Cohere clients for embedding, reranking and generation (ClientV2).

Each client resolves its API key from the constructor or COHERE_API_KEY and
raises ConfigurationError when neither is set. SDK failures are wrapped in
the matching citerag error; nothing is retried.

Responses are returned raw. Shape normalization lives next to each
collaborator's protocol (llm/embedding.py, llm/rerank.py, llm/chat.py).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import cohere

from citerag.core.exceptions import (
    ConfigurationError,
    EmbeddingError,
    GenerationError,
    RerankError,
)
from citerag.llm.embedding import EmbeddingPurpose
from citerag.logging.logger import get_logger
from citerag.logging.tags import CHAT, EMBEDDING, RERANK

logger = get_logger(__name__)

API_KEY_ENV_VAR = "COHERE_API_KEY"

# Cohere encodes queries and documents differently.
_INPUT_TYPES: Dict[str, str] = {
    "document": "search_document",
    "query": "search_query",
}


def _resolve_api_key(api_key: Optional[str]) -> str:
    key = api_key or os.getenv(API_KEY_ENV_VAR)
    if not key:
        raise ConfigurationError(f"{API_KEY_ENV_VAR} is not set")
    return key


def _create_client(api_key: Optional[str]) -> "cohere.ClientV2":
    key = _resolve_api_key(api_key)
    try:
        return cohere.ClientV2(api_key=key)
    except Exception as e:
        raise ConfigurationError("Failed to initialize Cohere client") from e


@dataclass
class CohereEmbeddingClient:
    """Cohere embedding plugin."""

    plugin_name: str = field(default="cohere", repr=False)
    api_key: Optional[str] = field(default=None, repr=False)
    model: str = "embed-english-v3.0"

    def __post_init__(self) -> None:
        self._client = _create_client(self.api_key)

    def embed_texts(self, texts: List[str], purpose: EmbeddingPurpose) -> Any:
        if purpose not in _INPUT_TYPES:
            raise ValueError(f"Unknown embedding purpose: {purpose!r}")

        try:
            res = self._client.embed(
                model=self.model,
                texts=texts,
                input_type=_INPUT_TYPES[purpose],
                embedding_types=["float"],
            )
        except Exception as e:
            logger.error(f"{EMBEDDING} Cohere embed failed: {e}")
            raise EmbeddingError(f"Cohere embed request failed: {e}") from e

        return res.embeddings


@dataclass
class CohereRerankClient:
    """Cohere rerank plugin."""

    plugin_name: str = field(default="cohere", repr=False)
    api_key: Optional[str] = field(default=None, repr=False)
    model: str = "rerank-english-v3.0"

    def __post_init__(self) -> None:
        self._client = _create_client(self.api_key)

    def rerank(self, query: str, documents: List[str], top_n: int) -> Any:
        try:
            res = self._client.rerank(
                model=self.model,
                query=query,
                documents=documents,
                top_n=top_n,
            )
        except Exception as e:
            logger.error(f"{RERANK} Cohere rerank failed: {e}")
            raise RerankError(f"Cohere rerank request failed: {e}") from e

        return res.results


@dataclass
class CohereChatClient:
    """Cohere chat plugin. The whole prompt goes in one user message."""

    plugin_name: str = field(default="cohere", repr=False)
    api_key: Optional[str] = field(default=None, repr=False)
    model: str = "command-r-plus"

    def __post_init__(self) -> None:
        self._client = _create_client(self.api_key)

    def chat(self, prompt: str, temperature: float) -> Any:
        try:
            return self._client.chat(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
            )
        except Exception as e:
            logger.error(f"{CHAT} Cohere chat failed: {e}")
            raise GenerationError(f"Cohere chat request failed: {e}") from e


__all__ = [
    "API_KEY_ENV_VAR",
    "CohereEmbeddingClient",
    "CohereRerankClient",
    "CohereChatClient",
]
