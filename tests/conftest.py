# tests/conftest.py
"""
Shared fixtures.

No test talks to a real service: embedding, rerank and chat are replaced by
deterministic fakes and the vector store is the in-memory backend.
"""

from __future__ import annotations

import re
import threading
from typing import Any, Dict, List, Optional

import pytest

from citerag.config.schema import CiteRagConfig
from citerag.core.chunk import Chunk
from citerag.core.records import DocumentMetadata
from citerag.llm.embedding import EmbeddingBatcher
from citerag.runtime import AppContext
from citerag.vector_db.plugins.memory import InMemoryVectorStore
from citerag.vector_db.writer import VectorUpsertPipeline

_WORD = re.compile(r"[a-z0-9]+")


# =============================================================================
# Fakes
# =============================================================================


class FakeEmbeddingPlugin:
    """
    Bag-of-words embedder.

    Every distinct word gets its own dimension (until ``dimension`` runs out),
    so texts sharing no words have cosine similarity 0.
    """

    def __init__(self, dimension: int = 512, model: str = "fake-embed"):
        self.dimension = dimension
        self.model = model
        self.calls: List[Dict[str, Any]] = []
        self._vocab: Dict[str, int] = {}
        self._lock = threading.Lock()

    def _index(self, word: str) -> int:
        with self._lock:
            return self._vocab.setdefault(word, len(self._vocab) % self.dimension)

    def vector(self, text: str) -> List[float]:
        vec = [0.0] * self.dimension
        for word in _WORD.findall(text.lower()):
            vec[self._index(word)] += 1.0
        return vec

    def embed_texts(self, texts: List[str], purpose: str) -> List[List[float]]:
        self.calls.append({"texts": list(texts), "purpose": purpose})
        return [self.vector(t) for t in texts]


class FakeRerankPlugin:
    """Returns ``indices`` if set, else the identity order truncated to top_n."""

    def __init__(self, indices: Optional[List[Any]] = None):
        self.indices = indices
        self.calls: List[Dict[str, Any]] = []

    def rerank(self, query: str, documents: List[str], top_n: int) -> List[Dict[str, Any]]:
        self.calls.append({"query": query, "documents": list(documents), "top_n": top_n})
        order = self.indices if self.indices is not None else list(range(top_n))
        return [{"index": i, "relevance_score": 1.0} for i in order]


class FakeChatPlugin:
    """Answers with a fixed reply, wrapped the way structured chat responses are."""

    def __init__(self, reply: str = "Nightjar is the codename [1]."):
        self.model = "fake-chat"
        self.reply = reply
        self.prompts: List[str] = []
        self.temperatures: List[float] = []

    def chat(self, prompt: str, temperature: float) -> Dict[str, Any]:
        self.prompts.append(prompt)
        self.temperatures.append(temperature)
        return {"message": {"role": "assistant", "content": [{"type": "text", "text": self.reply}]}}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_embedding_plugin() -> FakeEmbeddingPlugin:
    return FakeEmbeddingPlugin()


@pytest.fixture
def fake_rerank_plugin() -> FakeRerankPlugin:
    return FakeRerankPlugin()


@pytest.fixture
def fake_chat_plugin() -> FakeChatPlugin:
    return FakeChatPlugin()


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore(collection="TestChunks")


@pytest.fixture
def embedder(fake_embedding_plugin) -> EmbeddingBatcher:
    return EmbeddingBatcher(fake_embedding_plugin, batch_size=4)


@pytest.fixture
def index_texts(memory_store, embedder):
    """Write ``texts`` as consecutive chunks of one document into the memory store."""

    def _index(texts: List[str], doc_id: str = "doc-1", title: str = "Doc", section: str = "body"):
        chunks = [Chunk(text=t, section=section, position=i) for i, t in enumerate(texts)]
        vectors = embedder.embed([c.text for c in chunks], purpose="document")
        memory_store.ensure_index(len(vectors[0]))
        writer = VectorUpsertPipeline(memory_store, batch_size=2)
        return writer.upsert(chunks, vectors, DocumentMetadata(doc_id=doc_id, title=title))

    return _index


@pytest.fixture
def test_config() -> CiteRagConfig:
    return CiteRagConfig(
        vector_db={"plugin_name": "memory", "collection": "TestChunks"},
        chunking={"chunk_tokens": 100, "overlap_tokens": 15, "max_chunks": 800},
        embedding={"batch_size": 4},
    )


@pytest.fixture
def app_context(
    test_config,
    fake_embedding_plugin,
    fake_rerank_plugin,
    fake_chat_plugin,
    memory_store,
) -> AppContext:
    return AppContext(
        test_config,
        embedding_plugin=fake_embedding_plugin,
        rerank_plugin=fake_rerank_plugin,
        chat_plugin=fake_chat_plugin,
        vector_store=memory_store,
    )
