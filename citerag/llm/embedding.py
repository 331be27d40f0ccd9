# citerag/llm/embedding.py
"""
Embedding Batcher.

Splits texts into provider-sized batches, calls the embedding plugin once per
batch, normalizes whatever response shape comes back and checks that every
batch returned exactly one vector per text. Output order always matches
input order.

Response shapes accepted by to_vectors():
    [[0.1, ...], [0.2, ...]]                  plain list of vectors
    {"float": [[...], ...], "int8": [...]}    mapping of embedding type -> vectors
    SDK model exposing model_dump()           converted to one of the above
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, List, Literal, Protocol, Tuple, Union, runtime_checkable

from citerag.core.exceptions import CiteRagError, EmbeddingCountMismatchError, EmbeddingError
from citerag.core.utils import as_plain
from citerag.logging.logger import get_logger
from citerag.logging.tags import EMBEDDING

logger = get_logger(__name__)

EmbeddingPurpose = Literal["document", "query"]

Vector = List[float]
EmbeddingsPayload = Union[Sequence[Sequence[float]], Mapping[str, Sequence[Sequence[float]]]]

PRIMARY_EMBEDDING_KEY = "float"
DEFAULT_BATCH_SIZE = 96


# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class EmbeddingPlugin(Protocol):
    """
    Embedding Service client.

    ``model`` identifies the embedding space. Vectors written at ingestion and
    vectors used for queries must come from the same model.
    """

    model: str

    def embed_texts(self, texts: List[str], purpose: EmbeddingPurpose) -> Any:
        """Embed one batch; returns an EmbeddingsPayload (or an SDK object holding one)."""
        ...


# =============================================================================
# Normalization
# =============================================================================


def to_vectors(embeddings: Any) -> List[Vector]:
    """
    Normalize an embeddings payload into a list of float vectors.

    For keyed payloads the primary "float" entry is preferred; otherwise the
    first non-empty entry is used.
    """
    embeddings = as_plain(embeddings)

    if embeddings is None:
        return []

    if isinstance(embeddings, Mapping):
        chosen = embeddings.get(PRIMARY_EMBEDDING_KEY)
        if chosen is None:
            chosen = next((v for v in embeddings.values() if v is not None), None)
        if chosen is None:
            return []
        embeddings = chosen

    if isinstance(embeddings, (str, bytes)) or not isinstance(embeddings, Sequence):
        raise EmbeddingError(f"Unexpected embeddings format: {type(embeddings).__name__}")

    return [[float(x) for x in vector] for vector in embeddings]


def _batches(texts: Sequence[str], size: int) -> List[Tuple[int, List[str]]]:
    return [(i, list(texts[i : i + size])) for i in range(0, len(texts), size)]


# =============================================================================
# Batcher
# =============================================================================


@dataclass
class EmbeddingBatcher:
    """
    Batch-size-constrained embedding with count verification.

    For N texts and batch size B, exactly ceil(N / B) plugin calls are made.
    With ``max_workers > 1`` batches run concurrently; results are still
    concatenated in input order.

    Example:
        >>> batcher = EmbeddingBatcher(plugin, batch_size=96)
        >>> vectors = batcher.embed(["first chunk", "second chunk"], "document")
        >>> [query_vector] = batcher.embed(["what is x?"], "query")
    """

    plugin: EmbeddingPlugin
    batch_size: int = DEFAULT_BATCH_SIZE
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @property
    def model(self) -> str:
        return self.plugin.model

    def embed(self, texts: Sequence[str], purpose: EmbeddingPurpose) -> List[Vector]:
        """
        Embed ``texts`` and return one vector per text, in input order.

        Raises:
            EmbeddingCountMismatchError: A batch returned the wrong number of vectors
            EmbeddingError: The Embedding Service call failed
        """
        if not texts:
            return []

        batches = _batches(texts, self.batch_size)
        logger.info(
            f"{EMBEDDING} Embedding {len(texts)} text(s) in {len(batches)} batch(es) "
            f"(size={self.batch_size}, purpose={purpose}, model={self.model})"
        )

        if self.max_workers > 1 and len(batches) > 1:
            with ThreadPoolExecutor(
                max_workers=min(self.max_workers, len(batches)),
                thread_name_prefix="embed_batch",
            ) as executor:
                results = list(executor.map(lambda b: self._embed_batch(*b, purpose), batches))
        else:
            results = [self._embed_batch(start, batch, purpose) for start, batch in batches]

        vectors: List[Vector] = []
        for batch_vectors in results:
            vectors.extend(batch_vectors)
        return vectors

    def _embed_batch(
        self,
        batch_start: int,
        batch: List[str],
        purpose: EmbeddingPurpose,
    ) -> List[Vector]:
        try:
            raw = self.plugin.embed_texts(batch, purpose)
        except CiteRagError:
            raise
        except Exception as exc:
            logger.error(f"{EMBEDDING} Batch starting {batch_start} failed: {exc}")
            raise EmbeddingError(f"Embedding failed for batch starting {batch_start}") from exc

        vectors = to_vectors(raw)
        if len(vectors) != len(batch):
            logger.error(
                f"{EMBEDDING} Batch starting {batch_start} returned {len(vectors)} "
                f"vector(s) for {len(batch)} text(s)"
            )
            raise EmbeddingCountMismatchError(
                expected=len(batch), actual=len(vectors), batch_start=batch_start
            )

        logger.debug(f"{EMBEDDING} Batch starting {batch_start}: {len(vectors)} vector(s)")
        return vectors


__all__ = [
    "EmbeddingPurpose",
    "EmbeddingsPayload",
    "EmbeddingPlugin",
    "EmbeddingBatcher",
    "to_vectors",
]
