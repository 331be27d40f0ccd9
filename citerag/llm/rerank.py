# citerag/llm/rerank.py
"""
Reranking normalization.

The Reranking Service returns an ordering as indices into the candidate list,
most relevant first. resolve_ranking() maps those indices back to the
candidates, keeping the service's order and dropping indices that do not
resolve to a candidate.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, List, Protocol, TypeVar, runtime_checkable

from citerag.core.utils import as_plain, get_attr
from citerag.logging.logger import get_logger
from citerag.logging.tags import RERANK

logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class RerankPlugin(Protocol):
    """Reranking Service client."""

    def rerank(self, query: str, documents: List[str], top_n: int) -> Any:
        """Return ranked results: ints, or items carrying an ``index`` field."""
        ...


def ranked_indices(results: Any) -> List[Any]:
    """
    Normalize a rerank response into a list of raw indices, in service order.

    Accepts a plain list of ints, a list of ``{"index": i}`` mappings or
    objects with an ``index`` attribute, or a response holding ``results``.
    """
    results = as_plain(results)

    if isinstance(results, Mapping) or (
        results is not None and not isinstance(results, Sequence)
    ):
        results = get_attr(results, "results", default=[])

    indices: List[Any] = []
    for item in results or []:
        if isinstance(item, (int, float, str)):
            indices.append(item)
        else:
            indices.append(get_attr(as_plain(item), "index"))
    return indices


def resolve_ranking(indices: Sequence[Any], candidates: Sequence[T]) -> List[T]:
    """
    Map ranked indices back to candidates.

    Indices that are not integers, fall outside ``candidates`` or repeat an
    earlier index are dropped with a warning. Fewer indices than requested is
    not an error.
    """
    picked: List[T] = []
    seen: set[int] = set()
    dropped: List[Any] = []

    for raw in indices:
        if isinstance(raw, bool) or not isinstance(raw, int):
            dropped.append(raw)
            continue
        if raw < 0 or raw >= len(candidates) or raw in seen:
            dropped.append(raw)
            continue
        seen.add(raw)
        picked.append(candidates[raw])

    if dropped:
        logger.warning(
            f"{RERANK} Dropped {len(dropped)} unresolvable index(es) from rerank "
            f"response: {dropped}"
        )
    return picked


__all__ = ["RerankPlugin", "ranked_indices", "resolve_ranking"]
