# citerag/core/records.py
"""
Record shapes flowing through ingestion and question answering.

- DocumentMetadata: document-level fields stamped onto every record of one ingest
- IndexedRecord: what the vector store persists (payload + vector)
- RetrievedHit: read projection of an IndexedRecord plus its distance
- Source: numbered, truncated, citation-ready view of a RetrievedHit
- IngestResult / AnswerResult: what the pipelines hand back to callers
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

# Payload fields persisted alongside every vector (all text except position).
PAYLOAD_FIELDS = (
    "doc_id",
    "chunk_id",
    "source",
    "title",
    "section",
    "position",
    "text",
    "url",
    "published_at",
)


@dataclass(frozen=True)
class DocumentMetadata:
    """Document-level metadata shared by all records from one ingestion call."""

    doc_id: str
    title: str = "Untitled"
    source: str = "upload"
    url: str = ""
    published_at: str = ""


@dataclass(frozen=True)
class IndexedRecord:
    """A chunk as persisted in the vector store. Immutable once written."""

    doc_id: str
    chunk_id: str
    source: str
    title: str
    section: str
    position: int
    text: str
    url: str
    published_at: str
    vector: List[float] = field(repr=False)

    def payload(self) -> Dict[str, Any]:
        """Everything except the vector, keyed by the store schema field names."""
        data = asdict(self)
        data.pop("vector")
        return data


@dataclass(frozen=True)
class RetrievedHit:
    """
    A record returned by a nearest-vector query.

    ``distance`` follows the store's configured metric (cosine distance, so
    smaller is closer). It is None when the store does not report one.
    """

    id: str
    doc_id: str
    chunk_id: str
    text: str
    title: str = ""
    section: str = ""
    position: int = 0
    source: str = ""
    url: str = ""
    published_at: str = ""
    distance: Optional[float] = None

    @classmethod
    def from_payload(
        cls,
        point_id: str,
        payload: Mapping[str, Any],
        distance: Optional[float] = None,
    ) -> "RetrievedHit":
        """Build a hit from a stored payload, tolerating missing optional fields."""
        position = payload.get("position")
        return cls(
            id=str(point_id),
            doc_id=str(payload.get("doc_id") or ""),
            chunk_id=str(payload.get("chunk_id") or point_id),
            text=str(payload.get("text") or ""),
            title=str(payload.get("title") or ""),
            section=str(payload.get("section") or ""),
            position=int(position) if position is not None else 0,
            source=str(payload.get("source") or ""),
            url=str(payload.get("url") or ""),
            published_at=str(payload.get("published_at") or ""),
            distance=distance,
        )


@dataclass(frozen=True)
class Source:
    """
    Citation entry returned to the caller.

    ``n`` is 1-based and matches the ``[n]`` marker used for the same hit in
    the prompt, so ``sources[n - 1]`` is what citation ``[n]`` refers to.
    """

    n: int
    title: str
    section: str
    position: int
    source: str
    url: str
    snippet: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class IngestResult:
    """Outcome of one ingestion call."""

    doc_id: str
    chunks: int
    embedded: int
    inserted_count: int


@dataclass
class AnswerResult:
    """Outcome of one question-answering call."""

    answer_text: str
    sources: List[Source] = field(default_factory=list)
    had_no_result: bool = False
    timing_ms: float = 0.0


__all__ = [
    "PAYLOAD_FIELDS",
    "DocumentMetadata",
    "IndexedRecord",
    "RetrievedHit",
    "Source",
    "IngestResult",
    "AnswerResult",
]
