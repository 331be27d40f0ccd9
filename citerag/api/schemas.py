# citerag/api/schemas.py
"""Pydantic models for API requests and responses (camelCase on the wire)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IngestRequest(_Model):
    """Request to ingest one document."""

    text: str = Field(..., min_length=1, description="Raw document text")
    title: str = Field("Untitled", description="Document title")
    source: str = Field("upload", description="Where the document came from")
    url: Optional[str] = Field(None, description="Canonical document URL")
    doc_id: Optional[str] = Field(None, alias="docId", description="Stable document id")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class IngestResponse(_Model):
    ok: bool = True
    doc_id: str
    chunks: int
    embedded: int
    inserted_count: int = Field(..., alias="insertedCount")


class AskRequest(_Model):
    """Request to answer a question from indexed documents."""

    query: str = Field(..., min_length=1, description="The question to ask")
    top_k: Optional[int] = Field(None, alias="topK", ge=1, description="Candidates to retrieve")
    final_n: Optional[int] = Field(None, alias="finalN", ge=1, description="Candidates after rerank")
    doc_id: Optional[str] = Field(None, alias="docId", description="Restrict to one document")

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class SourceInfo(_Model):
    """A cited source; ``n`` matches the [n] marker in the answer."""

    n: int
    title: str
    section: str
    position: int
    source: str
    url: str
    snippet: str


class AskResponse(_Model):
    ok: bool = True
    answer: str
    sources: List[SourceInfo] = Field(default_factory=list)
    timing_ms: float = Field(..., alias="timingMs")


class HealthResponse(_Model):
    ok: bool = True
    version: str
