# citerag/engine/prompt.py
"""
Prompt assembly for cited answers.

Snippets are numbered [1], [2], ... in the order given. That order is the
reranked order, and Source.n uses the same numbering, so a marker [n] in the
answer always refers to sources[n - 1].
"""

from __future__ import annotations

from typing import Sequence

from citerag.core.records import RetrievedHit
from citerag.llm.chat import NO_ANSWER

PROMPT_SNIPPET_CHARS = 900

PROMPT_TEMPLATE = """You are a helpful assistant answering strictly from the provided context.
Add inline citations like [1], [2] at the END of sentences that use that source.
If the answer is not in the context, say "{no_answer}" Do not fabricate.

Question: {question}

Context:
{context}

Answer (concise, with citations):"""


def format_metadata(hit: RetrievedHit) -> str:
    """``Title - Section (source: url, #position)``; section and url only when set."""
    label = hit.title or "Untitled"
    if hit.section:
        label += f" - {hit.section}"

    origin = hit.source
    if hit.url:
        origin += f": {hit.url}"

    return f"{label} ({origin}, #{hit.position})"


def format_snippet(hit: RetrievedHit) -> str:
    return f"{hit.text[:PROMPT_SNIPPET_CHARS]}\n- {format_metadata(hit)}"


def build_prompt(query: str, hits: Sequence[RetrievedHit]) -> str:
    context = "\n\n".join(
        f"[{n}] {format_snippet(hit)}" for n, hit in enumerate(hits, start=1)
    )
    return PROMPT_TEMPLATE.format(no_answer=NO_ANSWER, question=query, context=context)


__all__ = [
    "PROMPT_SNIPPET_CHARS",
    "PROMPT_TEMPLATE",
    "format_metadata",
    "format_snippet",
    "build_prompt",
]
