# citerag/llm/chat.py
"""
Generation response normalization.

Generation Services put the answer either in a flat ``text`` field or inside
a structured message:

    {"text": "..."}
    {"message": {"content": [{"type": "text", "text": "..."}, ...]}}

extract_answer_text() reduces both to one string.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from citerag.core.utils import as_plain, get_attr

NO_ANSWER = "I don't know."


@runtime_checkable
class ChatPlugin(Protocol):
    """Generation Service client."""

    model: str

    def chat(self, prompt: str, temperature: float) -> Any:
        """Send one prompt; return the raw service response."""
        ...


def extract_answer_text(response: Any, default: str = NO_ANSWER) -> str:
    """
    Extract answer text from a generation response.

    Text parts of a structured message are concatenated in order. Returns
    ``default`` when neither shape yields non-blank text.
    """
    if isinstance(response, str):
        return response if response.strip() else default

    response = as_plain(response)

    text = get_attr(response, "text")
    if isinstance(text, str) and text.strip():
        return text

    content = get_attr(get_attr(response, "message"), "content")
    if isinstance(content, str):
        return content if content.strip() else default

    parts = []
    for part in content or []:
        part_text = part if isinstance(part, str) else get_attr(as_plain(part), "text")
        if isinstance(part_text, str):
            parts.append(part_text)

    joined = "".join(parts)
    return joined if joined.strip() else default


__all__ = ["NO_ANSWER", "ChatPlugin", "extract_answer_text"]
