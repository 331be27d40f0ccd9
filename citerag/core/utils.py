# citerag/core/utils.py
"""
Helpers for reading heterogeneous upstream responses.

SDK responses arrive as pydantic models, plain objects or dicts depending on
the provider and its version. These helpers read them uniformly so the
normalization functions in llm/ and vector_db/ stay small.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any


def get_attr(obj: Any, *keys: str, default: Any = None) -> Any:
    """
    Get a field from a mapping or an object, trying ``keys`` in order.

    Returns the first value that is not None, or ``default``.

    Examples:
        >>> get_attr({"text": "hi"}, "content", "text")
        'hi'
        >>> get_attr(object(), "text", default="")
        ''
    """
    if obj is None:
        return default

    is_mapping = isinstance(obj, Mapping)
    for key in keys:
        val = obj.get(key) if is_mapping else getattr(obj, key, None)
        if val is not None:
            return val
    return default


def extract_path(data: Any, path: str, *, default: Any = None) -> Any:
    """
    Extract a nested value using dot/bracket notation.

    Missing keys, out-of-range indices and type mismatches return ``default``.

    Examples:
        >>> extract_path({"message": {"content": [{"text": "A"}]}}, "message.content[0].text")
        'A'
        >>> extract_path({"results": {}}, "results.objects", default=[])
        []
    """
    if not path:
        return data

    parts = [p for p in re.split(r"\.|\[|\]", path) if p]

    current = data
    for part in parts:
        if current is None:
            return default
        if isinstance(current, Mapping):
            if part not in current:
                return default
            current = current[part]
        elif isinstance(current, (list, tuple)):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return default
        elif hasattr(current, part):
            current = getattr(current, part)
        else:
            return default

    return default if current is None else current


def as_plain(obj: Any) -> Any:
    """
    Convert pydantic-style SDK models to plain dicts (by alias); pass others through.

    Aliases matter for fields that shadow Python builtins, e.g. an SDK field
    ``float_`` serialized as ``"float"``.
    """
    dump = getattr(obj, "model_dump", None)
    if callable(dump):
        return dump(by_alias=True, exclude_none=True)
    return obj


__all__ = ["get_attr", "extract_path", "as_plain"]
