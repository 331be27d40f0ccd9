# citerag/vector_db/registry.py
"""
Vector store plugin registry.

Usage:
    from citerag.vector_db.registry import get_vector_store

    store = get_vector_store("qdrant", url="http://localhost:6333", collection="DocChunk")
"""

from __future__ import annotations

import importlib
from typing import Any, Dict, List

from citerag.core.exceptions import ConfigurationError

_PLUGINS: Dict[str, str] = {
    "qdrant": "citerag.vector_db.plugins.qdrant:QdrantVectorStore",
    "memory": "citerag.vector_db.plugins.memory:InMemoryVectorStore",
}


def available_vector_stores() -> List[str]:
    return sorted(_PLUGINS)


def get_vector_store(plugin_name: str, **kwargs: Any) -> Any:
    """Instantiate a vector store plugin by name."""
    target = _PLUGINS.get(plugin_name)
    if target is None:
        raise ConfigurationError(
            f"Unknown vector_db plugin: {plugin_name!r}. "
            f"Available: {available_vector_stores()}"
        )

    module_name, class_name = target.split(":")
    store_cls = getattr(importlib.import_module(module_name), class_name)
    return store_cls(**kwargs)


__all__ = ["available_vector_stores", "get_vector_store"]
