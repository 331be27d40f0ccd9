# citerag/llm/registry.py
"""
Registry of model service plugins.

Usage:
    from citerag.llm.registry import get_llm_plugin

    embedder = get_llm_plugin("embedding", "cohere", model="embed-english-v3.0")
    reranker = get_llm_plugin("rerank", "cohere")
    chat = get_llm_plugin("chat", "cohere", model="command-r-plus")
"""

from __future__ import annotations

import importlib
from typing import Any, Dict, List, Literal, Tuple

from citerag.core.exceptions import ConfigurationError

LLMPluginType = Literal["embedding", "rerank", "chat"]

# (plugin_type, plugin_name) -> "module:ClassName"; imported on first use.
_PLUGINS: Dict[Tuple[str, str], str] = {
    ("embedding", "cohere"): "citerag.llm.plugins.cohere:CohereEmbeddingClient",
    ("rerank", "cohere"): "citerag.llm.plugins.cohere:CohereRerankClient",
    ("chat", "cohere"): "citerag.llm.plugins.cohere:CohereChatClient",
}


def available_llm_plugins(plugin_type: LLMPluginType) -> List[str]:
    return sorted(name for (ptype, name) in _PLUGINS if ptype == plugin_type)


def get_llm_plugin(plugin_type: LLMPluginType, plugin_name: str, **kwargs: Any) -> Any:
    """
    Instantiate a registered plugin.

    Raises:
        ConfigurationError: Unknown plugin, or the plugin's own config check failed
    """
    target = _PLUGINS.get((plugin_type, plugin_name))
    if target is None:
        raise ConfigurationError(
            f"Unknown {plugin_type} plugin: {plugin_name!r}. "
            f"Available: {available_llm_plugins(plugin_type)}"
        )

    module_name, class_name = target.split(":")
    plugin_cls = getattr(importlib.import_module(module_name), class_name)
    return plugin_cls(**kwargs)


__all__ = ["LLMPluginType", "available_llm_plugins", "get_llm_plugin"]
