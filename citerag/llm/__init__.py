# citerag/llm/__init__.py
"""
Model service layer: embedding batcher plus normalization for rerank and chat.

Concrete clients live in citerag.llm.plugins and are created through
get_llm_plugin().
"""

from citerag.llm.chat import NO_ANSWER, ChatPlugin, extract_answer_text
from citerag.llm.embedding import EmbeddingBatcher, EmbeddingPlugin, to_vectors
from citerag.llm.registry import available_llm_plugins, get_llm_plugin
from citerag.llm.rerank import RerankPlugin, ranked_indices, resolve_ranking

__all__ = [
    "NO_ANSWER",
    "ChatPlugin",
    "extract_answer_text",
    "EmbeddingBatcher",
    "EmbeddingPlugin",
    "to_vectors",
    "RerankPlugin",
    "ranked_indices",
    "resolve_ranking",
    "available_llm_plugins",
    "get_llm_plugin",
]
