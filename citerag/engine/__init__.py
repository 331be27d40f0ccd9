# citerag/engine/__init__.py
"""Question answering: prompt assembly and the retrieval-rerank-answer pipeline."""

from citerag.engine.pipeline import AnswerPipeline, build_sources, rerank_document
from citerag.engine.prompt import build_prompt, format_snippet

__all__ = [
    "AnswerPipeline",
    "build_sources",
    "rerank_document",
    "build_prompt",
    "format_snippet",
]
