# citerag/__init__.py
"""
citerag - cited question answering over ingested documents.

    from citerag import AppContext

    ctx = AppContext.from_config_path()
    ctx.ingestion_pipeline().ingest(text, title="Handbook")
    result = ctx.answer_pipeline().answer("How many vacation days?")
"""

__version__ = "0.1.0"

from citerag.core.chunk import Chunk
from citerag.core.exceptions import CiteRagError
from citerag.core.records import AnswerResult, IngestResult, Source
from citerag.ingestion.chunking.chunker import BoundaryChunker, chunk_text
from citerag.runtime import AppContext

__all__ = [
    "__version__",
    "Chunk",
    "CiteRagError",
    "AnswerResult",
    "IngestResult",
    "Source",
    "BoundaryChunker",
    "chunk_text",
    "AppContext",
]
