# citerag/api/routes/ingest.py
"""Document ingestion endpoint."""

from fastapi import APIRouter, Depends

from citerag.api.dependencies import get_context
from citerag.api.error_handlers import handle_api_errors
from citerag.api.schemas import IngestRequest, IngestResponse
from citerag.runtime import AppContext

router = APIRouter(tags=["ingest"])


@router.post("/ingest", response_model=IngestResponse, response_model_by_alias=True)
@handle_api_errors
def ingest(request: IngestRequest, context: AppContext = Depends(get_context)) -> IngestResponse:
    """Chunk, embed and store one document."""
    result = context.ingestion_pipeline().ingest(
        request.text,
        title=request.title,
        source=request.source,
        url=request.url,
        doc_id=request.doc_id,
    )
    return IngestResponse(
        doc_id=result.doc_id,
        chunks=result.chunks,
        embedded=result.embedded,
        inserted_count=result.inserted_count,
    )
