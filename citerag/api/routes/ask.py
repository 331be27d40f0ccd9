# citerag/api/routes/ask.py
"""Question answering endpoint."""

from fastapi import APIRouter, Depends

from citerag.api.dependencies import get_context
from citerag.api.error_handlers import handle_api_errors
from citerag.api.schemas import AskRequest, AskResponse, SourceInfo
from citerag.runtime import AppContext

router = APIRouter(tags=["ask"])


@router.post("/ask", response_model=AskResponse, response_model_by_alias=True)
@handle_api_errors
def ask(request: AskRequest, context: AppContext = Depends(get_context)) -> AskResponse:
    """
    Answer a question with numbered citations.

    ``sources[n - 1]`` is the passage cited as ``[n]`` in the answer.
    """
    defaults = context.config.ask
    result = context.answer_pipeline().answer(
        request.query,
        top_k=request.top_k or defaults.top_k,
        final_n=request.final_n or defaults.final_n,
        doc_id=request.doc_id,
    )
    return AskResponse(
        answer=result.answer_text,
        sources=[SourceInfo(**s.to_dict()) for s in result.sources],
        timing_ms=result.timing_ms,
    )
