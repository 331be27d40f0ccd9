# citerag/api/error_handlers.py
"""
API error handling.

Routes are wrapped with handle_api_errors so every failure leaves the API as
``{"ok": false, "error": "..."}`` with a status chosen by exception type:

    QueryError          -> 400
    ConfigurationError  -> 500
    PipelineError       -> 500 (internal failure outside a service call)
    other CiteRagError  -> 502 (an upstream service failed)
    anything else       -> 500
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from citerag.core.exceptions import CiteRagError, ConfigurationError, PipelineError, QueryError
from citerag.logging.logger import get_logger
from citerag.logging.tags import API

logger = get_logger(__name__)

T = TypeVar("T")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def status_for(exc: Exception) -> int:
    if isinstance(exc, QueryError):
        return 400
    if isinstance(exc, (ConfigurationError, PipelineError)):
        return 500
    if isinstance(exc, CiteRagError):
        return 502
    return 500


def handle_api_errors(fn: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator for standardized API error handling.

    Usage:
        @router.post("/ask")
        @handle_api_errors
        def ask(request: AskRequest, ...):
            ...
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except HTTPException:
            raise
        except CiteRagError as e:
            status = status_for(e)
            logger.error(f"{API} {fn.__name__} failed ({status}): {e}")
            return error_response(status, str(e))
        except Exception as e:
            logger.exception(f"{API} Unexpected error in {fn.__name__}: {e}")
            return error_response(500, "Internal server error")

    return wrapper


__all__ = ["error_response", "status_for", "handle_api_errors"]
