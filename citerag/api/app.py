# citerag/api/app.py
"""
FastAPI application factory.

Run with:
    uvicorn citerag.api.app:create_app --factory
or:
    citerag serve
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from citerag.api.error_handlers import error_response
from citerag.api.routes import ask_router, health_router, ingest_router
from citerag.logging.logger import configure_logging, get_logger
from citerag.logging.tags import API
from citerag.runtime import AppContext

logger = get_logger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{where}: {first.get('msg', 'invalid value')}" if where else first.get("msg", "")
    else:
        message = "Invalid request"
    logger.info(f"{API} Rejected {request.url.path}: {message}")
    return error_response(400, message)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Create the API app around one AppContext.

    Without an explicit context, configuration is loaded from CITERAG_CONFIG
    (or the packaged defaults).
    """
    from citerag import __version__

    app = FastAPI(
        title="citerag",
        description="Cited question answering over ingested documents",
        version=__version__,
    )
    app.state.context = context or AppContext.from_config_path()
    configure_logging(app.state.context.config.logging.level)

    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(health_router)
    app.include_router(ingest_router)
    app.include_router(ask_router)

    return app


__all__ = ["create_app"]
