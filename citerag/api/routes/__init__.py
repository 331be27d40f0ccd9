# citerag/api/routes/__init__.py
from citerag.api.routes.ask import router as ask_router
from citerag.api.routes.health import router as health_router
from citerag.api.routes.ingest import router as ingest_router

__all__ = ["ask_router", "health_router", "ingest_router"]
