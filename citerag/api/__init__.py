# citerag/api/__init__.py
"""HTTP surface: POST /ingest, POST /ask, GET /health."""

from citerag.api.app import create_app

__all__ = ["create_app"]
