# citerag/api/dependencies.py
"""Shared dependencies for API routes."""

from __future__ import annotations

from fastapi import Request

from citerag.runtime import AppContext


def get_context(request: Request) -> AppContext:
    """The AppContext created with the app; one per process."""
    return request.app.state.context


def get_version() -> str:
    from citerag import __version__

    return __version__
