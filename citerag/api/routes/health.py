# citerag/api/routes/health.py
from __future__ import annotations

from fastapi import APIRouter

from citerag.api.dependencies import get_version
from citerag.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(version=get_version())
