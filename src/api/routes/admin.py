"""
Admin / observability endpoints
===============================

GET /api/v1/admin/health -- liveness plus the active backend configuration
"""

from fastapi import APIRouter, Request

from src.api.schemas import HealthResponse

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(request: Request):
    settings = request.app.state.settings
    return HealthResponse(
        store_backend=settings.store_backend,
        push_enabled=request.app.state.dispatcher is not None,
    )
