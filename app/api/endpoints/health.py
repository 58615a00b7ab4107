"""Health check endpoints for liveness and readiness probes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_cache
from app.application.interfaces.services import ICacheService
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Cache configured but unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    cache: ICacheService | None = Depends(get_cache),
) -> ReadinessResponse | JSONResponse:
    """Return 200 when Redis is disabled or answers PING; 503 otherwise."""
    if cache is None:
        return ReadinessResponse()
    if await cache.ping():
        return ReadinessResponse(cache="up")
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(message="Redis cache unreachable").model_dump(),
    )
