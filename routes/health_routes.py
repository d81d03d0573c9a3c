"""
Health check endpoint.

GET /health: pings MongoDB and, when configured, Redis.
- MongoDB down → "unhealthy" (503); nothing works without the database.
- Redis down or not configured → "degraded" (200); only insight caching is lost.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from schemas.dto.responses.common import HealthResponse
from shared.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["health"])


async def _check_mongodb(request: Request) -> str:
    try:
        await request.app.state.db.client.admin.command("ping")
    except Exception as e:
        log.error("health_mongodb_error", error=str(e))
        return "error"
    return "ok"


async def _check_redis(request: Request) -> str:
    redis = getattr(request.app.state, "redis", None)
    if redis is None:
        return "not_configured"
    try:
        await redis.ping()
    except Exception as e:
        log.warning("health_redis_error", error=str(e))
        return "error"
    return "ok"


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> JSONResponse:
    checks = {
        "mongodb": await _check_mongodb(request),
        "redis": await _check_redis(request),
    }
    if checks["mongodb"] != "ok":
        status = "unhealthy"
    elif checks["redis"] != "ok":
        status = "degraded"
    else:
        status = "healthy"

    body = HealthResponse(status=status, checks=checks)
    return JSONResponse(
        status_code=503 if status == "unhealthy" else 200,
        content=body.model_dump(),
    )
