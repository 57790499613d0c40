"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from src.app.api.http.app_data import ApplicationDependencies
from src.app.api.http.deps import get_app_dependencies
from src.app.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
async def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe.

    Returns 200 when the database answers, 503 otherwise. The cache and
    Redis are reported but never fail readiness.
    """
    config = get_config()
    checks: dict[str, Any] = {}

    db_healthy = await run_in_threadpool(app_deps.database_service.health_check)
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": "sqlite" if config.database.is_sqlite else "sql",
    }

    cache = app_deps.cache_store
    checks["cache"] = {
        "status": "healthy" if cache.is_available() else "degraded",
        "type": cache.backend_name,
    }

    if app_deps.redis_service.is_enabled:
        redis_healthy = await app_deps.redis_service.health_check()
        checks["redis"] = {"status": "healthy" if redis_healthy else "unhealthy"}

    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": checks,
        "environment": config.app.environment,
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
