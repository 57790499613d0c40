"""FastAPI application setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from src.app.api.http.app_data import ApplicationDependencies
from src.app.api.http.routers.health import router as health_router
from src.app.api.http.routers.service.product import router as product_router
from src.app.api.utils.app_startup import configure_logging
from src.app.core.services import DbManageService, DbSessionService, RedisService
from src.app.core.storage import create_cache_store
from src.app.runtime.context import get_config

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Product Catalog API",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

# --- CORS configuration ---
if get_config().app.environment == "production" and (
    "*" in get_config().app.cors.origins
):
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            # Handlers answer their own failures; this only sees escapes
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal Server Error"},
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Router registration ---
app.include_router(health_router)
app.include_router(product_router, prefix="/api/products")


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService()
    if config.database.create_tables:
        await run_in_threadpool(DbManageService(database_service.engine).create_all)

    redis_service = RedisService()
    cache_store = await create_cache_store(config, redis_service.get_client())

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        redis_service=redis_service,
        cache_store=cache_store,
    )


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is None:
        return
    await app_dependencies.redis_service.close()
    app_dependencies.database_service.dispose()
