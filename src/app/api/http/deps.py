"""FastAPI dependency implementations."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from fastapi import Depends, Request
from loguru import logger
from sqlmodel import Session

from src.app.api.http.app_data import ApplicationDependencies
from src.app.core.storage import CacheStore
from src.app.entities.service.product import ProductRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a database session scoped to the request."""
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_cache_store(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> CacheStore:
    """Get the cache store selected at startup."""
    return app_deps.cache_store


def get_product_repository(db: Session = Depends(get_db_session)) -> ProductRepository:
    return ProductRepository(db)


async def read_json_payload(request: Request) -> Any:
    """Parse the request body as JSON.

    An empty or malformed body yields an empty object so the validator
    reports every required field.
    """
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.info("Request body is not valid JSON; treating it as empty")
        return {}
