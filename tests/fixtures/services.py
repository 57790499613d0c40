"""Service and HTTP client fixtures for testing."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine

from src.app.api.http.app_data import ApplicationDependencies
from src.app.api.http.deps import get_app_dependencies
from src.app.core.services import DbSessionService, RedisService
from src.app.core.storage import InMemoryCacheStore


@pytest.fixture
def cache_store(clock) -> InMemoryCacheStore:
    """Fresh in-memory cache driven by the fake clock."""
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def app_dependencies(
    engine: Engine, cache_store: InMemoryCacheStore
) -> ApplicationDependencies:
    return ApplicationDependencies(
        database_service=DbSessionService(engine=engine),
        redis_service=RedisService(),
        cache_store=cache_store,
    )


@pytest.fixture
def client(app_dependencies: ApplicationDependencies) -> Generator[TestClient]:
    """TestClient wired to the in-memory database and cache.

    Lifespan hooks are not run; dependencies are injected through overrides.
    """
    from src.app.api.http.app import app

    app.dependency_overrides[get_app_dependencies] = lambda: app_dependencies
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
