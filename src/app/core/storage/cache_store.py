"""Cache store interface and implementations.

Provides a small TTL key-value capability used as a read-through cache in
front of expensive queries, with a Redis backend and an in-memory fallback.
Values are stored as JSON text so both backends hold identical data.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from src.app.runtime.config.config_data import ConfigData

T = TypeVar("T")


class CacheUnavailableError(RuntimeError):
    """Raised when the cache backend cannot serve a request."""


class CacheStore(ABC):
    """Abstract interface for cache backends."""

    backend_name: str = "unknown"

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the raw cached value, or None if missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a raw value that expires after ``ttl_seconds``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key if present."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the backend is healthy."""

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: int,
        compute: Callable[[], Awaitable[T]],
        adapter: TypeAdapter[T],
    ) -> T:
        """Return the live value under ``key`` or compute, store and return it.

        ``compute`` is only awaited on a miss. A cached payload that no longer
        matches ``adapter`` is treated as a miss and overwritten.

        Args:
            key: Cache key
            ttl_seconds: Lifetime of a freshly computed value
            compute: Coroutine factory producing the value on a miss
            adapter: Pydantic adapter used to serialize and restore the value
        """
        raw = await self.get(key)
        if raw is not None:
            try:
                value = adapter.validate_json(raw)
            except ValidationError:
                logger.warning("Discarding undecodable cache entry {}", key)
            else:
                logger.debug("Cache hit for {}", key)
                return value

        logger.debug("Cache miss for {}", key)
        value = await compute()
        await self.set(key, adapter.dump_json(value).decode("utf-8"), ttl_seconds)
        return value


class InMemoryCacheStore(CacheStore):
    """In-memory cache with TTL support, local to the process."""

    backend_name = "in-memory"

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._data: dict[str, dict[str, Any]] = {}
        self._clock = clock

    async def get(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None

        if self._clock() >= entry["expires_at"]:
            del self._data[key]
            return None

        return entry["value"]

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._data[key] = {
            "value": value,
            "expires_at": self._clock() + ttl_seconds,
        }

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def cleanup_expired(self) -> int:
        """Remove expired entries and return how many were dropped."""
        now = self._clock()
        expired_keys = [
            key for key, entry in self._data.items() if now >= entry["expires_at"]
        ]
        for key in expired_keys:
            del self._data[key]
        return len(expired_keys)

    def is_available(self) -> bool:
        """In-memory storage is always available."""
        return True


class RedisCacheStore(CacheStore):
    """Redis-based cache relying on server-side key expiry."""

    backend_name = "redis"

    def __init__(self, redis_client):
        self._redis = redis_client
        self._available = True

    async def get(self, key: str) -> str | None:
        try:
            data = await self._redis.get(key)
        except Exception as e:
            self._available = False
            raise CacheUnavailableError(f"Redis get failed: {e}") from e

        self._available = True
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return data

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._redis.setex(key, ttl_seconds, value)
            self._available = True
        except Exception as e:
            self._available = False
            raise CacheUnavailableError(f"Redis set failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
            self._available = True
        except Exception as e:
            self._available = False
            raise CacheUnavailableError(f"Redis delete failed: {e}") from e

    def is_available(self) -> bool:
        return self._available

    async def ping(self) -> bool:
        """Test Redis connection health."""
        try:
            await self._redis.ping()
            self._available = True
            return True
        except Exception:
            self._available = False
            return False


async def create_cache_store(config: ConfigData, redis_client=None) -> CacheStore:
    """Build the cache backend selected by ``config.cache.backend``.

    ``auto`` uses Redis when a client is available and answers PING, and the
    in-memory store otherwise. ``redis`` fails instead of falling back.
    """
    backend = config.cache.backend

    if backend == "memory":
        logger.info("Cache store: in-memory (configured)")
        return InMemoryCacheStore()

    if redis_client is not None:
        redis_store = RedisCacheStore(redis_client)
        if await redis_store.ping():
            logger.info("Cache store: Redis connected")
            return redis_store
        reason = "Redis ping failed"
    else:
        reason = "Redis not configured"

    if backend == "redis":
        raise CacheUnavailableError(f"Redis cache backend required but unusable: {reason}")

    logger.warning("{}; using in-memory cache store", reason)
    return InMemoryCacheStore()
