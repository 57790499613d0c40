"""Cache storage abstractions for read-through caching."""

from .cache_store import (
    CacheStore,
    CacheUnavailableError,
    InMemoryCacheStore,
    RedisCacheStore,
    create_cache_store,
)

__all__ = [
    "CacheStore",
    "CacheUnavailableError",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "create_cache_store",
]
