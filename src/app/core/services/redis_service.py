"""Redis connection service for managing Redis client lifecycle and health checks."""

import redis.asyncio as redis_async
from loguru import logger
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff

from src.app.runtime.context import get_config


class RedisService:
    """Service for managing the Redis connection lifecycle.

    Holds the shared asyncio client used by the Redis cache backend. When Redis
    is disabled or has no URL the service stays inert and ``get_client``
    returns None.
    """

    def __init__(self):
        logger.info("Setting up Redis service")
        config = get_config()
        redis_config = config.redis

        self._enabled = redis_config.enabled
        self._client = None
        self._url = redis_config.url

        if not self._enabled:
            logger.info("Redis is disabled, service will not connect")
            return

        if not self._url:
            logger.warning("Redis URL not configured, service will not connect")
            self._enabled = False
            return

        logger.info(
            "Initializing Redis client with connection string: {}",
            redis_config.sanitized_connection_string,
        )

        retry = Retry(ExponentialBackoff(base=1, cap=10), retries=3)

        self._client = redis_async.from_url(
            redis_config.connection_string,
            encoding="utf-8",
            decode_responses=redis_config.decode_responses,
            max_connections=redis_config.max_connections,
            socket_timeout=redis_config.socket_timeout,
            socket_connect_timeout=redis_config.socket_connect_timeout,
            health_check_interval=30,
            retry=retry,
            client_name=config.app.name,
        )

    def get_client(self):
        """Get the Redis async client instance, or None when disabled."""
        if not self._enabled:
            return None
        return self._client

    async def health_check(self) -> bool:
        """Return True if Redis answers PING."""
        if not self._enabled or not self._client:
            return False

        try:
            await self._client.ping()
            return True
        except Exception as e:
            logger.error("Redis health check failed: {}: {}", type(e).__name__, e)
            return False

    async def close(self) -> None:
        """Close the Redis connection and clean up resources."""
        if self._client:
            try:
                logger.info("Closing Redis connection")
                await self._client.aclose()
            except Exception as e:
                logger.error("Error closing Redis connection: {}", e)
            finally:
                self._client = None

    @property
    def is_enabled(self) -> bool:
        return self._enabled
