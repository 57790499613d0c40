from dataclasses import dataclass

from src.app.core.services import DbSessionService, RedisService
from src.app.core.storage import CacheStore


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    redis_service: RedisService
    cache_store: CacheStore
