"""Core services exports."""

from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .redis_service import RedisService

__all__ = [
    "DbManageService",
    "DbSessionService",
    "RedisService",
]
