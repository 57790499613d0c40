"""Database engine and session factory used across the application."""

from typing import Any

from loguru import logger
from sqlalchemy import Engine, text
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.app.runtime.config.config_data import ConfigData
from src.app.runtime.context import get_config


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Initialize the shared database engine and session factory."""
        if engine is not None:
            self._engine = engine
            return

        logger.info("Setting up database engine and session factory")
        main_config = get_config()
        db_config = main_config.database

        engine_kwargs: dict[str, Any] = {
            "pool_pre_ping": True,
            "echo": False,
            "connect_args": self._get_connect_args(main_config),
        }
        if db_config.url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
        elif not db_config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)
        logger.info(
            "Database engine initialized for {} environment",
            main_config.app.environment,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        if config.database.is_sqlite:
            if config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            return {"check_same_thread": False, "timeout": 20}

        if "postgresql" in config.database.url:
            return {
                "application_name": f"{config.app.name}_{config.app.environment}",
                "connect_timeout": 30,
            }

        return {}

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database health check failed: {}: {}", type(e).__name__, e)
            return False

    def dispose(self) -> None:
        self._engine.dispose()
