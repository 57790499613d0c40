"""Table bootstrapping for the product catalog."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables that do not exist yet."""
        from src.app.entities.service.product import ProductTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

