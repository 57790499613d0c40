"""Product repository: data access for the products table."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlmodel import Session, select

from src.app.entities.core._base import utc_now

from .entity import Product
from .table import ProductTable

# Columns a caller may write; id and timestamps are owned by the repository
WRITABLE_FIELDS = ("name", "description", "price", "stock")


class ProductRepository:
    """Data-access layer for products.

    Not-found outcomes are returned as ``None``/``False`` rather than raised.
    Each write commits its own transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: ProductTable) -> Product:
        return Product.model_validate(row, from_attributes=True)

    def create(self, fields: Mapping[str, Any]) -> Product:
        row = ProductTable(**{k: fields.get(k) for k in WRITABLE_FIELDS})
        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        logger.debug("Created product {}", row.id)
        return self._to_entity(row)

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self._to_entity(row)

    def exists(self, product_id: str) -> bool:
        return self._session.get(ProductTable, product_id) is not None

    def list_all(self) -> list[Product]:
        statement = select(ProductTable).order_by(ProductTable.created_at)
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def update(self, product_id: str, fields: Mapping[str, Any]) -> Product | None:
        """Replace name, description, price and stock of an existing product."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None

        for key in WRITABLE_FIELDS:
            setattr(row, key, fields.get(key))
        row.updated_at = utc_now()

        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        logger.debug("Updated product {}", row.id)
        return self._to_entity(row)

    def delete(self, product_id: str) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.commit()
        logger.debug("Deleted product {}", product_id)
        return True
