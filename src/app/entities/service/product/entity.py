"""Entity: Product."""

from typing import Any

from pydantic import Field

from src.app.entities.core._base import Entity


class Product(Entity):
    """Product entity representing an item in the catalog.

    This is the domain model returned by the repository and serialized by the
    API. It inherits from Entity to get auto-generated UUID identifiers and
    audit timestamps.
    """

    name: str = Field(description="Product name", max_length=255)
    description: str | None = Field(default=None, description="Free-form description")
    price: float = Field(description="Unit price")
    stock: int = Field(description="Units in stock")

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
            and self.stock == other.stock
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.description,
            self.price,
            self.stock,
        ))
