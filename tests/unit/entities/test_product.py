"""Data layer tests for the Product entity, table and repository.

Repository tests run against an in-memory SQLite database.
"""

from uuid import UUID

from sqlmodel import select

from src.app.entities.service.product import Product, ProductRepository, ProductTable


class TestProductEntity:
    """Test Product domain entity."""

    def test_product_creation_with_defaults(self):
        product = Product(name="Laptop", price=1500, stock=10)

        UUID(product.id)  # Raises ValueError if invalid
        assert product.description is None
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_product_equality_ignores_timestamps(self):
        first = Product(id="1", name="Laptop", price=1500, stock=10)
        second = Product(id="1", name="Laptop", price=1500, stock=10)
        other = Product(id="2", name="Laptop", price=1500, stock=10)

        assert first == second
        assert hash(first) == hash(second)
        assert first != other

    def test_product_serialization(self):
        product = Product(id="abc", name="Pen", description="Blue", price=1.5, stock=3)
        data = product.model_dump(mode="json")

        assert set(data) == {
            "id",
            "name",
            "description",
            "price",
            "stock",
            "created_at",
            "updated_at",
        }
        assert data["price"] == 1.5


class TestProductRepository:
    """Test ProductRepository against a real database."""

    def test_create_assigns_id_and_timestamps(self, session, product_fields):
        repository = ProductRepository(session)

        product = repository.create(product_fields)

        UUID(product.id)
        assert product.name == "Laptop"
        assert product.description == "Gaming Laptop"
        assert product.price == 1500.0
        assert product.stock == 10
        assert product.created_at is not None
        assert session.get(ProductTable, product.id) is not None

    def test_create_ignores_non_writable_fields(self, session, product_fields):
        repository = ProductRepository(session)

        product = repository.create({**product_fields, "id": "forged"})

        assert product.id != "forged"

    def test_get_returns_stored_product(self, session, product_fields):
        repository = ProductRepository(session)
        created = repository.create(product_fields)

        fetched = repository.get(created.id)

        assert fetched == created

    def test_get_missing_returns_none(self, session):
        assert ProductRepository(session).get("does-not-exist") is None

    def test_exists(self, session, product_fields):
        repository = ProductRepository(session)
        created = repository.create(product_fields)

        assert repository.exists(created.id) is True
        assert repository.exists("does-not-exist") is False

    def test_list_all_in_creation_order(self, session, product_fields):
        repository = ProductRepository(session)
        first = repository.create(product_fields)
        second = repository.create({**product_fields, "name": "Smartphone"})

        products = repository.list_all()

        assert [p.id for p in products] == [first.id, second.id]

    def test_list_all_empty(self, session):
        assert ProductRepository(session).list_all() == []

    def test_update_replaces_fields(self, session, product_fields):
        repository = ProductRepository(session)
        created = repository.create(product_fields)

        updated = repository.update(
            created.id, {"name": "Updated Laptop", "price": 1800.99, "stock": 5}
        )

        assert updated is not None
        assert updated.id == created.id
        assert updated.name == "Updated Laptop"
        assert updated.price == 1800.99
        assert updated.stock == 5
        # Full replacement: an omitted description is cleared
        assert updated.description is None
        assert updated.updated_at >= created.updated_at
        assert repository.get(created.id) == updated

    def test_update_missing_returns_none(self, session, product_fields):
        assert ProductRepository(session).update("does-not-exist", product_fields) is None

    def test_delete(self, session, product_fields):
        repository = ProductRepository(session)
        created = repository.create(product_fields)

        assert repository.delete(created.id) is True
        assert repository.get(created.id) is None
        assert session.exec(select(ProductTable)).all() == []

    def test_delete_missing_returns_false(self, session):
        assert ProductRepository(session).delete("does-not-exist") is False
