"""Product Catalog API.

A FastAPI service exposing CRUD endpoints for products, backed by SQLModel
with a read-through cache on the product listing.
"""

__version__ = "0.1.0"
