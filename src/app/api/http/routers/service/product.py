"""Product API router with CRUD operations.

Every handler maps its outcome to a status code and JSON body itself:
not-found and validation results are checked explicitly, and any other
exception is logged and answered with a 500 ``ErrorBody``.
"""

from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import TypeAdapter
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from src.app.api.http.deps import (
    get_cache_store,
    get_product_repository,
    read_json_payload,
)
from src.app.api.http.responses import (
    ErrorBody,
    MessageBody,
    error_response,
    json_response,
    unexpected_error_response,
)
from src.app.core.storage import CacheStore
from src.app.core.validation import (
    ProductPayload,
    ValidationFailed,
    validate_product_payload,
)
from src.app.entities.service.product import Product, ProductRepository
from src.app.runtime.context import get_config

router = APIRouter(tags=["Products"])

PRODUCT_NOT_FOUND = "Product not found"

_product_list_adapter = TypeAdapter(list[Product])

_payload_body = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": ProductPayload.model_json_schema()}},
    }
}
_not_found = {404: {"model": ErrorBody, "description": "Product not found"}}
_invalid = {422: {"model": ErrorBody, "description": "Validation failed"}}
_failed = {500: {"model": ErrorBody, "description": "Unexpected failure"}}


@router.get(
    "",
    response_model=list[Product],
    summary="Get all products",
    responses={**_failed},
)
@router.get("/", response_model=list[Product], include_in_schema=False)
async def list_products(
    repository: ProductRepository = Depends(get_product_repository),
    cache: CacheStore = Depends(get_cache_store),
) -> JSONResponse:
    """List all products.

    Served through the cache; writes do not invalidate it, so a listing may
    lag behind by up to the configured TTL.
    """
    cache_config = get_config().cache
    try:
        products = await cache.get_or_compute(
            cache_config.products_key,
            cache_config.products_ttl_seconds,
            lambda: run_in_threadpool(repository.list_all),
            _product_list_adapter,
        )
    except Exception as exc:
        logger.exception("Failed to fetch products")
        return unexpected_error_response("Failed to fetch products", exc)
    return json_response(products)


@router.post(
    "",
    status_code=201,
    response_model=Product,
    summary="Create a new product",
    responses={**_invalid, **_failed},
    openapi_extra=_payload_body,
)
@router.post(
    "/",
    status_code=201,
    response_model=Product,
    include_in_schema=False,
)
def create_product(
    payload: Any = Depends(read_json_payload),
    repository: ProductRepository = Depends(get_product_repository),
) -> JSONResponse:
    """Create a new product."""
    try:
        result = validate_product_payload(payload)
        if isinstance(result, ValidationFailed):
            return error_response(422, result.error, messages=result.messages)
        product = repository.create(result.model_dump())
    except Exception as exc:
        logger.exception("Failed to create product")
        return unexpected_error_response("Failed to create product", exc)

    logger.info("Product created", product_id=product.id)
    return json_response(product, status_code=201)


@router.get(
    "/{product_id}",
    response_model=Product,
    summary="Get a product by ID",
    responses={**_not_found, **_failed},
)
def get_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> JSONResponse:
    """Get a product by ID."""
    try:
        product = repository.get(product_id)
    except Exception as exc:
        logger.exception("Failed to fetch product {}", product_id)
        return unexpected_error_response("Failed to fetch product", exc)

    if product is None:
        return error_response(404, PRODUCT_NOT_FOUND)
    return json_response(product)


@router.put(
    "/{product_id}",
    response_model=Product,
    summary="Update a product",
    responses={**_not_found, **_invalid, **_failed},
    openapi_extra=_payload_body,
)
def update_product(
    product_id: str,
    payload: Any = Depends(read_json_payload),
    repository: ProductRepository = Depends(get_product_repository),
) -> JSONResponse:
    """Replace a product's fields.

    Existence is checked before the body is validated, so an unknown id is a
    404 even when the payload is also invalid.
    """
    try:
        if not repository.exists(product_id):
            return error_response(404, PRODUCT_NOT_FOUND)

        result = validate_product_payload(payload)
        if isinstance(result, ValidationFailed):
            return error_response(422, result.error, messages=result.messages)

        product = repository.update(product_id, result.model_dump())
    except Exception as exc:
        logger.exception("Failed to update product {}", product_id)
        return unexpected_error_response("Failed to update product", exc)

    # Deleted between the existence check and the write
    if product is None:
        return error_response(404, PRODUCT_NOT_FOUND)

    logger.info("Product updated", product_id=product.id)
    return json_response(product)


@router.delete(
    "/{product_id}",
    response_model=MessageBody,
    summary="Delete a product",
    responses={**_not_found, **_failed},
)
def delete_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> JSONResponse:
    """Delete a product."""
    try:
        deleted = repository.delete(product_id)
    except Exception as exc:
        logger.exception("Failed to delete product {}", product_id)
        return unexpected_error_response("Failed to delete product", exc)

    if not deleted:
        return error_response(404, PRODUCT_NOT_FOUND)

    logger.info("Product deleted", product_id=product_id)
    return json_response(MessageBody(message="Product deleted successfully"))
