"""
Product API routes.

Manual entry, edit and delete of an owner's products.
"""

from fastapi import APIRouter, Depends, Query, Response
from typing import Optional
import structlog

from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
)
from routes.dependencies import get_owner, handle_error
from services.product_service import get_product_service

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=ProductListResponse)
async def list_products(
    category: Optional[str] = Query(None, description="Exact category filter"),
    owner: str = Depends(get_owner),
):
    """List the owner's products ordered by name."""
    try:
        service = get_product_service()
        products = service.get_all(owner, category=category)

        return ProductListResponse(data=products, total=len(products))

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, owner: str = Depends(get_owner)):
    """
    Get a single product by its product_id.

    Raises:
        404: Product not found
    """
    try:
        service = get_product_service()
        return service.get_or_raise(owner, product_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(data: ProductCreate, owner: str = Depends(get_owner)):
    """
    Create a new product.

    Raises:
        409: product_id already exists for this owner
        422: Validation error
    """
    try:
        service = get_product_service()
        return service.create(owner, data)

    except Exception as e:
        return handle_error(e)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    owner: str = Depends(get_owner),
):
    """
    Update an existing product.

    Only provided fields are updated.

    Raises:
        404: Product not found
        422: Validation error
    """
    try:
        service = get_product_service()
        return service.update_product(owner, product_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, owner: str = Depends(get_owner)):
    """
    Delete a product permanently.

    Raises:
        404: Product not found
    """
    try:
        service = get_product_service()
        service.delete(owner, product_id)
        return Response(status_code=204)

    except Exception as e:
        return handle_error(e)


@router.get("/count/total")
async def count_products(owner: str = Depends(get_owner)):
    """Get the owner's product count."""
    try:
        service = get_product_service()
        return {"count": service.count(owner)}

    except Exception as e:
        return handle_error(e)
