# =============================================================================
# app/routers/products.py - Product CRUD Endpoints
# =============================================================================
# Handles product creation, retrieval, update and deletion.
# Request bodies are validated by the Pydantic models before any database
# or cache access happens.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Response, status

from core.models.product import Product, ProductCreate, ProductUpdate
from core.services.product_service import ProductService

router = APIRouter()

ProductId = Annotated[UUID, Path(description="Product UUID")]


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(request: ProductCreate, response: Response):
    """
    Create a new product.

    The id and timestamps are generated by the server. The Location header
    points at the new product.
    """
    product = ProductService.create_product(request)
    response.headers["Location"] = f"/products/{product.id}"
    return product


@router.get("", response_model=list[Product])
def list_products():
    """
    List all products, most recently updated first.
    """
    return ProductService.list_products()


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: ProductId):
    """
    Get a single product.
    """
    return ProductService.get_product(product_id)


@router.put("/{product_id}", response_model=Product)
def replace_product(product_id: ProductId, request: ProductCreate):
    """
    Replace a product.

    name, description and price are all required and overwrite the
    stored values. updated_at is refreshed.
    """
    return ProductService.replace_product(product_id, request)


@router.patch("/{product_id}", response_model=Product)
def update_product(product_id: ProductId, request: ProductUpdate):
    """
    Partially update a product.

    Only the fields present in the body change. An empty body returns the
    product as it is.
    """
    return ProductService.update_product(product_id, request)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: ProductId):
    """
    Delete a product permanently.
    """
    ProductService.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
