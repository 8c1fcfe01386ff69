# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - product.py: Product create/update/response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .product import (
    MAX_PRICE,
    Product,
    ProductCreate,
    ProductUpdate,
)

__all__ = [
    "MAX_PRICE",
    "Product",
    "ProductCreate",
    "ProductUpdate",
]
