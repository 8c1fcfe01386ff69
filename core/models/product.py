# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the API contract for product operations:
# - ProductCreate: Input for creating (POST) or replacing (PUT) a product
# - ProductUpdate: Input for partially updating (PATCH) a product
# - Product: Output when returning product data to clients (also cached)
#
# id, created_at and updated_at are generated by the database and are never
# accepted from clients.
# =============================================================================

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Prices are stored in a PostgreSQL INT column
MAX_PRICE = 2_147_483_647

# Smallest currency unit (e.g. cents), accepted only as a JSON integer
Price = Annotated[int, Field(ge=0, le=MAX_PRICE, strict=True)]


def _require_name(value: str) -> str:
    if not value.strip():
        raise ValueError("name must not be blank")
    return value


class ProductCreate(BaseModel):
    """
    Schema for creating or fully replacing a product.

    Example:
        {
            "name": "Widget",
            "description": "A widget",
            "price": 500
        }
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(
        ...,
        min_length=1,
        description="Product name (must not be blank)",
        examples=["Widget"],
    )

    # May be empty, but must be present
    description: str = Field(
        ...,
        description="Free-form product description",
        examples=["A widget"],
    )

    price: Price = Field(
        ...,
        description="Price in the smallest currency unit",
        examples=[500],
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _require_name(value)


class ProductUpdate(BaseModel):
    """
    Schema for partially updating a product.

    Only the fields present in the request body change; omitted fields keep
    their stored value. Sending null for a field is rejected.

    Example:
        {
            "price": 750
        }
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: Price | None = None

    @field_validator("name", "description", "price", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("field may be omitted but not null")
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _require_name(value)

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually supplied."""
        return self.model_dump(exclude_unset=True)


class Product(BaseModel):
    """
    Schema for returning product data to clients.

    Returned by every product endpoint and stored as JSON in the cache.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Widget",
            "description": "A widget",
            "price": 500,
            "created_at": "2025-12-10T02:48:04Z",
            "updated_at": "2025-12-10T02:48:04Z"
        }
    """

    id: UUID = Field(..., description="Unique product identifier")
    name: str
    description: str
    price: int
    created_at: datetime = Field(..., description="When the product was created")
    updated_at: datetime = Field(..., description="When the product was last modified")

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Product":
        """Build a Product from a products table row."""
        return cls.model_validate(row)
