# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where possible, a suggestion on
# how to fix the request.
#
#   ProductNotFoundError  -> 404
#   request validation    -> 400
#   DatabaseError         -> 500
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProductApiException(Exception):
    """
    Base exception for the Product API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PRODUCT_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Product Exceptions
# =============================================================================

class ProductNotFoundError(ProductApiException):
    """Raised when a product ID doesn't exist."""

    def __init__(self, product_id: str):
        super().__init__(
            message=f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the product id is correct and the product hasn't been deleted",
            details={"product_id": product_id}
        )


# =============================================================================
# Infrastructure Exceptions
# =============================================================================

class DatabaseError(ProductApiException):
    """Raised when the database is unreachable or rejects a query."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Database error while trying to {operation}",
            code="DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def product_api_exception_handler(
    request: Request,
    exc: ProductApiException
) -> JSONResponse:
    """
    Convert ProductApiException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed or missing fields are a client error (400), reported field by
    field so the caller knows what to fix.
    """
    errors = [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(errors),
        }
    )
