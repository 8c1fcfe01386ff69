# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .product_service import ProductService, product_cache_key, PRODUCT_LIST_KEY

__all__ = [
    "ProductService",
    "product_cache_key",
    "PRODUCT_LIST_KEY",
]
