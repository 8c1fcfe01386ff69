# =============================================================================
# core/services/product_service.py - Product Business Logic
# =============================================================================
# Handles product CRUD operations on top of the database and the cache.
# Separates HTTP concerns from database/cache access.
#
# Reads are cache-aside: try Redis, fall back to the database and populate
# the cache on a miss. Mutations invalidate the affected keys:
#   products       - the full list
#   products:{id}  - a single product
# =============================================================================

import logging
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from app.exceptions import DatabaseError, ProductNotFoundError
from core.models.product import Product, ProductCreate, ProductUpdate
from lib.redis_cache import RedisCache
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

PRODUCT_LIST_KEY = "products"

_product_list = TypeAdapter(list[Product])


def product_cache_key(product_id: str | UUID) -> str:
    """Cache key for a single product."""
    return f"{PRODUCT_LIST_KEY}:{product_id}"


class ProductService:
    """
    Service for product management operations.

    Provides a clean interface between API routes, database and cache.
    Input models are already validated, so nothing invalid reaches the
    database from here.
    """

    @staticmethod
    def create_product(data: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            data: Validated name, description and price

        Returns:
            The stored product, with server-generated id and timestamps

        Raises:
            DatabaseError: If the insert fails
        """
        try:
            row = SupabaseClient.insert_product(data.name, data.description, data.price)
        except SupabaseClientError as e:
            logger.error(f"Failed to create product: {e}")
            raise DatabaseError("create product", e.message) from e

        product = Product.from_db_row(row)
        RedisCache.delete(PRODUCT_LIST_KEY)
        return product

    @staticmethod
    def list_products() -> list[Product]:
        """
        List every product, most recently updated first.

        Raises:
            DatabaseError: If the query fails
        """
        cached = RedisCache.get(PRODUCT_LIST_KEY)
        if cached is not None:
            try:
                return _product_list.validate_json(cached)
            except ValidationError as e:
                logger.warning(f"Discarding unreadable cache entry {PRODUCT_LIST_KEY}: {e}")

        try:
            rows = SupabaseClient.fetch_products()
        except SupabaseClientError as e:
            logger.error(f"Failed to list products: {e}")
            raise DatabaseError("list products", e.message) from e

        products = [Product.from_db_row(row) for row in rows]
        RedisCache.set(PRODUCT_LIST_KEY, _product_list.dump_json(products).decode())
        return products

    @staticmethod
    def get_product(product_id: str | UUID) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If no product has this id
            DatabaseError: If the query fails
        """
        key = product_cache_key(product_id)

        cached = RedisCache.get(key)
        if cached is not None:
            try:
                return Product.model_validate_json(cached)
            except ValidationError as e:
                logger.warning(f"Discarding unreadable cache entry {key}: {e}")

        try:
            row = SupabaseClient.fetch_product(product_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to get product {product_id}: {e}")
            raise DatabaseError("get product", e.message) from e

        if row is None:
            raise ProductNotFoundError(str(product_id))

        product = Product.from_db_row(row)
        # A concurrent update can invalidate between the fetch above and this
        # write, leaving the old row cached until CACHE_TTL_SECONDS expires.
        RedisCache.set(key, product.model_dump_json())
        return product

    @staticmethod
    def replace_product(product_id: str | UUID, data: ProductCreate) -> Product:
        """
        Overwrite name, description and price of a product.

        Raises:
            ProductNotFoundError: If no product has this id
            DatabaseError: If the update fails
        """
        return ProductService._write_update(product_id, data.model_dump())

    @staticmethod
    def update_product(product_id: str | UUID, data: ProductUpdate) -> Product:
        """
        Change only the fields supplied in data.

        An update with no fields returns the current product unchanged.

        Raises:
            ProductNotFoundError: If no product has this id
            DatabaseError: If the update fails
        """
        changes = data.changes()
        if not changes:
            return ProductService.get_product(product_id)

        return ProductService._write_update(product_id, changes)

    @staticmethod
    def delete_product(product_id: str | UUID) -> None:
        """
        Hard-delete a product.

        Raises:
            ProductNotFoundError: If no product has this id
            DatabaseError: If the delete fails
        """
        try:
            deleted = SupabaseClient.delete_product(product_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to delete product {product_id}: {e}")
            raise DatabaseError("delete product", e.message) from e

        if not deleted:
            raise ProductNotFoundError(str(product_id))

        RedisCache.delete(product_cache_key(product_id), PRODUCT_LIST_KEY)

    @staticmethod
    def _write_update(product_id: str | UUID, fields: dict) -> Product:
        try:
            row = SupabaseClient.update_product(product_id, fields)
        except SupabaseClientError as e:
            logger.error(f"Failed to update product {product_id}: {e}")
            raise DatabaseError("update product", e.message) from e

        if row is None:
            raise ProductNotFoundError(str(product_id))

        RedisCache.delete(product_cache_key(product_id), PRODUCT_LIST_KEY)
        return Product.from_db_row(row)
