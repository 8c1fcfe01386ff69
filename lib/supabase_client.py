# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the products table.
# It implements the singleton pattern to reuse a single client connection
# and provides one method per persistence operation:
# - insert_product / fetch_products / fetch_product
# - update_product / delete_product
#
# Every method issues a single PostgREST request (one parameterized SQL
# statement on the database side). Mutations ask for the affected rows back,
# so "no such product" shows up as an empty result rather than an error.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_product(product_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = "id, name, description, price, created_at, updated_at"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Signals that the database could not be reached or rejected the query.
    It never means "not found": lookups of unknown ids return None.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for product database operations.

    Implements singleton pattern - one client instance (and its HTTP
    connection pool) is shared across the application. All methods are
    class methods for easy access without instantiation.

    Example:
        row = SupabaseClient.insert_product("Widget", "A widget", 500)
        same = SupabaseClient.fetch_product(row["id"])
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key, appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def _table(cls):
        return cls.get_client().table(settings.PRODUCTS_TABLE)

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @classmethod
    def insert_product(cls, name: str, description: str, price: int) -> dict[str, Any]:
        """
        Insert a product and return the stored row.

        The database fills in id, created_at and updated_at.

        Raises:
            SupabaseClientError: If the insert fails or returns nothing
        """
        table = cls._table()

        try:
            response = (
                table
                .insert({"name": name, "description": description, "price": price})
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert product: {e}",
                code="INSERT_PRODUCT_FAILED",
                suggestion="Check that the products table exists and the database is reachable",
                details={"name": name},
            ) from e

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_PRODUCT_FAILED",
                suggestion="Make sure the request asks for the inserted row back",
            )

        row = response.data[0]
        logger.info(f"Inserted product: {row['id']}")
        return row

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_products(cls) -> list[dict[str, Any]]:
        """
        Fetch every product, most recently updated first.

        Raises:
            SupabaseClientError: If query fails
        """
        table = cls._table()

        try:
            response = (
                table
                .select(PRODUCT_COLUMNS)
                .order("updated_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch products: {e}",
                code="FETCH_PRODUCTS_FAILED",
                suggestion="Check that the products table exists and the database is reachable",
            ) from e

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} products")
        return rows

    @classmethod
    def fetch_product(cls, product_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a single product by ID.

        Returns:
            Product row dict, or None if no product has this id

        Raises:
            SupabaseClientError: If query fails
        """
        product_id_str = cls._normalize_uuid(product_id)

        table = cls._table()

        try:
            response = (
                table
                .select(PRODUCT_COLUMNS)
                .eq("id", product_id_str)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch product: {e}",
                code="FETCH_PRODUCT_FAILED",
                suggestion="Check that the database is reachable",
                details={"product_id": product_id_str},
            ) from e

        return response.data[0] if response.data else None

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    @classmethod
    def update_product(
        cls,
        product_id: str | UUID,
        fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update the given columns of a product.

        Only name, description and price may be passed; updated_at is
        refreshed by a database trigger.

        Returns:
            Updated row dict, or None if no product has this id

        Raises:
            SupabaseClientError: If query fails
        """
        product_id_str = cls._normalize_uuid(product_id)

        table = cls._table()

        try:
            response = (
                table
                .update(fields)
                .eq("id", product_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update product: {e}",
                code="UPDATE_PRODUCT_FAILED",
                suggestion="Check that the database is reachable",
                details={"product_id": product_id_str, "fields": sorted(fields)},
            ) from e

        if not response.data:
            return None

        logger.info(f"Updated product: {product_id_str}")
        return response.data[0]

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    @classmethod
    def delete_product(cls, product_id: str | UUID) -> bool:
        """
        Hard-delete a product.

        Returns:
            True if a row was deleted, False if no product has this id

        Raises:
            SupabaseClientError: If query fails
        """
        product_id_str = cls._normalize_uuid(product_id)

        table = cls._table()

        try:
            response = (
                table
                .delete()
                .eq("id", product_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete product: {e}",
                code="DELETE_PRODUCT_FAILED",
                suggestion="Check that the database is reachable",
                details={"product_id": product_id_str},
            ) from e

        deleted = bool(response.data)
        if deleted:
            logger.info(f"Deleted product: {product_id_str}")
        return deleted

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls) -> None:
        """
        Run a trivial query against the products table.

        Raises:
            SupabaseClientError: If the database cannot be reached
        """
        try:
            cls._table().select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database ping failed: {e}",
                code="PING_FAILED",
                suggestion="Check SUPABASE_URL and that the products table exists",
            ) from e
