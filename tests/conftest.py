# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-ins for the products table and the Redis cache, patched
#   into the service layer so no test needs a running database or Redis
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# In-memory fakes
# =============================================================================

class InMemoryProductStore:
    """
    Mimics the SupabaseClient product methods against a dict.

    Rows come back the way PostgREST returns them: string ids and ISO
    timestamps. Every write gets a strictly later timestamp than the one
    before, like now() across separate transactions.
    """

    def __init__(self):
        self.rows: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self._last_tick: datetime | None = None

    def _tick(self) -> str:
        now = datetime.now(timezone.utc)
        if self._last_tick is not None and now <= self._last_tick:
            now = self._last_tick + timedelta(microseconds=1)
        self._last_tick = now
        return now.isoformat()

    def insert_product(self, name: str, description: str, price: int) -> dict[str, Any]:
        self.calls.append("insert_product")
        ts = self._tick()
        row = {
            "id": str(uuid4()),
            "name": name,
            "description": description,
            "price": price,
            "created_at": ts,
            "updated_at": ts,
        }
        self.rows[row["id"]] = row
        return dict(row)

    def fetch_products(self) -> list[dict[str, Any]]:
        self.calls.append("fetch_products")
        return sorted(
            (dict(row) for row in self.rows.values()),
            key=lambda row: row["updated_at"],
            reverse=True,
        )

    def fetch_product(self, product_id) -> dict[str, Any] | None:
        self.calls.append("fetch_product")
        row = self.rows.get(str(product_id))
        return dict(row) if row else None

    def update_product(self, product_id, fields: dict[str, Any]) -> dict[str, Any] | None:
        self.calls.append("update_product")
        row = self.rows.get(str(product_id))
        if row is None:
            return None
        row.update(fields)
        row["updated_at"] = self._tick()
        return dict(row)

    def delete_product(self, product_id) -> bool:
        self.calls.append("delete_product")
        return self.rows.pop(str(product_id), None) is not None


class InMemoryCache:
    """Mimics the RedisCache class methods against a dict."""

    def __init__(self):
        self.data: dict[str, str] = {}

    def enabled(self) -> bool:
        return True

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        self.data[key] = value
        return True

    def delete(self, *keys: str) -> bool:
        for key in keys:
            self.data.pop(key, None)
        return True

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        pass


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def product_store():
    """Replace the database with an in-memory products table."""
    store = InMemoryProductStore()
    with patch("core.services.product_service.SupabaseClient", store):
        yield store


@pytest.fixture
def product_cache():
    """Replace Redis with an in-memory cache."""
    cache = InMemoryCache()
    with patch("core.services.product_service.RedisCache", cache):
        yield cache


@pytest.fixture
def client(product_store, product_cache):
    """FastAPI test client wired to the in-memory store and cache."""
    from app.main import app

    return TestClient(app)


@pytest.fixture
def sample_product_row():
    """A products row as returned by Supabase."""
    return {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "name": "Widget",
        "description": "A widget",
        "price": 500,
        "created_at": "2025-12-10T02:48:04.123456+00:00",
        "updated_at": "2025-12-10T02:48:04.123456+00:00",
    }
