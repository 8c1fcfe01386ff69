# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Product API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_supabase_client.py: Query building and error wrapping
# - test_redis_cache.py: Cache failures never escape
# - test_product_service.py: Cache-aside and error mapping
# - test_products_api.py: HTTP endpoints end to end (in-memory backends)
# - test_health.py: Health and readiness endpoints
#
# Run tests with: pytest
# =============================================================================
