# =============================================================================
# lib/ - Standalone Client Modules
# =============================================================================
# This package contains the wrappers around external services:
# - supabase_client.py: Typed Supabase wrapper for the products table
# - redis_cache.py: Redis key/value cache that never fails a request
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.redis_cache import RedisCache

__all__ = [
    # Database
    "SupabaseClient",
    "SupabaseClientError",
    # Cache
    "RedisCache",
]
