# =============================================================================
# lib/redis_cache.py - Redis Cache Wrapper
# =============================================================================
# Thin key/value layer in front of the database.
#
# The cache is an optimization, never a source of truth: every failure
# (connection refused, timeout, bad payload) is logged and reported to the
# caller as a miss or a no-op. Nothing in this module raises to the caller.
#
# Usage:
#   from lib.redis_cache import RedisCache
#   RedisCache.set("products:123", payload)
#   cached = RedisCache.get("products:123")
# =============================================================================

from __future__ import annotations

import logging

import redis
from redis.exceptions import RedisError

from app.config import settings

logger = logging.getLogger(__name__)

# Anything that means "no cache": Redis errors, undecodable payloads
# (UnicodeDecodeError) and a malformed REDIS_URL (ValueError)
CACHE_ERRORS = (RedisError, ValueError)


class RedisCache:
    """
    Singleton wrapper around a redis-py client.

    The underlying client keeps its own connection pool, which is safe to
    share between concurrent requests.
    """

    _instance: redis.Redis | None = None

    @classmethod
    def enabled(cls) -> bool:
        return settings.CACHE_ENABLED

    @classmethod
    def get_client(cls) -> redis.Redis:
        """Get or create the shared Redis client (connects lazily)."""
        if cls._instance is None:
            cls._instance = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                socket_timeout=settings.CACHE_SOCKET_TIMEOUT,
                socket_connect_timeout=settings.CACHE_SOCKET_TIMEOUT,
            )
            logger.info("Redis cache client initialized")
        return cls._instance

    @classmethod
    def get(cls, key: str) -> str | None:
        """Return the cached value for key, or None on miss or failure."""
        if not cls.enabled():
            return None

        try:
            value = cls.get_client().get(key)
        except CACHE_ERRORS as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

        logger.debug(f"Cache {'hit' if value is not None else 'miss'}: {key}")
        return value

    @classmethod
    def set(cls, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        """
        Store value under key with an expiration.

        Returns:
            bool: True if the value was written
        """
        if not cls.enabled():
            return False

        ttl = ttl_seconds or settings.CACHE_TTL_SECONDS
        try:
            cls.get_client().set(key, value, ex=ttl)
        except CACHE_ERRORS as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            return False
        return True

    @classmethod
    def delete(cls, *keys: str) -> bool:
        """
        Invalidate one or more keys.

        Returns:
            bool: True if the delete command went through
        """
        if not cls.enabled() or not keys:
            return False

        try:
            cls.get_client().delete(*keys)
        except CACHE_ERRORS as e:
            logger.warning(f"Cache invalidation failed for {', '.join(keys)}: {e}")
            return False

        logger.debug(f"Cache invalidated: {', '.join(keys)}")
        return True

    @classmethod
    def ping(cls) -> bool:
        """Check whether Redis answers."""
        try:
            return bool(cls.get_client().ping())
        except CACHE_ERRORS as e:
            logger.warning(f"Cache ping failed: {e}")
            return False

    @classmethod
    def close(cls) -> None:
        """Release the connection pool (called on shutdown)."""
        if cls._instance is not None:
            try:
                cls._instance.close()
            except CACHE_ERRORS as e:
                logger.warning(f"Error closing Redis client: {e}")
            cls._instance = None
