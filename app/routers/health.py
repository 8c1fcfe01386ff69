# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.redis_cache import RedisCache
from lib.supabase_client import SupabaseClient, SupabaseClientError

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    cache: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check():
    """
    Readiness check endpoint.

    The database is required; the cache is optional, so a failing cache
    marks the service degraded rather than not ready.
    """
    checks = ChecksResponse(database="unknown", cache="unknown")

    try:
        SupabaseClient.ping()
        checks.database = "healthy"
    except SupabaseClientError as e:
        checks.database = f"unhealthy: {e.message[:50]}"

    if not RedisCache.enabled():
        checks.cache = "disabled"
    elif RedisCache.ping():
        checks.cache = "healthy"
    else:
        checks.cache = "unhealthy"

    if checks.database != "healthy":
        overall = "not_ready"
    elif checks.cache == "unhealthy":
        overall = "degraded"
    else:
        overall = "ready"

    return ReadinessResponse(
        status=overall,
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
