# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Product API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    ProductApiException,
    product_api_exception_handler,
    validation_exception_handler,
)
from app.routers import health, products
from lib.redis_cache import RedisCache

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Database and cache clients connect lazily on first use; shutdown
    releases the Redis connection pool.
    """
    logger.info(f"Starting Product API in {settings.ENVIRONMENT} mode")
    logger.info(f"Cache {'enabled' if settings.CACHE_ENABLED else 'disabled'}")

    yield

    logger.info("Shutting down Product API")
    RedisCache.close()


# Create FastAPI application
app = FastAPI(
    title="Product API",
    description="CRUD API for products, backed by PostgreSQL with an optional Redis cache.",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Products",
            "description": "Create, read, update and delete products",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=settings.is_production,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ProductApiException)
async def handle_product_api_exception(request: Request, exc: ProductApiException):
    """Handle custom Product API exceptions."""
    return await product_api_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and path parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Product API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/health",
    }
