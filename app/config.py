# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Database (Supabase / PostgreSQL)
    # -------------------------------------------------------------------------
    # Required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key used for server-side queries"
    )

    PRODUCTS_TABLE: str = Field(
        default="products",
        description="Name of the products table"
    )

    # -------------------------------------------------------------------------
    # Cache (Redis)
    # -------------------------------------------------------------------------
    # The cache is optional: when disabled or unreachable, reads go
    # straight to the database.

    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for the product cache"
    )

    CACHE_ENABLED: bool = Field(
        default=True,
        description="Use Redis to cache product reads"
    )

    CACHE_TTL_SECONDS: int = Field(
        default=3600,
        ge=1,
        description="Expiration for cached product entries"
    )

    CACHE_SOCKET_TIMEOUT: float = Field(
        default=0.5,
        gt=0.0,
        le=30.0,
        description="Redis connect/read timeout in seconds"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="127.0.0.1",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins in production (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (production sets env vars directly)
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://shop.example.com"
            -> ["http://localhost:3000", "https://shop.example.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
