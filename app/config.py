# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single, frozen Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are built once in create_app() and injected into route handlers
# via app.state - nothing reads them as module-level globals.
# =============================================================================

from functools import lru_cache
from typing import Literal, NamedTuple

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class PublicStoreConfig(NamedTuple):
    """Store endpoint + restricted (anon) key. Safe to hand to browsers."""
    url: str
    anon_key: str


class ServiceCredentials(NamedTuple):
    """Store endpoint + elevated (service_role) key. Never leaves the process."""
    url: str
    service_key: SecretStr


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    The three Supabase values are optional on purpose: a server with a
    missing value still boots, reports the gap on /health, and answers
    the affected routes with 503.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str | None = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str | None = Field(
        default=None,
        description="Supabase anon/public API key (exposed to the browser)"
    )

    SUPABASE_SERVICE_ROLE_KEY: SecretStr | None = Field(
        default=None,
        description="Supabase service_role key (bypasses RLS, server only)"
    )

    # -------------------------------------------------------------------------
    # Leaderboard Store
    # -------------------------------------------------------------------------

    LEADERBOARD_BACKEND: Literal["supabase", "memory"] = Field(
        default="supabase",
        description="Store implementation: 'supabase' or in-process 'memory'"
    )

    LEADERBOARD_TABLE: str = Field(
        default="leaderboard",
        min_length=1,
        description="Name of the leaderboard table"
    )

    STORE_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout applied to every PostgREST request"
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

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )

    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the server"
    )

    STATIC_DIR: str = Field(
        default="public",
        description="Directory holding the game's static assets and index.html"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    ALLOWED_ORIGIN: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated, '*' for any)"
    )

    API_RATE_LIMIT: int = Field(
        default=300,
        ge=1,
        description="Max requests per client per window across /api/*"
    )

    API_RATE_WINDOW_SECONDS: int = Field(
        default=15 * 60,
        ge=1,
        description="Window length for API_RATE_LIMIT"
    )

    SUBMIT_RATE_LIMIT: int = Field(
        default=5,
        ge=1,
        description="Max score submissions per client per window"
    )

    SUBMIT_RATE_WINDOW_SECONDS: int = Field(
        default=60,
        ge=1,
        description="Window length for SUBMIT_RATE_LIMIT"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Empty values count as unset, so SUPABASE_URL= reads as missing
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse ALLOWED_ORIGIN string into a list.

        Example: "https://a.com, https://b.com" -> ["https://a.com", "https://b.com"]
        """
        return [origin.strip() for origin in self.ALLOWED_ORIGIN.split(",") if origin.strip()]

    @property
    def has_supabase_url(self) -> bool:
        return bool(self.SUPABASE_URL)

    @property
    def has_anon_key(self) -> bool:
        return bool(self.SUPABASE_ANON_KEY)

    @property
    def has_service_key(self) -> bool:
        return self.SUPABASE_SERVICE_ROLE_KEY is not None and bool(
            self.SUPABASE_SERVICE_ROLE_KEY.get_secret_value()
        )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    def public_store_config(self) -> PublicStoreConfig | None:
        """
        Get the browser-safe store config, or None if either half is missing.

        Never returns a partial config.
        """
        if not (self.has_supabase_url and self.has_anon_key):
            return None
        return PublicStoreConfig(url=self.SUPABASE_URL, anon_key=self.SUPABASE_ANON_KEY)

    def service_credentials(self) -> ServiceCredentials | None:
        """Get the elevated store credentials, or None if not configured."""
        if not (self.has_supabase_url and self.has_service_key):
            return None
        return ServiceCredentials(url=self.SUPABASE_URL, service_key=self.SUPABASE_SERVICE_ROLE_KEY)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
