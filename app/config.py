# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.MAX_TRANSFORMATION_DEPTH)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Per-class partials configuration (conditional defaults, request
# allowlists) is NOT an environment concern: it lives on
# partials.PartialsConfig.
# =============================================================================

import logging
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

    # -------------------------------------------------------------------------
    # Transformation Settings
    # -------------------------------------------------------------------------

    MAX_TRANSFORMATION_DEPTH: int | None = Field(
        default=None,
        ge=0,
        description="Maximum Data nesting depth emitted in responses (unset = unlimited)"
    )

    THROW_WHEN_MAX_DEPTH_REACHED: bool = Field(
        default=False,
        description="Raise instead of emitting an empty object past the max depth"
    )

    # -------------------------------------------------------------------------
    # Request Partials
    # -------------------------------------------------------------------------

    REQUEST_PARTIALS_ENABLED: bool = Field(
        default=True,
        description="Honour include/exclude/only/except query parameters"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.DEBUG else logging.INFO

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

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
