"""
Campus Service Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
import os
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEV_API_URL = "http://localhost:5000"
PRODUCTION_FALLBACK_API_URL = "https://campuscogni.onrender.com"


class ServiceSettings(BaseSettings):
    """
    Campus service configuration with validation.

    All settings can be overridden via environment variables.
    Validation happens at startup to fail fast on misconfiguration.
    """

    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # === Storage ===
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL (optional, in-memory storage when unset)"
    )
    notifications_key: str = Field(
        default="local_notifications",
        min_length=1,
        description="Storage key holding the serialized notification collection"
    )
    fetch_limit: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Maximum notifications returned per listing (1-500)"
    )

    # === Backend Ping ===
    ping_enabled: bool = Field(
        default=True,
        description="Start the backend liveness ping on application startup"
    )
    ping_interval_seconds: int = Field(
        default=300,
        ge=1,
        le=86400,
        description="Seconds between backend pings (default 5 minutes)"
    )
    ping_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="HTTP timeout for a single ping request"
    )

    # === CORS ===
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Basic URL format validation."""
        if not v:
            return None
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(f"Invalid Redis URL format: {v}")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if not self.cors_origins:
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning/error messages.
        """
        issues = []

        if self.is_production:
            if not os.getenv("API_URL"):
                issues.append("WARNING: API_URL not configured, backend ping uses fallback URL")
            if not self.redis_url:
                issues.append("WARNING: REDIS_URL not configured, notifications are kept in memory")
            if not self.cors_origins:
                issues.append("WARNING: CORS_ORIGINS not configured")

        return issues

    class Config:
        env_prefix = ""
        case_sensitive = False


@lru_cache()
def get_settings() -> ServiceSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for performance.
    Use this function to access configuration throughout the app.
    """
    return ServiceSettings()


def get_api_url() -> str:
    """
    Resolve the backend API base URL.

    API_URL is read on every call so a changed value is picked up by the
    next ping without a restart.
    """
    api_url = os.getenv("API_URL")
    if api_url:
        return api_url.rstrip("/")

    if get_settings().environment == "development":
        return DEV_API_URL

    logger.warning("API_URL not set outside development! Using fallback.")
    return PRODUCTION_FALLBACK_API_URL


def get_base_url() -> str:
    """Get the base URL (without /api) for health checks."""
    return get_api_url()


def log_api_config() -> None:
    """Log the current API configuration (for debugging)."""
    settings = get_settings()
    logger.info("API Configuration:")
    logger.info(f"  environment={settings.environment}")
    logger.info(f"  API_URL env var={os.getenv('API_URL')}")
    logger.info(f"  resolved API URL={get_api_url()}")
    logger.info(f"  base URL={get_base_url()}")


def validate_config_on_startup() -> None:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for production settings that work but need attention.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")

    for issue in settings.validate_production_config():
        logger.warning(issue)

    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  storage={'redis' if settings.redis_url else 'memory'}")
    logger.info(f"  notifications_key={settings.notifications_key}")
    logger.info(
        f"  ping_enabled={settings.ping_enabled} "
        f"(interval={settings.ping_interval_seconds}s, timeout={settings.ping_timeout_seconds}s)"
    )
