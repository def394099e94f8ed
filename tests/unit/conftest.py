"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that keep tests away from real
external services:
- Redis (REDIS_URL is cleared so in-memory storage is used)
- The backend API (API_URL is cleared so URL resolution is deterministic)
- Cached settings (cleared around each test so env changes apply)

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import os
import pytest

# Set test environment BEFORE any imports to prevent settings from loading real values
os.environ["ENVIRONMENT"] = "development"
os.environ["PING_ENABLED"] = "false"


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Isolate test environment from real configuration.

    This prevents:
    - Redis connections via REDIS_URL
    - Pings against a real backend via API_URL
    """
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("PING_ENABLED", "false")
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.delenv("API_URL", raising=False)
    yield


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Clear cached settings so each test sees its own environment."""
    from campus_service.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
