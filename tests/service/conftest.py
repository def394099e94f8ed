"""
Pytest fixtures for campus service API tests.
"""

import os

# IMPORTANT: Set environment variables BEFORE any imports from campus_service
# so ServiceSettings is configured correctly when first loaded.
os.environ["ENVIRONMENT"] = "development"
os.environ["PING_ENABLED"] = "false"
os.environ.pop("REDIS_URL", None)
os.environ.pop("API_URL", None)

import pytest
from fastapi.testclient import TestClient

from campus_service.notifications import (
    ApplicationStatusNotifier,
    MemoryStorage,
    NotificationStore,
)

STATE_ATTRIBUTES = ("storage", "store", "notifier", "pinger")


@pytest.fixture
def storage():
    """Fresh in-memory storage for each test."""
    return MemoryStorage()


@pytest.fixture
def app(storage):
    """
    FastAPI app wired to the per-test storage.

    The app is a module-level singleton, so its state is restored after
    each test.
    """
    from campus_service.app import app

    saved = {name: getattr(app.state, name) for name in STATE_ATTRIBUTES}

    store = NotificationStore(storage)
    app.state.storage = storage
    app.state.store = store
    app.state.notifier = ApplicationStatusNotifier(store, storage)
    app.state.pinger = None
    yield app

    for name, value in saved.items():
        setattr(app.state, name, value)


@pytest.fixture
def client(app):
    """FastAPI test client fixture."""
    return TestClient(app)
