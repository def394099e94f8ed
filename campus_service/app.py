"""
FastAPI campus service.

Serves per-user notifications backed by key-value storage (Redis when
configured, in-memory otherwise) and exposes health endpoints. On startup
it also starts the backend liveness pinger, which is stopped on shutdown.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_api_url, get_settings, log_api_config, validate_config_on_startup
from .notifications import ApplicationStatusNotifier, NotificationStore, create_storage
from .pinger import PingerHandle
from .routes import health_router, notifications_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

# Validate configuration at startup
validate_config_on_startup()
settings = get_settings()

app = FastAPI(title="Campus Service", version=__version__)

if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(health_router)
app.include_router(notifications_router)

# In-memory storage until startup connects Redis (when configured)
app.state.storage = create_storage(None)
app.state.store = NotificationStore(app.state.storage, key=settings.notifications_key)
app.state.notifier = ApplicationStatusNotifier(app.state.store, app.state.storage)
app.state.pinger = None


@app.on_event("startup")
async def startup_storage():
    """Connect notification storage (Redis if configured)."""
    if not settings.redis_url:
        return

    storage = create_storage(settings.redis_url)
    try:
        await storage.connect()
    except Exception as e:
        # Notification routes answer 503 until storage is reachable
        logger.error(f"Failed to initialize Redis storage, notifications disabled: {e}")
        app.state.store = None
        app.state.notifier = None
        return

    store = NotificationStore(storage, key=settings.notifications_key)
    app.state.storage = storage
    app.state.store = store
    app.state.notifier = ApplicationStatusNotifier(store, storage)
    logger.info("Notification store initialized with Redis")


@app.on_event("startup")
async def startup_pinger():
    """Start the backend liveness pinger if enabled."""
    if not settings.ping_enabled:
        logger.info("Backend ping disabled")
        return

    log_api_config()
    pinger = PingerHandle(
        url_resolver=get_api_url,
        interval_seconds=settings.ping_interval_seconds,
        timeout_seconds=settings.ping_timeout_seconds,
    )
    pinger.start()
    app.state.pinger = pinger


@app.on_event("shutdown")
async def shutdown_pinger():
    """Stop the backend liveness pinger."""
    pinger = app.state.pinger
    if pinger is not None:
        pinger.stop()
        await pinger.wait_inflight()
        app.state.pinger = None


@app.on_event("shutdown")
async def shutdown_storage():
    """Disconnect notification storage."""
    await app.state.storage.disconnect()
