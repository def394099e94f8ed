"""
Health Endpoints

/health for container orchestration and /api/health/ping for the backend
liveness pinger.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter

from ..models import HealthResponse, PingResponse

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


def uptime_seconds() -> float:
    """Seconds since this module was first imported (process start)."""
    return time.monotonic() - _started_at


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for container orchestration."""
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc))


@router.get("/api/health/ping", response_model=PingResponse)
async def health_ping() -> PingResponse:
    """
    Liveness ping.

    Returns status, current timestamp and uptime in seconds.
    """
    return PingResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        uptime=round(uptime_seconds(), 3),
    )
