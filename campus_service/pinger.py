"""
Backend Liveness Pinger

Keeps a background heartbeat against the backend API so its status shows
up in the logs (and so hosted backends that sleep when idle stay awake).

A PingerHandle pings immediately on start and then every interval.
Each ping runs as its own detached task: the timer never waits for a
ping to finish, so a slow request can overlap the next one. Ping failures
are only logged; they never raise and never stop the timer.
"""

import asyncio
import logging
import math
from typing import Callable, Optional, Set

import httpx

logger = logging.getLogger(__name__)

PING_INTERVAL_SECONDS = 5 * 60
PING_TIMEOUT_SECONDS = 10.0
PING_PATH = "/api/health/ping"


class PingerHandle:
    """
    Owns at most one repeating ping timer.

    States:
    - idle: no timer task
    - running: one timer task pinging every interval

    start() and stop() are idempotent. stop() cancels the timer but not a
    ping request already in flight.
    """

    def __init__(
        self,
        url_resolver: Callable[[], str],
        interval_seconds: float = PING_INTERVAL_SECONDS,
        timeout_seconds: float = PING_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the pinger.

        Args:
            url_resolver: Returns the backend base URL; called on every ping
            interval_seconds: Delay between pings
            timeout_seconds: HTTP timeout for one ping
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.url_resolver = url_resolver
        self.interval_seconds = interval_seconds
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._timer_task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()
        self.pings_sent = 0
        self.pings_failed = 0
        self.last_status: Optional[str] = None

    @property
    def is_running(self) -> bool:
        """Check if the timer is active."""
        return self._timer_task is not None

    def start(self) -> None:
        """
        Start pinging. No-op if already running.

        Must be called while an event loop is running.
        """
        if self._timer_task is not None:
            return

        loop = asyncio.get_running_loop()
        logger.info(f"Starting backend ping service (every {self.interval_seconds}s)")
        self._timer_task = loop.create_task(self._timer_loop())

    def stop(self) -> None:
        """Stop pinging. No-op if already stopped."""
        if self._timer_task is None:
            return

        self._timer_task.cancel()
        self._timer_task = None
        logger.info("Backend ping service stopped")

    async def _timer_loop(self) -> None:
        while True:
            task = asyncio.create_task(self.ping_once())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
            await asyncio.sleep(self.interval_seconds)

    async def wait_inflight(self) -> None:
        """Wait for pings already in flight to finish."""
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def ping_once(self) -> None:
        """
        Ping the backend once and log the outcome.

        Never raises: HTTP errors, transport errors and malformed
        responses are logged and counted.
        """
        self.pings_sent += 1
        try:
            url = f"{self.url_resolver().rstrip('/')}{PING_PATH}"
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    url,
                    headers={"Content-Type": "application/json"},
                )

            if response.is_success:
                data = response.json()
                uptime_minutes = math.floor(float(data["uptime"]) / 60)
                self.last_status = str(data["status"])
                logger.info(
                    f"Backend ping successful: status={data['status']}, "
                    f"timestamp={data['timestamp']}, uptime={uptime_minutes} minutes"
                )
            else:
                self.pings_failed += 1
                self.last_status = f"http_{response.status_code}"
                logger.warning(f"Backend ping failed with status: {response.status_code}")

        except Exception as e:
            self.pings_failed += 1
            self.last_status = "error"
            logger.error(f"Backend ping error: {type(e).__name__}: {e}")
