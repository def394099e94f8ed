#!/usr/bin/env python3
"""
Standalone Backend Ping

Runs the liveness pinger against the backend API until interrupted.
The target URL comes from API_URL (re-read before every ping).

Usage:
    python scripts/run_backend_ping.py
    python scripts/run_backend_ping.py --interval 60
    python scripts/run_backend_ping.py --once
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment before other imports
load_dotenv()

from campus_service.config import get_api_url, get_settings, log_api_config
from campus_service.pinger import PingerHandle


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger("backend_ping")


async def run(interval: int, timeout: float, once: bool) -> None:
    pinger = PingerHandle(
        url_resolver=get_api_url,
        interval_seconds=interval,
        timeout_seconds=timeout,
    )

    if once:
        await pinger.ping_once()
        return

    stopped = asyncio.Event()

    def handle_signal() -> None:
        if stopped.is_set():
            return
        pinger.stop()
        stopped.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_signal)

    pinger.start()
    try:
        await stopped.wait()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
    await pinger.wait_inflight()
    logger.info(f"Sent {pinger.pings_sent} pings ({pinger.pings_failed} failed)")


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Ping the backend API periodically")
    parser.add_argument(
        "--interval",
        type=int,
        default=settings.ping_interval_seconds,
        help=f"Seconds between pings (default: {settings.ping_interval_seconds})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.ping_timeout_seconds,
        help=f"HTTP timeout per ping (default: {settings.ping_timeout_seconds})",
    )
    parser.add_argument("--once", action="store_true", help="Ping once and exit")
    args = parser.parse_args()

    if args.interval < 1:
        parser.error("--interval must be at least 1 second")

    log_api_config()
    asyncio.run(run(args.interval, args.timeout, args.once))


if __name__ == "__main__":
    main()
