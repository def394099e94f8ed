"""
Key-Value Storage Backends

String keys mapped to string values, with a missing key reading as None.
The notification store keeps its whole collection under a single key.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis.asyncio as aioredis
from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Interface for string key-value persistence."""

    async def connect(self) -> None:
        """Open any underlying connection. No-op by default."""

    async def disconnect(self) -> None:
        """Release any underlying connection. No-op by default."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""


class MemoryStorage(KeyValueStorage):
    """Process-local storage backed by a dict. Operations never suspend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisStorage(KeyValueStorage):
    """
    Storage backed by plain Redis string keys.

    Shared between processes; concurrent writers to the same key are
    last-writer-wins.
    """

    def __init__(self, redis_url: str):
        """
        Initialize Redis storage.

        Args:
            redis_url: Redis connection URL
        """
        self.redis_url = redis_url
        self._redis: Optional[Redis] = None
        self._connected = False

    async def connect(self) -> None:
        """Establish Redis connection."""
        try:
            self._redis = await aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            await self._redis.ping()
            self._connected = True
            logger.info("Notification storage connected to Redis")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self._connected = False
            raise

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None
            self._connected = False
            logger.info("Notification storage disconnected from Redis")

    @property
    def is_connected(self) -> bool:
        """Check if connected to Redis."""
        return self._connected and self._redis is not None

    def _client(self) -> Redis:
        if not self._redis:
            raise RuntimeError("Notification storage not connected")
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        return await self._client().get(key)

    async def set(self, key: str, value: str) -> None:
        await self._client().set(key, value)

    async def delete(self, key: str) -> None:
        await self._client().delete(key)


def create_storage(redis_url: Optional[str]) -> KeyValueStorage:
    """Pick Redis when a URL is configured, otherwise in-memory storage."""
    if redis_url:
        return RedisStorage(redis_url)
    logger.info("Redis not configured, notifications kept in memory")
    return MemoryStorage()
