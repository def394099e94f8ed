"""
Notifications Package

Per-user notification log persisted in key-value storage (in-memory or
Redis).
"""

from .models import NotificationRecord, NotificationType
from .status_tracker import ApplicationSnapshot, ApplicationStatusNotifier
from .storage import KeyValueStorage, MemoryStorage, RedisStorage, create_storage
from .store import NotificationStorageError, NotificationStore

__all__ = [
    "ApplicationSnapshot",
    "ApplicationStatusNotifier",
    "KeyValueStorage",
    "MemoryStorage",
    "NotificationRecord",
    "NotificationStorageError",
    "NotificationStore",
    "NotificationType",
    "RedisStorage",
    "create_storage",
]
