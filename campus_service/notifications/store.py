"""
Notification Store

Persists per-user notifications as one JSON array under a single storage
key. Every operation reads the whole collection, changes it in memory and
writes it back. Records are kept newest-first and are never deleted.

Within one process the read-modify-write cycles are serialized by a lock.
Processes sharing the same Redis key are not coordinated: the last writer
replaces the whole collection.
"""

import asyncio
import json
import logging
from typing import List, Optional, Union

from .models import NotificationRecord, NotificationType, generate_notification_id
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATIONS_KEY = "local_notifications"


class NotificationStorageError(Exception):
    """Stored notification data could not be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored data under '{key}' is corrupt: {reason}")


class NotificationStore:
    """
    CRUD-like log of notifications scoped by user.

    Absent storage reads as an empty collection. Corrupt storage raises
    NotificationStorageError instead of being reset, so data is never
    silently discarded.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_NOTIFICATIONS_KEY):
        self.storage = storage
        self.key = key
        self._lock = asyncio.Lock()

    async def _load(self) -> List[NotificationRecord]:
        raw = await self.storage.get(self.key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise NotificationStorageError(self.key, f"invalid JSON ({e})") from e

        if not isinstance(data, list):
            raise NotificationStorageError(
                self.key, f"expected a list, got {type(data).__name__}"
            )

        records = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise NotificationStorageError(self.key, f"entry {index} is not an object")
            try:
                records.append(NotificationRecord.from_dict(item))
            except KeyError as e:
                raise NotificationStorageError(
                    self.key, f"entry {index} is missing field {e}"
                ) from e
            except ValueError as e:
                raise NotificationStorageError(self.key, f"entry {index}: {e}") from e
        return records

    async def _save(self, records: List[NotificationRecord]) -> None:
        await self.storage.set(self.key, json.dumps([r.to_dict() for r in records]))

    async def fetch_notifications(self, user_id: str) -> List[NotificationRecord]:
        """
        Get a user's notifications, newest first.

        Args:
            user_id: Owner to filter by

        Returns:
            Matching records in stored order (empty if none)
        """
        records = await self._load()
        return [r for r in records if r.user_id == user_id]

    async def count_unread(self, user_id: str) -> int:
        """Count a user's unread notifications."""
        return sum(1 for r in await self.fetch_notifications(user_id) if not r.read)

    async def mark_notification_read(self, notification_id: str) -> Optional[NotificationRecord]:
        """
        Mark a notification as read.

        The collection is written back even when no record matches.
        Marking an already-read record leaves it unchanged.

        Args:
            notification_id: Id of the record to mark

        Returns:
            The matching record (now read), or None if no record has this id
        """
        async with self._lock:
            records = await self._load()
            updated = [r.mark_read() if r.id == notification_id else r for r in records]
            await self._save(updated)

        match = next((r for r in updated if r.id == notification_id), None)
        if match is None:
            logger.debug(f"Mark read: notification {notification_id} not found")
        return match

    async def create_notification(
        self,
        user_id: str,
        title: str,
        message: str,
        type: Union[NotificationType, str] = NotificationType.SYSTEM,
    ) -> NotificationRecord:
        """
        Create a notification and prepend it to the collection.

        Args:
            user_id: Owner of the notification
            title: Short headline
            message: Body text
            type: Notification category (default SYSTEM)

        Returns:
            The created record

        Raises:
            ValueError: type is not a known NotificationType
        """
        notification_type = NotificationType(type)

        async with self._lock:
            records = await self._load()
            existing_ids = {r.id for r in records}

            notification_id = generate_notification_id()
            while notification_id in existing_ids:
                notification_id = generate_notification_id()

            record = NotificationRecord(
                id=notification_id,
                user_id=user_id,
                type=notification_type,
                title=title,
                message=message,
            )
            records.insert(0, record)
            await self._save(records)

        logger.info(f"Created {notification_type.value} notification {record.id} for user {user_id}")
        return record
