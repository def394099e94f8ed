"""
Notification Data Models

Defines the notification record and its category enum, plus the
conversion to and from the stored JSON shape.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


class NotificationType(str, Enum):
    """Notification categories."""

    SYSTEM = "SYSTEM"  # Default, platform messages
    JOB = "JOB"        # Job applications and status changes


def generate_notification_id() -> str:
    """Generate an opaque notification id (12 hex chars)."""
    return uuid.uuid4().hex[:12]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class NotificationRecord:
    """
    A single notification owned by one user.

    Records are immutable; marking one read produces a new record with
    ``read=True``.
    """

    user_id: str
    title: str
    message: str
    type: NotificationType = NotificationType.SYSTEM
    read: bool = False
    id: str = field(default_factory=generate_notification_id)
    created_at: str = field(default_factory=_utc_now_iso)

    def __post_init__(self) -> None:
        # Coerce plain strings so unknown categories fail at construction
        if not isinstance(self.type, NotificationType):
            object.__setattr__(self, "type", NotificationType(self.type))

    def mark_read(self) -> "NotificationRecord":
        """Return this record with the read flag set."""
        if self.read:
            return self
        return replace(self, read=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored JSON shape."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "read": self.read,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationRecord":
        """
        Create a NotificationRecord from its stored JSON shape.

        Every field is required; nothing is defaulted or coerced.

        Raises:
            KeyError: A required field is missing
            ValueError: A field has the wrong type or the type is not a
                known NotificationType
        """
        for name in ("id", "userId", "title", "message", "createdAt"):
            if not isinstance(data[name], str):
                raise ValueError(f"field '{name}' must be a string")
        if not isinstance(data["read"], bool):
            raise ValueError("field 'read' must be a boolean")

        return cls(
            id=data["id"],
            user_id=data["userId"],
            type=NotificationType(data["type"]),
            title=data["title"],
            message=data["message"],
            read=data["read"],
            created_at=data["createdAt"],
        )
