"""
Unit tests for notification data models.

Tests the NotificationRecord wire shape, defaults, and type validation.
"""

import pytest

from campus_service.notifications.models import (
    NotificationRecord,
    NotificationType,
    generate_notification_id,
)


class TestNotificationRecord:
    """Tests for the NotificationRecord dataclass."""

    def test_defaults(self):
        """New records are unread SYSTEM notifications with id and timestamp."""
        record = NotificationRecord(user_id="u1", title="Hello", message="World")

        assert record.type == NotificationType.SYSTEM
        assert record.read is False
        assert len(record.id) == 12
        assert record.created_at.endswith("Z")

    def test_to_dict_uses_stored_field_names(self):
        """Stored shape uses camelCase keys."""
        record = NotificationRecord(
            id="abc123",
            user_id="u1",
            type=NotificationType.JOB,
            title="Applied",
            message="You applied",
            created_at="2025-01-15T10:30:00Z",
        )

        assert record.to_dict() == {
            "id": "abc123",
            "userId": "u1",
            "type": "JOB",
            "title": "Applied",
            "message": "You applied",
            "read": False,
            "createdAt": "2025-01-15T10:30:00Z",
        }

    @pytest.mark.parametrize("field", ["type", "read"])
    def test_from_dict_requires_type_and_read(self, field):
        """Missing type or read flag is not filled in with a default."""
        data = {
            "id": "n1",
            "userId": "u1",
            "type": "SYSTEM",
            "title": "t",
            "message": "m",
            "read": False,
            "createdAt": "2025-01-15T10:30:00Z",
        }
        del data[field]

        with pytest.raises(KeyError):
            NotificationRecord.from_dict(data)

    @pytest.mark.parametrize("field, value", [
        ("read", "false"),
        ("read", 0),
        ("userId", 42),
        ("title", None),
        ("message", ["m"]),
    ])
    def test_from_dict_rejects_wrong_field_types(self, field, value):
        """Values of the wrong type raise instead of being coerced."""
        data = {
            "id": "n1",
            "userId": "u1",
            "type": "SYSTEM",
            "title": "t",
            "message": "m",
            "read": False,
            "createdAt": "2025-01-15T10:30:00Z",
        }
        data[field] = value

        with pytest.raises(ValueError, match=field):
            NotificationRecord.from_dict(data)

    def test_from_dict_missing_field_raises(self):
        """Missing required fields raise KeyError."""
        with pytest.raises(KeyError):
            NotificationRecord.from_dict({"id": "n1", "title": "t"})

    def test_unknown_type_rejected_at_construction(self):
        """Plain strings are coerced and unknown categories raise."""
        assert NotificationRecord(user_id="u", title="t", message="m", type="JOB").type == NotificationType.JOB

        with pytest.raises(ValueError):
            NotificationRecord(user_id="u", title="t", message="m", type="PROMO")

    def test_mark_read_returns_new_record(self):
        """mark_read leaves the original untouched."""
        record = NotificationRecord(user_id="u1", title="t", message="m")

        read = record.mark_read()

        assert read.read is True
        assert record.read is False
        assert read.id == record.id
        assert read.created_at == record.created_at

    def test_mark_read_on_read_record_is_noop(self):
        """Marking an already-read record returns it unchanged."""
        record = NotificationRecord(user_id="u1", title="t", message="m", read=True)

        assert record.mark_read() is record


def test_generated_ids_are_distinct():
    """Generated ids do not repeat across a realistic batch."""
    ids = {generate_notification_id() for _ in range(1000)}
    assert len(ids) == 1000
