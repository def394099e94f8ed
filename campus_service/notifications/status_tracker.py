"""
Application Status Notifications

Turns job application events into JOB notifications:
- a one-off notification when a user applies to a job
- a notification whenever an application moves into a status the user
  should hear about (shortlisted, interview, rejected, hired)

The last seen status of each application is remembered per user under
``prev_app_statuses_<user_id>`` in the same key-value storage.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .models import NotificationRecord, NotificationType
from .storage import KeyValueStorage
from .store import NotificationStorageError, NotificationStore

logger = logging.getLogger(__name__)

STATUS_KEY_PREFIX = "prev_app_statuses_"

# status -> (title, message template)
STATUS_MESSAGES: Dict[str, Tuple[str, str]] = {
    "SHORTLISTED": (
        "Shortlisted for Job",
        "You have been shortlisted for {job_title} at {company}.",
    ),
    "INTERVIEW_SCHEDULED": (
        "Interview Scheduled",
        "Your interview is scheduled for {job_title} at {company}.",
    ),
    "REJECTED": (
        "Application Rejected",
        "You were not selected for {job_title} at {company}.",
    ),
    "HIRED": (
        "Congratulations! Hired",
        "You have been hired for {job_title} at {company}.",
    ),
}


@dataclass
class ApplicationSnapshot:
    """Current state of one job application as seen by the applicant."""

    id: str
    status: str
    job_title: str
    company: str


class ApplicationStatusNotifier:
    """Creates JOB notifications for application events."""

    def __init__(self, store: NotificationStore, storage: KeyValueStorage):
        self.store = store
        self.storage = storage

    def _status_key(self, user_id: str) -> str:
        return f"{STATUS_KEY_PREFIX}{user_id}"

    async def _load_statuses(self, user_id: str) -> Dict[str, str]:
        key = self._status_key(user_id)
        raw = await self.storage.get(key)
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise NotificationStorageError(key, f"invalid JSON ({e})") from e
        if not isinstance(data, dict):
            raise NotificationStorageError(key, f"expected an object, got {type(data).__name__}")
        return data

    async def sync_statuses(
        self,
        user_id: str,
        applications: Iterable[ApplicationSnapshot],
    ) -> List[NotificationRecord]:
        """
        Compare applications against their last seen status.

        Applications seen for the first time only record their status.

        Args:
            user_id: Applicant whose applications are being synced
            applications: Current application states

        Returns:
            Notifications created, in creation order
        """
        previous = await self._load_statuses(user_id)
        created: List[NotificationRecord] = []

        for app in applications:
            prev = previous.get(app.id)
            if prev and prev != app.status and app.status in STATUS_MESSAGES:
                title, template = STATUS_MESSAGES[app.status]
                record = await self.store.create_notification(
                    user_id=user_id,
                    title=title,
                    message=template.format(job_title=app.job_title, company=app.company),
                    type=NotificationType.JOB,
                )
                created.append(record)
            previous[app.id] = app.status

        await self.storage.set(self._status_key(user_id), json.dumps(previous))

        if created:
            logger.info(f"Created {len(created)} status notifications for user {user_id}")
        return created

    async def notify_application_submitted(
        self,
        user_id: str,
        job_title: Optional[str] = None,
    ) -> NotificationRecord:
        """Create the notification shown after a user applies to a job."""
        return await self.store.create_notification(
            user_id=user_id,
            title="Job Application Submitted",
            message=f"You applied to the job: {job_title or 'Job'}",
            type=NotificationType.JOB,
        )
