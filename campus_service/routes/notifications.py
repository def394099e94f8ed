"""
Notification Endpoints

CRUD-style HTTP surface over the notification store plus the
application-event hooks that generate JOB notifications.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..config import get_settings
from ..models import (
    ApplicationSubmittedRequest,
    CreateNotificationRequest,
    NotificationResponse,
    SyncApplicationsRequest,
    UnreadCountResponse,
)
from ..notifications import (
    ApplicationSnapshot,
    ApplicationStatusNotifier,
    NotificationStorageError,
    NotificationStore,
)

logger = logging.getLogger(__name__)

# Recruiters do not receive applicant notifications
EXCLUDED_ROLES = {"RECRUITER"}

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def get_store(request: Request) -> NotificationStore:
    """Notification store created on application startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Notification storage not initialized")
    return store


def get_notifier(request: Request) -> ApplicationStatusNotifier:
    """Application status notifier created on application startup."""
    notifier = getattr(request.app.state, "notifier", None)
    if notifier is None:
        raise HTTPException(status_code=503, detail="Notification storage not initialized")
    return notifier


def _storage_error(e: NotificationStorageError) -> HTTPException:
    logger.error(f"Notification storage error: {e}")
    return HTTPException(status_code=500, detail=f"Notification storage is corrupt: {e.reason}")


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    user_id: str = Query(..., alias="userId", min_length=1),
    role: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
    store: NotificationStore = Depends(get_store),
):
    """
    Get notifications for a user, newest first.

    Args:
        user_id: Owner to list notifications for
        role: Caller's role; recruiters get an empty list
        limit: Maximum notifications to return (default from settings)
    """
    if role and role.upper() in EXCLUDED_ROLES:
        return []

    try:
        notifications = await store.fetch_notifications(user_id)
    except NotificationStorageError as e:
        raise _storage_error(e)
    except Exception as e:
        logger.error(f"Error fetching notifications: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    limit = limit or get_settings().fetch_limit
    return [n.to_dict() for n in notifications[:limit]]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user_id: str = Query(..., alias="userId", min_length=1),
    store: NotificationStore = Depends(get_store),
):
    """Count a user's unread notifications."""
    try:
        unread = await store.count_unread(user_id)
    except NotificationStorageError as e:
        raise _storage_error(e)
    except Exception as e:
        logger.error(f"Error counting notifications: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return UnreadCountResponse(user_id=user_id, unread=unread)


@router.post("", response_model=NotificationResponse, status_code=201)
async def create_notification(
    request: CreateNotificationRequest,
    store: NotificationStore = Depends(get_store),
):
    """Create a notification for a user."""
    try:
        record = await store.create_notification(
            user_id=request.user_id,
            title=request.title,
            message=request.message,
            type=request.type,
        )
    except NotificationStorageError as e:
        raise _storage_error(e)
    except Exception as e:
        logger.error(f"Error creating notification: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return record.to_dict()


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    store: NotificationStore = Depends(get_store),
):
    """Mark a notification as read."""
    try:
        record = await store.mark_notification_read(notification_id)
    except NotificationStorageError as e:
        raise _storage_error(e)
    except Exception as e:
        logger.error(f"Error updating notification: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if record is None:
        raise HTTPException(status_code=404, detail=f"Notification {notification_id} not found")
    return record.to_dict()


@router.post("/applications/sync", response_model=List[NotificationResponse])
async def sync_application_statuses(
    request: SyncApplicationsRequest,
    notifier: ApplicationStatusNotifier = Depends(get_notifier),
):
    """
    Create notifications for application status changes.

    Returns only the notifications created by this sync.
    """
    snapshots = [
        ApplicationSnapshot(
            id=app.id,
            status=app.status,
            job_title=app.job_title,
            company=app.company,
        )
        for app in request.applications
    ]

    try:
        created = await notifier.sync_statuses(request.user_id, snapshots)
    except NotificationStorageError as e:
        raise _storage_error(e)
    except Exception as e:
        logger.error(f"Error syncing application statuses: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return [n.to_dict() for n in created]


@router.post("/applications/submitted", response_model=NotificationResponse, status_code=201)
async def application_submitted(
    request: ApplicationSubmittedRequest,
    notifier: ApplicationStatusNotifier = Depends(get_notifier),
):
    """Create the notification shown after a user applies to a job."""
    try:
        record = await notifier.notify_application_submitted(request.user_id, request.job_title)
    except NotificationStorageError as e:
        raise _storage_error(e)
    except Exception as e:
        logger.error(f"Error creating application notification: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return record.to_dict()
