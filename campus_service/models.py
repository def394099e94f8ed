"""
Shared Pydantic models for the campus service.

These models define the structure for API requests and responses.
Field names on the wire are camelCase to match the stored notification shape.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .notifications.models import NotificationType


class CamelModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime


class PingResponse(BaseModel):
    """Liveness ping response consumed by the backend pinger."""

    status: str
    timestamp: datetime
    uptime: float = Field(..., description="Seconds since the service started")


# === Notifications ===

class NotificationResponse(CamelModel):
    """A single notification as returned by the API."""

    id: str
    user_id: str = Field(..., alias="userId")
    type: NotificationType
    title: str
    message: str
    read: bool
    created_at: str = Field(..., alias="createdAt")


class CreateNotificationRequest(CamelModel):
    """Request body for creating a notification."""

    user_id: str = Field(..., alias="userId", min_length=1, description="Owner of the notification.")
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: NotificationType = Field(
        NotificationType.SYSTEM,
        description="Notification category: 'SYSTEM' (default) or 'JOB'"
    )


class UnreadCountResponse(CamelModel):
    """Unread notification count for the navbar badge."""

    user_id: str = Field(..., alias="userId")
    unread: int


# === Application Events ===

class ApplicationStatusItem(CamelModel):
    """Current state of one job application."""

    id: str
    status: str
    job_title: str = Field(..., alias="jobTitle")
    company: str


class SyncApplicationsRequest(CamelModel):
    """Request body for syncing application statuses into notifications."""

    user_id: str = Field(..., alias="userId", min_length=1)
    applications: List[ApplicationStatusItem] = Field(default_factory=list)


class ApplicationSubmittedRequest(CamelModel):
    """Request body for the application-submitted notification."""

    user_id: str = Field(..., alias="userId", min_length=1)
    job_title: Optional[str] = Field(None, alias="jobTitle")
