"""Pydantic models describing contest reminder subscriptions."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class NotificationCreate(CamelModel):
    """Payload used to subscribe to reminders for a contest."""

    contest_id: str = Field(..., min_length=1, max_length=255)
    contest_name: str = Field(..., min_length=1, max_length=255)
    contest_platform: str = Field(..., min_length=1, max_length=50)
    contest_url: str = Field(..., min_length=1, max_length=500)
    contest_start_time: datetime
    contest_end_time: datetime
    notify_via_email: bool = False
    notify_via_whatsapp: bool = False
    email: str | None = Field(default=None, max_length=255)
    whatsapp_number: str | None = Field(default=None, max_length=32)


class NotificationRead(CamelModel):
    """Stored subscription returned to its owner."""

    id: int
    user_id: int
    contest_id: str
    contest_name: str
    contest_platform: str
    contest_url: str
    contest_start_time: datetime
    contest_end_time: datetime
    notify_via_email: bool
    notify_via_whatsapp: bool
    email: str | None = None
    whatsapp_number: str | None = None
    email_sent: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationListResponse(CamelModel):
    notifications: list[NotificationRead]


class NotificationUpsertResponse(CamelModel):
    notification: NotificationRead
    created: bool


__all__ = [
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationUpsertResponse",
]
