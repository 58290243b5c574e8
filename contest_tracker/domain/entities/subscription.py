"""Domain entity representing a contest reminder subscription."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ContestSubscription:
    """A user's request to be reminded about one contest."""

    id: int | None
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
    email_sent: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` once the contest has finished."""

        return self.contest_end_time < now


@dataclass(frozen=True)
class PendingReminder:
    """Subscription selected by the dispatcher together with its owner's name."""

    subscription: ContestSubscription
    recipient_name: str | None = None


__all__ = ["ContestSubscription", "PendingReminder"]
