"""Scheduled job that emails reminders for contests starting soon."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from contest_tracker.config import get_settings
from contest_tracker.domain.entities import PendingReminder
from contest_tracker.infrastructure.email import send_contest_reminder_email
from contest_tracker.infrastructure.repositories import SubscriptionRepository
from contest_tracker.utils import now_utc

logger = logging.getLogger(__name__)

ReminderSender = Callable[[PendingReminder, int], None]


@dataclass
class ReminderDispatchResult:
    """Summary of one dispatcher run."""

    success: bool
    timestamp: datetime
    total: int = 0
    sent: int = 0
    failed: int = 0
    deleted: int = 0
    errors: list[str] = field(default_factory=list)
    message: str = ""


def send_reminder_email(reminder: PendingReminder, lead_minutes: int) -> None:
    """Deliver the reminder email for ``reminder``; raises on failure."""

    subscription = reminder.subscription
    if not subscription.email:
        raise ValueError("Subscription has no email address")
    send_contest_reminder_email(
        subscription.email,
        contest_name=subscription.contest_name,
        contest_platform=subscription.contest_platform,
        contest_url=subscription.contest_url,
        contest_start_time=subscription.contest_start_time,
        user_name=reminder.recipient_name,
        lead_minutes=lead_minutes,
    )


def dispatch_reminders(
    session: Session,
    *,
    now: datetime | None = None,
    lookahead: timedelta | None = None,
    sender: ReminderSender | None = None,
) -> ReminderDispatchResult:
    """Send due email reminders, then purge subscriptions of finished contests.

    Each reminder is sent independently: a failed delivery is recorded and the
    subscription stays pending for the next run. Delivery is at-least-once;
    overlapping runs may both send a reminder that neither has marked yet.
    The function never raises; faults outside the per-reminder loop produce a
    result with ``success`` set to ``False``.
    """

    now = now or now_utc()
    if lookahead is None:
        lookahead = timedelta(minutes=get_settings().reminder_lookahead_minutes)
    sender = sender or send_reminder_email
    lead_minutes = int(lookahead.total_seconds() // 60)
    result = ReminderDispatchResult(success=False, timestamp=now)
    repository = SubscriptionRepository(session)

    try:
        pending = repository.list_pending_email_reminders(
            window_start=now, window_end=now + lookahead
        )
    except Exception as exc:
        session.rollback()
        logger.exception("Reminder dispatch failed while selecting subscriptions")
        result.errors.append(str(exc))
        result.message = "Internal server error"
        return result

    result.total = len(pending)
    logger.info("Found %s pending email notifications", result.total)

    for reminder in pending:
        subscription = reminder.subscription
        try:
            sender(reminder, lead_minutes)
            repository.mark_email_sent(subscription.id)
        except Exception as exc:
            session.rollback()
            result.failed += 1
            result.errors.append(f"Failed to send to {subscription.email}: {exc}")
            logger.error(
                "Failed to send reminder %s to %s: %s", subscription.id, subscription.email, exc
            )
            continue
        result.sent += 1
        logger.info(
            "Email sent to %s for contest: %s", subscription.email, subscription.contest_name
        )

    try:
        result.deleted = repository.delete_expired(now=now)
    except Exception as exc:
        session.rollback()
        logger.exception("Reminder dispatch failed while removing expired subscriptions")
        result.errors.append(str(exc))
        result.message = "Internal server error"
        return result

    logger.info("Cleaned up %s expired notifications", result.deleted)
    result.success = True
    result.message = f"Processed {result.total} notifications"
    return result


__all__ = [
    "ReminderDispatchResult",
    "ReminderSender",
    "dispatch_reminders",
    "send_reminder_email",
]
