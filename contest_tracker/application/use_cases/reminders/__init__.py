"""Use cases for the scheduled reminder job."""

from .dispatch import (
    ReminderDispatchResult,
    ReminderSender,
    dispatch_reminders,
    send_reminder_email,
)

__all__ = [
    "ReminderDispatchResult",
    "ReminderSender",
    "dispatch_reminders",
    "send_reminder_email",
]
