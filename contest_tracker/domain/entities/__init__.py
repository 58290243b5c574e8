"""Domain entities exposed by the application."""

from .auth_dialog import (
    AuthDialogEvent,
    AuthDialogEventType,
    AuthDialogState,
    AuthDialogTransition,
    AuthDialogView,
    PendingAction,
)
from .contest import (
    DEFAULT_CONTEST_DURATION_MINUTES,
    DEFAULT_CONTEST_TYPE,
    Contest,
    ContestPhase,
    DurationUnit,
    Platform,
    derive_duration_minutes,
    make_contest_id,
)
from .subscription import ContestSubscription, PendingReminder
from .user import User
from .verification_token import VerificationToken

__all__ = [
    "AuthDialogEvent",
    "AuthDialogEventType",
    "AuthDialogState",
    "AuthDialogTransition",
    "AuthDialogView",
    "PendingAction",
    "Contest",
    "ContestPhase",
    "ContestSubscription",
    "DEFAULT_CONTEST_DURATION_MINUTES",
    "DEFAULT_CONTEST_TYPE",
    "DurationUnit",
    "PendingReminder",
    "Platform",
    "User",
    "VerificationToken",
    "derive_duration_minutes",
    "make_contest_id",
]
