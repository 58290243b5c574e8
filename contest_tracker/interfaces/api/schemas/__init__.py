from .auth import (
    RegisterRequest,
    RegisterResponse,
    ResendOtpRequest,
    Token,
    UserRead,
    VerifyEmailRequest,
)
from .base import CamelModel, MessageResponse
from .contest import (
    ContestListResponse,
    ContestRead,
    ContestStatsRead,
    FeedErrorResponse,
    PlatformContestsResponse,
)
from .cron import ReminderRunResponse, ReminderRunResults
from .notification import (
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    NotificationUpsertResponse,
)

__all__ = [
    "CamelModel",
    "ContestListResponse",
    "ContestRead",
    "ContestStatsRead",
    "FeedErrorResponse",
    "MessageResponse",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationUpsertResponse",
    "PlatformContestsResponse",
    "RegisterRequest",
    "RegisterResponse",
    "ReminderRunResponse",
    "ReminderRunResults",
    "ResendOtpRequest",
    "Token",
    "UserRead",
    "VerifyEmailRequest",
]
