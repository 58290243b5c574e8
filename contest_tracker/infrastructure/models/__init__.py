"""ORM models used by the application infrastructure."""

from .contest_notification import ContestNotificationModel
from .user import UserModel
from .verification_token import VerificationTokenModel

__all__ = [
    "ContestNotificationModel",
    "UserModel",
    "VerificationTokenModel",
]
