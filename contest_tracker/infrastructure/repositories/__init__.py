"""Repository implementations for infrastructure layer."""

from .subscription_repository import SubscriptionRepository
from .user_repository import UserRepository
from .verification_token_repository import VerificationTokenRepository

__all__ = [
    "SubscriptionRepository",
    "UserRepository",
    "VerificationTokenRepository",
]
