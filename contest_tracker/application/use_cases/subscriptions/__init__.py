"""Use cases for managing contest reminder subscriptions."""

from .manage import delete_subscription, list_user_subscriptions, upsert_subscription
from .validators import SubscriptionData, validate_subscription_data

__all__ = [
    "SubscriptionData",
    "delete_subscription",
    "list_user_subscriptions",
    "upsert_subscription",
    "validate_subscription_data",
]
