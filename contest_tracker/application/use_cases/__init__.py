"""Aggregate application use cases."""

from .contests import aggregate_contests, filter_contests
from .reminders import dispatch_reminders
from .subscriptions import delete_subscription, list_user_subscriptions, upsert_subscription
from .users import authenticate_user, register_user, verify_email

__all__ = [
    "aggregate_contests",
    "authenticate_user",
    "delete_subscription",
    "dispatch_reminders",
    "filter_contests",
    "list_user_subscriptions",
    "register_user",
    "upsert_subscription",
    "verify_email",
]
