"""Use cases for listing, creating and removing contest subscriptions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from sqlalchemy.orm import Session

from contest_tracker.application.errors import NotFoundError
from contest_tracker.domain.entities import ContestSubscription
from contest_tracker.infrastructure.repositories import SubscriptionRepository
from contest_tracker.utils import now_utc

from .validators import SubscriptionData, validate_subscription_data

logger = logging.getLogger(__name__)


def list_user_subscriptions(
    session: Session, *, user_id: int, now: datetime | None = None
) -> Sequence[ContestSubscription]:
    """Purge the user's finished contests and return the remaining subscriptions."""

    now = now or now_utc()
    repository = SubscriptionRepository(session)
    purged = repository.delete_expired(now=now, user_id=user_id)
    if purged:
        logger.info("Removed %s expired subscriptions for user %s", purged, user_id)
    return repository.list_active_for_user(user_id, now=now)


def upsert_subscription(
    session: Session, *, user_id: int, data: SubscriptionData
) -> tuple[ContestSubscription, bool]:
    """Create the (user, contest) subscription or update its channels in place.

    Returns the stored subscription and whether it was newly created.
    """

    cleaned = validate_subscription_data(data)
    repository = SubscriptionRepository(session)

    existing = repository.get_by_user_and_contest(
        user_id=user_id, contest_id=cleaned.contest_id
    )
    if existing is not None:
        updated = replace(
            existing,
            notify_via_email=cleaned.notify_via_email,
            notify_via_whatsapp=cleaned.notify_via_whatsapp,
            email=cleaned.email,
            whatsapp_number=cleaned.whatsapp_number,
            updated_at=now_utc(),
        )
        return repository.update(updated), False

    subscription = ContestSubscription(
        id=None,
        user_id=user_id,
        contest_id=cleaned.contest_id,
        contest_name=cleaned.contest_name,
        contest_platform=cleaned.contest_platform,
        contest_url=cleaned.contest_url,
        contest_start_time=cleaned.contest_start_time,
        contest_end_time=cleaned.contest_end_time,
        notify_via_email=cleaned.notify_via_email,
        notify_via_whatsapp=cleaned.notify_via_whatsapp,
        email=cleaned.email,
        whatsapp_number=cleaned.whatsapp_number,
        email_sent=False,
        created_at=now_utc(),
    )
    return repository.create(subscription), True


def delete_subscription(session: Session, *, user_id: int, subscription_id: int) -> None:
    """Delete a subscription owned by ``user_id``."""

    repository = SubscriptionRepository(session)
    if repository.get_for_user(subscription_id, user_id=user_id) is None:
        raise NotFoundError("Notification not found")
    repository.delete(subscription_id)


__all__ = ["delete_subscription", "list_user_subscriptions", "upsert_subscription"]
