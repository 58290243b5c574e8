"""Persistence helpers for contest reminder subscriptions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from contest_tracker.domain.entities import ContestSubscription, PendingReminder
from contest_tracker.infrastructure.models import ContestNotificationModel
from contest_tracker.utils import ensure_utc, ensure_utc_naive, now_utc


class SubscriptionRepository:
    """Provide CRUD operations for :class:`ContestSubscription` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, subscription_id: int, *, user_id: int) -> ContestSubscription | None:
        model = (
            self.session.query(ContestNotificationModel)
            .filter(ContestNotificationModel.id == subscription_id)
            .filter(ContestNotificationModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_user_and_contest(
        self, *, user_id: int, contest_id: str
    ) -> ContestSubscription | None:
        model = (
            self.session.query(ContestNotificationModel)
            .filter_by(user_id=user_id, contest_id=contest_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_active_for_user(self, user_id: int, *, now: datetime) -> Sequence[ContestSubscription]:
        query = (
            self.session.query(ContestNotificationModel)
            .filter(ContestNotificationModel.user_id == user_id)
            .filter(ContestNotificationModel.contest_end_time >= ensure_utc_naive(now))
            .order_by(
                ContestNotificationModel.contest_start_time.asc(),
                ContestNotificationModel.id.asc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def list_pending_email_reminders(
        self, *, window_start: datetime, window_end: datetime
    ) -> Sequence[PendingReminder]:
        """Return email reminders due for contests starting inside the window.

        Both bounds are inclusive.
        """

        query = (
            self.session.query(ContestNotificationModel)
            .filter(ContestNotificationModel.notify_via_email.is_(True))
            .filter(ContestNotificationModel.email_sent.is_(False))
            .filter(ContestNotificationModel.email.isnot(None))
            .filter(ContestNotificationModel.email != "")
            .filter(ContestNotificationModel.contest_start_time >= ensure_utc_naive(window_start))
            .filter(ContestNotificationModel.contest_start_time <= ensure_utc_naive(window_end))
            .order_by(
                ContestNotificationModel.contest_start_time.asc(),
                ContestNotificationModel.id.asc(),
            )
        )
        return [
            PendingReminder(
                subscription=self._to_entity(model),
                recipient_name=model.user.name if model.user is not None else None,
            )
            for model in query.all()
        ]

    def create(self, subscription: ContestSubscription) -> ContestSubscription:
        model = ContestNotificationModel()
        self._apply_entity_to_model(model, subscription)
        model.created_at = ensure_utc_naive(subscription.created_at or now_utc())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, subscription: ContestSubscription) -> ContestSubscription:
        if subscription.id is None:
            raise ValueError("Subscription id is required for updates")
        model = self.session.get(ContestNotificationModel, subscription.id)
        if model is None:
            msg = f"Subscription with id {subscription.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, subscription)
        model.updated_at = ensure_utc_naive(subscription.updated_at or now_utc())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, subscription_id: int) -> None:
        model = self.session.get(ContestNotificationModel, subscription_id)
        if model is None:
            msg = f"Subscription with id {subscription_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def mark_email_sent(self, subscription_id: int) -> bool:
        """Flag the reminder as sent; return ``False`` if it already was."""

        updated = (
            self.session.query(ContestNotificationModel)
            .filter(ContestNotificationModel.id == subscription_id)
            .filter(ContestNotificationModel.email_sent.is_(False))
            .update(
                {ContestNotificationModel.email_sent: True},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    def delete_expired(self, *, now: datetime, user_id: int | None = None) -> int:
        """Delete subscriptions whose contest ended before ``now``."""

        query = self.session.query(ContestNotificationModel).filter(
            ContestNotificationModel.contest_end_time < ensure_utc_naive(now)
        )
        if user_id is not None:
            query = query.filter(ContestNotificationModel.user_id == user_id)
        deleted = query.delete(synchronize_session=False)
        self.session.commit()
        return deleted

    @staticmethod
    def _apply_entity_to_model(
        model: ContestNotificationModel, subscription: ContestSubscription
    ) -> None:
        model.user_id = subscription.user_id
        model.contest_id = subscription.contest_id
        model.contest_name = subscription.contest_name
        model.contest_platform = subscription.contest_platform
        model.contest_url = subscription.contest_url
        model.contest_start_time = ensure_utc_naive(subscription.contest_start_time)
        model.contest_end_time = ensure_utc_naive(subscription.contest_end_time)
        model.notify_via_email = subscription.notify_via_email
        model.notify_via_whatsapp = subscription.notify_via_whatsapp
        model.email = subscription.email
        model.whatsapp_number = subscription.whatsapp_number
        model.email_sent = subscription.email_sent

    @staticmethod
    def _to_entity(model: ContestNotificationModel) -> ContestSubscription:
        return ContestSubscription(
            id=model.id,
            user_id=model.user_id,
            contest_id=model.contest_id,
            contest_name=model.contest_name,
            contest_platform=model.contest_platform,
            contest_url=model.contest_url,
            contest_start_time=ensure_utc(model.contest_start_time),
            contest_end_time=ensure_utc(model.contest_end_time),
            notify_via_email=model.notify_via_email,
            notify_via_whatsapp=model.notify_via_whatsapp,
            email=model.email,
            whatsapp_number=model.whatsapp_number,
            email_sent=model.email_sent,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["SubscriptionRepository"]
