"""Tests for the scheduled contest reminder dispatcher."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from contest_tracker.application.use_cases.reminders import dispatch_reminders
from contest_tracker.domain.entities import ContestSubscription
from contest_tracker.infrastructure.repositories import SubscriptionRepository

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def subscribe(db_session, user_factory):
    user = user_factory()
    repository = SubscriptionRepository(db_session)

    def _subscribe(
        contest_id: str,
        starts_in: timedelta,
        *,
        email: str | None = "ada@example.com",
        notify_via_email: bool = True,
        email_sent: bool = False,
        length: timedelta = timedelta(hours=2),
    ) -> ContestSubscription:
        start = NOW + starts_in
        return repository.create(
            ContestSubscription(
                id=None,
                user_id=user.id,
                contest_id=contest_id,
                contest_name=f"Contest {contest_id}",
                contest_platform="codeforces",
                contest_url=f"https://codeforces.com/contest/{contest_id}",
                contest_start_time=start,
                contest_end_time=start + length,
                notify_via_email=notify_via_email,
                notify_via_whatsapp=not notify_via_email,
                email=email,
                whatsapp_number=None if notify_via_email else "+15550109999",
                email_sent=email_sent,
                created_at=NOW - timedelta(days=1),
            )
        )

    return _subscribe


class _Recorder:
    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.calls: list[tuple[str, int, str | None]] = []
        self.fail_for = fail_for or set()

    def __call__(self, reminder, lead_minutes: int) -> None:
        subscription = reminder.subscription
        if subscription.contest_id in self.fail_for:
            raise RuntimeError("SendGrid API responded with status 500")
        self.calls.append((subscription.contest_id, lead_minutes, reminder.recipient_name))


def test_only_contests_inside_the_window_are_reminded(db_session, subscribe) -> None:
    subscribe("started", timedelta(minutes=-1))
    subscribe("soon", timedelta(minutes=30))
    subscribe("boundary", timedelta(minutes=60))
    subscribe("late", timedelta(minutes=61))
    subscribe("later", timedelta(minutes=120))
    subscribe("already-sent", timedelta(minutes=15), email_sent=True)
    subscribe("whatsapp-only", timedelta(minutes=15), notify_via_email=False, email=None)
    sender = _Recorder()

    result = dispatch_reminders(db_session, now=NOW, sender=sender)

    assert result.success is True
    assert result.total == 2
    assert result.sent == 2
    assert result.failed == 0
    assert result.message == "Processed 2 notifications"
    assert sender.calls == [("soon", 60, "Ada Lovelace"), ("boundary", 60, "Ada Lovelace")]


def test_sent_reminders_are_not_repeated(db_session, subscribe) -> None:
    subscription = subscribe("soon", timedelta(minutes=30))
    sender = _Recorder()

    dispatch_reminders(db_session, now=NOW, sender=sender)
    second = dispatch_reminders(db_session, now=NOW + timedelta(minutes=5), sender=sender)

    assert second.total == 0
    assert len(sender.calls) == 1
    stored = SubscriptionRepository(db_session).get_for_user(
        subscription.id, user_id=subscription.user_id
    )
    assert stored.email_sent is True


def test_failed_delivery_is_isolated_and_retried(db_session, subscribe) -> None:
    subscribe("flaky", timedelta(minutes=10))
    subscribe("healthy", timedelta(minutes=20))

    first = dispatch_reminders(db_session, now=NOW, sender=_Recorder(fail_for={"flaky"}))

    assert first.success is True
    assert (first.total, first.sent, first.failed) == (2, 1, 1)
    assert first.errors == [
        "Failed to send to ada@example.com: SendGrid API responded with status 500"
    ]

    retry_sender = _Recorder()
    retry = dispatch_reminders(db_session, now=NOW + timedelta(minutes=1), sender=retry_sender)

    assert retry.total == 1
    assert retry_sender.calls[0][0] == "flaky"


def test_finished_contests_are_cleaned_up(db_session, subscribe) -> None:
    subscribe("finished", timedelta(hours=-3), length=timedelta(hours=2))
    subscribe("running", timedelta(hours=-1), length=timedelta(hours=2))

    result = dispatch_reminders(db_session, now=NOW, sender=_Recorder())

    assert result.deleted == 1
    remaining = SubscriptionRepository(db_session).delete_expired(now=NOW)
    assert remaining == 0


def test_custom_lookahead_changes_window_and_lead(db_session, subscribe) -> None:
    subscribe("later", timedelta(minutes=120))
    sender = _Recorder()

    result = dispatch_reminders(
        db_session, now=NOW, lookahead=timedelta(hours=3), sender=sender
    )

    assert result.sent == 1
    assert sender.calls == [("later", 180, "Ada Lovelace")]


def test_selection_failure_yields_failed_summary(
    db_session, subscribe, monkeypatch: pytest.MonkeyPatch
) -> None:
    subscribe("soon", timedelta(minutes=30))

    def _boom(self, **kwargs):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(SubscriptionRepository, "list_pending_email_reminders", _boom)

    result = dispatch_reminders(db_session, now=NOW, sender=_Recorder())

    assert result.success is False
    assert result.message == "Internal server error"
    assert result.errors == ["database is locked"]
    assert result.sent == 0
