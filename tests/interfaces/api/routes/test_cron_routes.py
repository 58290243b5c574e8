"""Integration tests for the reminder job endpoint."""

from __future__ import annotations

from datetime import timedelta

import pytest

from contest_tracker.application.use_cases.reminders import dispatch as dispatch_module
from contest_tracker.config import reset_settings_cache
from contest_tracker.domain.entities import ContestSubscription
from contest_tracker.infrastructure.repositories import SubscriptionRepository
from contest_tracker.utils import now_utc

CRON_HEADERS = {"Authorization": "Bearer test-cron-secret"}


@pytest.fixture()
def outbox(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    sent: list[dict] = []

    def _send(email: str, **kwargs) -> None:
        sent.append({"email": email, **kwargs})

    monkeypatch.setattr(dispatch_module, "send_contest_reminder_email", _send)
    return sent


@pytest.fixture()
def due_subscription(db_session, user_factory) -> ContestSubscription:
    user = user_factory()
    start = now_utc() + timedelta(minutes=30)
    return SubscriptionRepository(db_session).create(
        ContestSubscription(
            id=None,
            user_id=user.id,
            contest_id="starters-150",
            contest_name="Starters 150",
            contest_platform="codechef",
            contest_url="https://www.codechef.com/START150",
            contest_start_time=start,
            contest_end_time=start + timedelta(hours=2),
            notify_via_email=True,
            notify_via_whatsapp=False,
            email="ada@example.com",
        )
    )


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer wrong"}, {"Authorization": "test-cron-secret"}],
)
def test_requests_without_the_secret_are_rejected(client, outbox, due_subscription, headers) -> None:
    response = client.get("/cron/send-notifications", headers=headers)

    assert response.status_code == 401
    assert outbox == []


def test_unset_secret_rejects_every_request(
    client, outbox, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("CRON_SECRET")
    reset_settings_cache()

    assert client.get("/cron/send-notifications", headers={"Authorization": "Bearer "}).status_code == 401
    assert client.get("/cron/send-notifications", headers=CRON_HEADERS).status_code == 401


def test_run_sends_due_reminders_once(client, outbox, due_subscription) -> None:
    response = client.get("/cron/send-notifications", headers=CRON_HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Processed 1 notifications"
    assert body["results"] == {
        "total": 1,
        "sent": 1,
        "failed": 0,
        "cleanedUp": 0,
        "errors": [],
    }
    assert "timestamp" in body
    (message,) = outbox
    assert message["email"] == "ada@example.com"
    assert message["contest_name"] == "Starters 150"
    assert message["user_name"] == "Ada Lovelace"

    again = client.get("/cron/send-notifications", headers=CRON_HEADERS)
    assert again.json()["results"]["total"] == 0
    assert len(outbox) == 1


def test_failed_run_returns_server_error(
    client, outbox, due_subscription, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _boom(self, **kwargs):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(SubscriptionRepository, "list_pending_email_reminders", _boom)

    response = client.get("/cron/send-notifications", headers=CRON_HEADERS)

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert outbox == []
