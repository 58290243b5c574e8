"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types
from datetime import datetime, timezone

import pytest

from contest_tracker.infrastructure import email as email_module

START = datetime(2026, 10, 20, 14, 30, tzinfo=timezone.utc)


class _RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that records the messages it sends."""

    instances: list["_RecordingClient"] = []
    response = types.SimpleNamespace(status_code=202, body=None)

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key
        self.messages = []
        _RecordingClient.instances.append(self)

    def send(self, message):
        self.messages.append(message)
        return self.response


@pytest.fixture()
def recording_client(monkeypatch: pytest.MonkeyPatch):
    _RecordingClient.instances = []
    _RecordingClient.response = types.SimpleNamespace(status_code=202, body=None)
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)
    return _RecordingClient


def test_send_email_without_configuration(recording_client) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    assert email_module.send_email("Subject", "<p>Body</p>", "ada@example.com") is False
    assert recording_client.instances == []


def test_deliver_email_without_configuration_raises(recording_client) -> None:
    with pytest.raises(email_module.EmailDeliveryError):
        email_module.deliver_email("Subject", "<p>Body</p>", "ada@example.com")


def test_deliver_email_uses_configured_credentials(sendgrid_settings, recording_client) -> None:
    email_module.deliver_email("Subject", "<p>Body</p>", "ada@example.com")

    (client,) = recording_client.instances
    assert client.api_key == "SG.test-key"
    (message,) = client.messages
    payload = message.get()
    assert payload["from"]["email"] == "reminders@example.com"
    assert payload["subject"] == "Subject"
    assert payload["personalizations"][0]["to"][0]["email"] == "ada@example.com"


def test_deliver_email_reports_error_status(sendgrid_settings, recording_client) -> None:
    recording_client.response = types.SimpleNamespace(
        status_code=400,
        body=json.dumps({"errors": [{"message": "Invalid sender", "help": "https://sg/help"}]}),
    )

    with pytest.raises(email_module.EmailDeliveryError) as excinfo:
        email_module.deliver_email("Subject", "<p>Body</p>", "ada@example.com")

    assert "400" in str(excinfo.value)
    assert "Invalid sender (help: https://sg/help)" in str(excinfo.value)
    assert email_module.send_email("Subject", "<p>Body</p>", "ada@example.com") is False


def test_deliver_email_wraps_client_exceptions(
    sendgrid_settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    class _FailingClient:
        def __init__(self, api_key: str) -> None:
            pass

        def send(self, message):
            error = RuntimeError("Unauthorized")
            error.status_code = 401
            error.body = b'{"errors": [{"message": "The provided authorization grant is invalid"}]}'
            raise error

    monkeypatch.setattr(email_module, "SendGridAPIClient", _FailingClient)

    with pytest.raises(email_module.EmailDeliveryError) as excinfo:
        email_module.deliver_email("Subject", "<p>Body</p>", "ada@example.com")

    assert str(excinfo.value) == (
        "SendGrid API request failed with status 401: "
        "The provided authorization grant is invalid"
    )


def test_contest_reminder_email_content() -> None:
    subject, html = email_module.build_contest_reminder_email(
        contest_name="Weekly <Contest> 420",
        contest_platform="leetcode",
        contest_url="https://leetcode.com/contest/weekly-contest-420",
        contest_start_time=START,
        user_name="Ada",
    )

    assert subject == "Reminder: Weekly <Contest> 420 starts in 1 hour!"
    assert "Weekly &lt;Contest&gt; 420" in html
    assert "<strong>Platform:</strong> Leetcode" in html
    assert "Hi Ada!" in html
    assert "October 20, 2026" in html
    assert "02:30 PM UTC" in html
    assert email_module.PLATFORM_COLORS["leetcode"] in html
    assert 'href="https://leetcode.com/contest/weekly-contest-420"' in html


def test_contest_reminder_uses_configured_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    from contest_tracker.config import reset_settings_cache
    from contest_tracker.utils import get_app_timezone

    monkeypatch.setenv("APP_TIMEZONE", "UTC+05:30")
    reset_settings_cache()
    get_app_timezone.cache_clear()

    date_label, time_label = email_module.format_contest_start(START)

    assert "October 20, 2026" in date_label
    assert time_label.startswith("08:00 PM")


def test_verification_email_includes_code_and_link(
    sendgrid_settings, recording_client
) -> None:
    assert email_module.send_verification_email(
        "ada@example.com", "042137", expires_in_minutes=10
    )

    (message,) = recording_client.instances[0].messages
    html = message.get()["content"][0]["value"]
    assert "042137" in html
    assert "10 minutes" in html
    assert "/verify-email?email=ada%40example.com" in html
