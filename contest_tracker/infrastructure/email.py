"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from html import escape
from typing import Any
from urllib.parse import urlencode

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from contest_tracker.config import get_settings
from contest_tracker.utils import ensure_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_PLATFORM_COLOR = "#6366f1"
PLATFORM_COLORS: dict[str, str] = {
    "codeforces": "#1890ff",
    "leetcode": "#ffa116",
    "codechef": "#5b4638",
    "hackerrank": "#00ea64",
    "hackerearth": "#2c3454",
    "atcoder": "#222222",
}


class EmailDeliveryError(RuntimeError):
    """Raised when a message could not be handed over to SendGrid."""


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, details: str | None, fallback: str) -> str:
    if status_code and details:
        return f"SendGrid API request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid API request failed with status {status_code}"
    if details:
        return f"SendGrid API request failed: {details}"
    return f"Error sending email via SendGrid: {fallback}"


def deliver_email(subject: str, html_content: str, recipient: str) -> None:
    """Send an email through SendGrid or raise :class:`EmailDeliveryError`."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        raise EmailDeliveryError("SendGrid configuration incomplete; email delivery is disabled")

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        description = _describe_failure(
            getattr(exc, "status_code", None),
            _extract_sendgrid_error_details(getattr(exc, "body", None)),
            str(exc),
        )
        logger.error(description)
        raise EmailDeliveryError(description) from exc

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        details = _extract_sendgrid_error_details(getattr(response, "body", None))
        description = (
            f"SendGrid API responded with status {status_code}: {details}"
            if details
            else f"SendGrid API responded with status {status_code}"
        )
        logger.error(description)
        raise EmailDeliveryError(description)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Best-effort variant of :func:`deliver_email` returning a success flag."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    try:
        deliver_email(subject, html_content, recipient)
    except EmailDeliveryError:
        return False
    return True


def build_verification_email(
    otp: str, *, expires_in_minutes: int, verify_url: str | None = None
) -> tuple[str, str]:
    """Return the subject and HTML body of the account verification email."""

    subject = "ContestTracker - Email Verification"
    html_content = "".join(
        (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">',
            '<h2 style="color: #333;">Verify Your Email</h2>',
            "<p>Thank you for registering with ContestTracker!</p>",
            "<p>Your verification code is:</p>",
            '<div style="background-color: #f4f4f4; padding: 20px; text-align: center; margin: 20px 0;">',
            f'<span style="font-size: 32px; font-weight: bold; letter-spacing: 8px; color: #333;">{escape(otp)}</span>',
            "</div>",
            f"<p>This code will expire in {expires_in_minutes} minutes.</p>",
            (
                f'<p>Enter it at <a href="{escape(verify_url, quote=True)}">{escape(verify_url)}</a>.</p>'
                if verify_url
                else ""
            ),
            "<p>If you didn't request this verification, please ignore this email.</p>",
            '<p style="color: #666; font-size: 12px;">ContestTracker - Never miss a programming contest</p>',
            "</div>",
        )
    )
    return subject, html_content


def send_verification_email(email: str, otp: str, *, expires_in_minutes: int) -> bool:
    """Send the one-time verification code to ``email``."""

    base_url = get_settings().base_url.rstrip("/")
    verify_url = f"{base_url}/verify-email?{urlencode({'email': email})}"
    subject, html_content = build_verification_email(
        otp, expires_in_minutes=expires_in_minutes, verify_url=verify_url
    )
    return send_email(subject, html_content, email)


def format_contest_start(start_time: datetime) -> tuple[str, str]:
    """Return the localized date and time labels used in reminder emails."""

    local = ensure_app_timezone(start_time)
    if local is None:  # pragma: no cover - callers always provide a value
        raise ValueError("start_time is required")
    date_label = f"{local:%A}, {local:%B} {local.day}, {local:%Y}"
    time_label = f"{local:%I:%M %p} {local.tzname() or ''}".strip()
    return date_label, time_label


def build_contest_reminder_email(
    *,
    contest_name: str,
    contest_platform: str,
    contest_url: str,
    contest_start_time: datetime,
    user_name: str | None = None,
    lead_minutes: int = 60,
) -> tuple[str, str]:
    """Return the subject and HTML body of a contest reminder."""

    platform_key = contest_platform.lower()
    color = PLATFORM_COLORS.get(platform_key, DEFAULT_PLATFORM_COLOR)
    platform_label = contest_platform[:1].upper() + contest_platform[1:]
    date_label, time_label = format_contest_start(contest_start_time)
    lead_label = "1 hour" if lead_minutes == 60 else f"{lead_minutes} minutes"
    greeting = f"Hi {escape(user_name)}!" if user_name else "Hi!"

    subject = f"Reminder: {contest_name} starts in {lead_label}!"
    html_content = "".join(
        (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">',
            f'<div style="background: {color}; padding: 30px; text-align: center;">',
            '<h1 style="color: #ffffff; margin: 0; font-size: 24px;">Contest Reminder</h1>',
            "</div>",
            '<div style="padding: 30px;">',
            f"<p>{greeting}</p>",
            "<p>This is a friendly reminder that a contest you registered for is starting in ",
            f"<strong>{lead_label}</strong>!</p>",
            f'<div style="border-left: 4px solid {color}; padding: 20px; margin: 20px 0;">',
            f'<h2 style="margin: 0 0 10px 0;">{escape(contest_name)}</h2>',
            f"<p><strong>Platform:</strong> {escape(platform_label)}</p>",
            f"<p><strong>Date:</strong> {date_label}</p>",
            f"<p><strong>Time:</strong> {time_label}</p>",
            "</div>",
            '<div style="text-align: center; margin: 30px 0;">',
            f'<a href="{escape(contest_url, quote=True)}" style="background-color: {color}; '
            'color: #ffffff; padding: 14px 28px; text-decoration: none; border-radius: 6px;">'
            "Go to Contest</a>",
            "</div>",
            "<p>Good luck! May your code compile on the first try!</p>",
            "</div>",
            '<p style="color: #999; font-size: 12px; text-align: center;">',
            "You received this email because you set up a notification for this contest on ContestTracker.",
            "</p>",
            "</div>",
        )
    )
    return subject, html_content


def send_contest_reminder_email(
    email: str,
    *,
    contest_name: str,
    contest_platform: str,
    contest_url: str,
    contest_start_time: datetime,
    user_name: str | None = None,
    lead_minutes: int = 60,
) -> None:
    """Render and deliver a contest reminder, raising on delivery failure."""

    subject, html_content = build_contest_reminder_email(
        contest_name=contest_name,
        contest_platform=contest_platform,
        contest_url=contest_url,
        contest_start_time=contest_start_time,
        user_name=user_name,
        lead_minutes=lead_minutes,
    )
    deliver_email(subject, html_content, email)
