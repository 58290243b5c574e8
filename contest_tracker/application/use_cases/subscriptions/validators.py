"""Validation helpers for subscription payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from email_validator import EmailNotValidError, validate_email

from contest_tracker.application.errors import ValidationError
from contest_tracker.domain.entities import Platform
from contest_tracker.utils import ensure_utc

_WHATSAPP_PATTERN = re.compile(r"^\+?\d{7,15}$")
_WHATSAPP_SEPARATORS = re.compile(r"[\s\-().]")


@dataclass(frozen=True)
class SubscriptionData:
    """Fields supplied by the client when subscribing to a contest."""

    contest_id: str
    contest_name: str
    contest_platform: str
    contest_url: str
    contest_start_time: datetime
    contest_end_time: datetime
    notify_via_email: bool
    notify_via_whatsapp: bool
    email: str | None = None
    whatsapp_number: str | None = None


def normalize_email(email: str | None) -> str | None:
    """Return the normalized address or raise :class:`ValidationError`."""

    if email is None or not email.strip():
        return None
    try:
        return validate_email(email.strip(), check_deliverability=False).normalized
    except EmailNotValidError as exc:
        raise ValidationError("Invalid email address", field="email") from exc


def normalize_whatsapp_number(number: str | None) -> str | None:
    """Strip separators and check the number has 7 to 15 digits."""

    if number is None or not number.strip():
        return None
    compact = _WHATSAPP_SEPARATORS.sub("", number.strip())
    if not _WHATSAPP_PATTERN.match(compact):
        raise ValidationError("Invalid WhatsApp number", field="whatsappNumber")
    return compact


def validate_subscription_data(data: SubscriptionData) -> SubscriptionData:
    """Return a cleaned copy of ``data`` or raise :class:`ValidationError`."""

    if not data.contest_id.strip():
        raise ValidationError("Contest id is required", field="contestId")
    if not data.contest_name.strip():
        raise ValidationError("Contest name is required", field="contestName")
    try:
        platform = Platform(data.contest_platform.strip().lower())
    except ValueError as exc:
        raise ValidationError("Unknown contest platform", field="contestPlatform") from exc
    start_time = ensure_utc(data.contest_start_time)
    end_time = ensure_utc(data.contest_end_time)
    if end_time < start_time:
        raise ValidationError(
            "Contest end time must not precede its start time", field="contestEndTime"
        )
    if not (data.notify_via_email or data.notify_via_whatsapp):
        raise ValidationError(
            "Select at least one notification channel", field="notifyViaEmail"
        )

    email = normalize_email(data.email)
    whatsapp_number = normalize_whatsapp_number(data.whatsapp_number)
    if data.notify_via_email and email is None:
        raise ValidationError("Email is required for email reminders", field="email")
    if data.notify_via_whatsapp and whatsapp_number is None:
        raise ValidationError(
            "WhatsApp number is required for WhatsApp reminders", field="whatsappNumber"
        )

    return SubscriptionData(
        contest_id=data.contest_id.strip(),
        contest_name=data.contest_name.strip(),
        contest_platform=platform.value,
        contest_url=data.contest_url.strip(),
        contest_start_time=start_time,
        contest_end_time=end_time,
        notify_via_email=data.notify_via_email,
        notify_via_whatsapp=data.notify_via_whatsapp,
        email=email,
        whatsapp_number=whatsapp_number,
    )
