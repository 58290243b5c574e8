"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from contest_tracker.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_ZONE_LABEL_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s*(?:UTC|GMT)$", re.IGNORECASE)
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` class). If the provided value cannot be resolved, UTC is
    used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` to an aware UTC datetime.

    Naive values are assumed to already be expressed in UTC, which is how
    they are stored in the database.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_utc_naive(value: datetime | None) -> datetime | None:
    """Return ``value`` in UTC without ``tzinfo`` for storage."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the configured application timezone."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.astimezone(get_app_timezone())


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts the ``Z`` suffix, a trailing ``UTC`` or ``GMT`` label and the space
    separated variant some feeds use.
    Raises ``ValueError`` when the value cannot be parsed.
    """

    text = value.strip()
    if _ZONE_LABEL_PATTERN.search(text):
        text = f"{_ZONE_LABEL_PATTERN.sub('', text)}+00:00"
    elif text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    parsed = datetime.fromisoformat(text.replace(" ", "T", 1))
    return ensure_utc(parsed)  # type: ignore[return-value]


def from_epoch(value: float, *, milliseconds: bool = False) -> datetime:
    """Convert an epoch timestamp into an aware UTC datetime."""

    seconds = value / 1000 if milliseconds else value
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
