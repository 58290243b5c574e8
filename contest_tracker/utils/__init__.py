"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    ensure_utc,
    ensure_utc_naive,
    from_epoch,
    get_app_timezone,
    now_utc,
    parse_iso_datetime,
)

__all__ = [
    "ensure_app_timezone",
    "ensure_utc",
    "ensure_utc_naive",
    "from_epoch",
    "get_app_timezone",
    "now_utc",
    "parse_iso_datetime",
]
