"""Adapter for the multi-platform CompeteAPI upcoming contests feed.

Entries look like ``{"site", "title", "startTime", "endTime", "duration",
"url"}`` with times and duration expressed in epoch milliseconds.
"""

from __future__ import annotations

from typing import Any, Iterable

from contest_tracker.domain.entities import Contest, DurationUnit, Platform

from .base import FeedAdapter, MalformedFeedError, coerce_number, coerce_timestamp

COMPETEAPI_UPCOMING_URL = "https://competeapi.vercel.app/contests/upcoming/"

_SITE_ALIASES = {
    "code_chef": Platform.CODECHEF,
    "leet_code": Platform.LEETCODE,
    "hacker_rank": Platform.HACKERRANK,
    "hacker_earth": Platform.HACKEREARTH,
    "at_coder": Platform.ATCODER,
}


def resolve_site(site: Any) -> Platform | None:
    """Map a feed ``site`` label onto a known platform."""

    key = str(site or "").strip().lower().replace(" ", "_").replace("-", "_")
    if key in _SITE_ALIASES:
        return _SITE_ALIASES[key]
    try:
        return Platform(key.replace("_", ""))
    except ValueError:
        return None


class CompeteApiFeedAdapter(FeedAdapter):
    """Aggregated feed narrowed to ``platforms``; the first one names the adapter."""

    url = COMPETEAPI_UPCOMING_URL
    duration_unit = DurationUnit.MILLISECONDS

    def __init__(self, platforms: Iterable[Platform], *, url: str | None = None) -> None:
        self.platforms = tuple(platforms)
        if not self.platforms:
            raise ValueError("At least one platform is required")
        self.platform = self.platforms[0]
        super().__init__(url)

    def extract_entries(self, payload: Any) -> list[Any]:
        if isinstance(payload, dict):
            payload = payload.get("data", payload.get("contests"))
        return super().extract_entries(payload)

    def parse_entry(self, entry: Any) -> Contest | None:
        platform = resolve_site(entry.get("site"))
        if platform is None or platform not in self.platforms:
            return None
        start_time = coerce_timestamp(entry["startTime"], milliseconds=True)
        end_value = entry.get("endTime")
        return Contest.build(
            name=str(entry["title"]),
            platform=platform,
            start_time=start_time,
            end_time=coerce_timestamp(end_value, milliseconds=True) if end_value else None,
            duration=coerce_number(entry.get("duration")),
            duration_unit=self.duration_unit,
            url=str(entry["url"]),
        )


class AtCoderFeedAdapter(CompeteApiFeedAdapter):
    def __init__(self, *, url: str | None = None) -> None:
        super().__init__((Platform.ATCODER,), url=url)


__all__ = [
    "AtCoderFeedAdapter",
    "COMPETEAPI_UPCOMING_URL",
    "CompeteApiFeedAdapter",
    "resolve_site",
]
