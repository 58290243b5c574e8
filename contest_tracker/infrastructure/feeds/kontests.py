"""Adapters for the per-platform feeds published in the kontests format.

Each entry looks like ``{"name", "url", "start_time", "end_time",
"duration", "status"}`` with ISO timestamps and the duration in seconds.
"""

from __future__ import annotations

from typing import Any

from contest_tracker.domain.entities import Contest, ContestPhase, DurationUnit, Platform

from .base import FeedAdapter, coerce_number, coerce_timestamp

KONTESTS_BASE_URL = "https://kontests.net/api/v1"

_PHASES = {phase.value: phase for phase in ContestPhase}


class KontestsFeedAdapter(FeedAdapter):
    """Feed whose entries carry an explicit ``status`` phase flag."""

    duration_unit = DurationUnit.SECONDS

    def __init__(self, platform: Platform, slug: str, *, url: str | None = None) -> None:
        self.platform = platform
        self.url = f"{KONTESTS_BASE_URL}/{slug}"
        super().__init__(url)

    def parse_entry(self, entry: Any) -> Contest | None:
        return Contest.build(
            name=str(entry["name"]),
            platform=self.platform,
            start_time=coerce_timestamp(entry["start_time"]),
            end_time=coerce_timestamp(entry["end_time"]) if entry.get("end_time") else None,
            duration=coerce_number(entry.get("duration")),
            duration_unit=self.duration_unit,
            url=str(entry["url"]),
            phase=self.phase_of(entry),
        )

    def phase_of(self, entry: Any) -> ContestPhase:
        status = str(entry.get("status") or "").strip().upper()
        # ONGOING is the spelling some mirrors use for CODING.
        if status == "ONGOING":
            return ContestPhase.CODING
        return _PHASES.get(status, ContestPhase.FINISHED)


class HackerRankFeedAdapter(KontestsFeedAdapter):
    """HackerRank entries carry no usable status; upcoming means not started."""

    def __init__(self, *, url: str | None = None) -> None:
        super().__init__(Platform.HACKERRANK, "hacker_rank", url=url)

    def phase_of(self, entry: Any) -> ContestPhase:
        # The start-time check in ``FeedAdapter.parse`` decides what is upcoming.
        return ContestPhase.BEFORE


__all__ = ["HackerRankFeedAdapter", "KONTESTS_BASE_URL", "KontestsFeedAdapter"]
