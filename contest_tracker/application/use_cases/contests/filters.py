"""Pure filtering and summary helpers over an aggregated contest list."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from contest_tracker.domain.entities import Contest, Platform
from contest_tracker.utils import ensure_app_timezone, ensure_utc


@dataclass(frozen=True)
class ContestFilter:
    """Active filter dimensions; empty values impose no restriction."""

    platforms: frozenset[Platform] = field(default_factory=frozenset)
    search_query: str = ""
    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def create(
        cls,
        *,
        platforms: Iterable[Platform | str] = (),
        search_query: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> "ContestFilter":
        return cls(
            platforms=frozenset(Platform(platform) for platform in platforms),
            search_query=(search_query or "").strip(),
            start=ensure_utc(start),
            end=ensure_utc(end),
        )

    @property
    def is_active(self) -> bool:
        return bool(self.platforms or self.search_query or self.start or self.end)

    def matches(self, contest: Contest) -> bool:
        if self.platforms and contest.platform not in self.platforms:
            return False
        if self.search_query and self.search_query.lower() not in contest.name.lower():
            return False
        if self.start is not None and contest.start_time < self.start:
            return False
        if self.end is not None and contest.start_time > self.end:
            return False
        return True


def filter_contests(contests: Sequence[Contest], contest_filter: ContestFilter) -> list[Contest]:
    """Return the contests satisfying every active filter, preserving order."""

    if not contest_filter.is_active:
        return list(contests)
    return [contest for contest in contests if contest_filter.matches(contest)]


@dataclass(frozen=True)
class ContestStats:
    total: int
    today: int
    this_week: int


def summarize_contests(contests: Sequence[Contest], *, now: datetime) -> ContestStats:
    """Count all contests, those starting today and those within seven days."""

    local_today = ensure_app_timezone(now).date()
    week_end = now + timedelta(days=7)
    today = sum(
        1 for contest in contests if ensure_app_timezone(contest.start_time).date() == local_today
    )
    this_week = sum(1 for contest in contests if now <= contest.start_time <= week_end)
    return ContestStats(total=len(contests), today=today, this_week=this_week)


__all__ = ["ContestFilter", "ContestStats", "filter_contests", "summarize_contests"]
