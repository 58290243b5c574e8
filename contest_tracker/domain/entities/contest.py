"""Domain entity representing an upcoming programming contest."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

DEFAULT_CONTEST_DURATION_MINUTES = 120
DEFAULT_CONTEST_TYPE = "General"


class Platform(str, Enum):
    """Contest platforms tracked by the application."""

    LEETCODE = "leetcode"
    CODEFORCES = "codeforces"
    CODECHEF = "codechef"
    HACKERRANK = "hackerrank"
    HACKEREARTH = "hackerearth"
    ATCODER = "atcoder"

    @property
    def display_name(self) -> str:
        return PLATFORM_DISPLAY_NAMES[self]


PLATFORM_DISPLAY_NAMES: dict[Platform, str] = {
    Platform.LEETCODE: "LeetCode",
    Platform.CODEFORCES: "Codeforces",
    Platform.CODECHEF: "CodeChef",
    Platform.HACKERRANK: "HackerRank",
    Platform.HACKEREARTH: "HackerEarth",
    Platform.ATCODER: "AtCoder",
}


class ContestPhase(str, Enum):
    """Lifecycle flag reported by upstream feeds."""

    BEFORE = "BEFORE"
    CODING = "CODING"
    FINISHED = "FINISHED"


class DurationUnit(str, Enum):
    """Unit in which an upstream feed expresses contest durations."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    MILLISECONDS = "milliseconds"

    def to_minutes(self, value: float) -> float:
        if self is DurationUnit.SECONDS:
            return value / 60
        if self is DurationUnit.MILLISECONDS:
            return value / 60_000
        return value


def normalize_contest_name(name: str) -> str:
    """Lowercase ``name`` and collapse internal whitespace."""

    return " ".join(name.split()).lower()


def make_contest_id(platform: Platform, name: str, start_time: datetime) -> str:
    """Return the canonical identifier for a contest.

    The identifier only depends on the platform, the normalized name and the
    start time so every feed produces the same value for the same contest.
    """

    key = f"{platform.value}|{normalize_contest_name(name)}|{start_time.isoformat()}"
    return hashlib.sha1(key.encode("utf-8")).hexdigest()[:16]


def derive_duration_minutes(
    start_time: datetime,
    end_time: datetime | None,
    *,
    supplied: float | None = None,
    unit: DurationUnit = DurationUnit.MINUTES,
) -> int:
    """Return the contest duration in whole minutes.

    A duration supplied by the feed wins when it is positive. Otherwise the
    value is computed from the time range, falling back to
    ``DEFAULT_CONTEST_DURATION_MINUTES`` when the range is empty or inverted.
    """

    if supplied is not None:
        minutes = unit.to_minutes(supplied)
        if minutes > 0:
            return int(round(minutes))

    if end_time is not None:
        minutes = (end_time - start_time).total_seconds() / 60
        if minutes > 0:
            return int(round(minutes))

    return DEFAULT_CONTEST_DURATION_MINUTES


@dataclass(frozen=True)
class Contest:
    """Contest information normalized across every upstream feed."""

    id: str
    name: str
    platform: Platform
    start_time: datetime
    end_time: datetime
    duration: int
    url: str
    phase: ContestPhase = ContestPhase.BEFORE
    type: str = DEFAULT_CONTEST_TYPE
    external_id: str | None = None

    def __post_init__(self) -> None:
        if self.end_time < self.start_time:
            raise ValueError("Contest end time must not precede its start time")

    @classmethod
    def build(
        cls,
        *,
        name: str,
        platform: Platform,
        start_time: datetime,
        url: str,
        end_time: datetime | None = None,
        duration: float | None = None,
        duration_unit: DurationUnit = DurationUnit.MINUTES,
        phase: ContestPhase = ContestPhase.BEFORE,
        type: str | None = None,
        external_id: str | None = None,
    ) -> "Contest":
        """Create a contest deriving the id, duration and end time."""

        minutes = derive_duration_minutes(
            start_time, end_time, supplied=duration, unit=duration_unit
        )
        if end_time is None or end_time <= start_time:
            end_time = start_time + timedelta(minutes=minutes)
        return cls(
            id=make_contest_id(platform, name, start_time),
            name=name.strip(),
            platform=platform,
            start_time=start_time,
            end_time=end_time,
            duration=minutes,
            url=url,
            phase=phase,
            type=(type or "").strip() or DEFAULT_CONTEST_TYPE,
            external_id=external_id,
        )


__all__ = [
    "Contest",
    "ContestPhase",
    "DEFAULT_CONTEST_DURATION_MINUTES",
    "DEFAULT_CONTEST_TYPE",
    "DurationUnit",
    "PLATFORM_DISPLAY_NAMES",
    "Platform",
    "derive_duration_minutes",
    "make_contest_id",
    "normalize_contest_name",
]
