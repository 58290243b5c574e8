"""Common machinery shared by every upstream contest feed adapter."""

from __future__ import annotations

import logging
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from contest_tracker.domain.entities import Contest, ContestPhase, DurationUnit, Platform
from contest_tracker.utils import from_epoch, now_utc, parse_iso_datetime

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}
USER_AGENT = "ContestTracker/1.0 (+https://github.com/contest-tracker)"


@dataclass(frozen=True)
class FeedError:
    """Reason a feed could not be read."""

    platform: Platform
    message: str
    status_code: int | None = None


@dataclass(frozen=True)
class FeedResult:
    """Outcome of fetching one feed.

    ``error`` is set when the fetch failed, which is distinct from a feed that
    simply lists no upcoming contests.
    """

    platform: Platform
    contests: list[Contest] = field(default_factory=list)
    error: FeedError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MalformedFeedError(ValueError):
    """Raised by ``parse`` when the payload does not have the expected shape."""


def create_feed_client(*, timeout: float) -> httpx.AsyncClient:
    """Return an HTTP client configured for fresh, bounded feed requests."""

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers={**NO_CACHE_HEADERS, "User-Agent": USER_AGENT, "Accept": "application/json"},
        follow_redirects=True,
    )


def coerce_timestamp(value: Any, *, milliseconds: bool = False) -> datetime:
    """Parse an ISO string or an epoch number into an aware UTC datetime."""

    if isinstance(value, bool):
        raise TypeError("Boolean is not a valid timestamp")
    if isinstance(value, (int, float)):
        return from_epoch(value, milliseconds=milliseconds)
    if isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            return parse_iso_datetime(text)
        return from_epoch(number, milliseconds=milliseconds)
    raise TypeError(f"Unsupported timestamp value: {value!r}")


def coerce_number(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    return float(value)


class FeedAdapter(metaclass=ABCMeta):
    """Fetch one platform's feed and keep only the contests not started yet."""

    platform: Platform
    url: str
    duration_unit: DurationUnit = DurationUnit.SECONDS

    def __init__(self, url: str | None = None) -> None:
        if url is not None:
            self.url = url

    async def fetch(self, client: httpx.AsyncClient, *, now: datetime | None = None) -> FeedResult:
        """Return the upcoming contests or a failure result; never raises."""

        now = now or now_utc()
        try:
            response = await client.get(self.url, headers=NO_CACHE_HEADERS)
        except httpx.TimeoutException:
            return self._failure(f"Timed out fetching {self.url}")
        except httpx.HTTPError as exc:
            return self._failure(f"Request to {self.url} failed: {exc}")

        if not response.is_success:
            return self._failure(
                f"{self.platform.display_name} feed responded with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            return self._failure(f"{self.platform.display_name} feed returned invalid JSON")

        try:
            contests = self.parse(payload, now=now)
        except MalformedFeedError as exc:
            return self._failure(str(exc))

        logger.debug("Fetched %s upcoming contests from %s", len(contests), self.platform.value)
        return FeedResult(platform=self.platform, contests=contests)

    def parse(self, payload: Any, *, now: datetime) -> list[Contest]:
        """Turn a decoded payload into upcoming contests.

        Individual malformed entries are skipped. A payload of the wrong shape,
        or one where no entry could be read at all, raises
        :class:`MalformedFeedError`.
        """

        entries = self.extract_entries(payload)
        contests: list[Contest] = []
        skipped = 0
        for entry in entries:
            try:
                contest = self.parse_entry(entry)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                skipped += 1
                logger.debug("Skipping malformed %s entry %r: %s", self.platform.value, entry, exc)
                continue
            if contest is None:
                continue
            if contest.phase is not ContestPhase.BEFORE or contest.start_time <= now:
                continue
            contests.append(contest)

        if entries and skipped == len(entries):
            raise MalformedFeedError(
                f"{self.platform.display_name} feed returned {skipped} unreadable entries"
            )
        if skipped:
            logger.warning(
                "Skipped %s of %s malformed %s entries", skipped, len(entries), self.platform.value
            )
        return contests

    def extract_entries(self, payload: Any) -> list[Any]:
        if not isinstance(payload, list):
            raise MalformedFeedError(
                f"{self.platform.display_name} feed returned an unexpected payload"
            )
        return payload

    @abstractmethod
    def parse_entry(self, entry: Any) -> Contest | None:
        """Return the contest described by ``entry`` or ``None`` to skip it."""

    def _failure(self, message: str, *, status_code: int | None = None) -> FeedResult:
        logger.warning("Contest feed for %s failed: %s", self.platform.value, message)
        return FeedResult(
            platform=self.platform,
            error=FeedError(platform=self.platform, message=message, status_code=status_code),
        )


__all__ = [
    "FeedAdapter",
    "FeedError",
    "FeedResult",
    "MalformedFeedError",
    "coerce_number",
    "coerce_timestamp",
    "create_feed_client",
]
