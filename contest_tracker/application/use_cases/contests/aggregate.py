"""Fan out to every contest feed and merge the results."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

import httpx

from contest_tracker.config import get_settings
from contest_tracker.domain.entities import Contest, Platform
from contest_tracker.infrastructure.feeds import (
    FeedAdapter,
    FeedError,
    FeedResult,
    create_feed_client,
    get_adapter,
    get_default_adapters,
)
from contest_tracker.utils import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationResult:
    """Merged upcoming contests plus the feeds that could not be read."""

    contests: list[Contest] = field(default_factory=list)
    failures: list[FeedError] = field(default_factory=list)

    @property
    def failed_platforms(self) -> list[Platform]:
        return [failure.platform for failure in self.failures]


async def _fetch_isolated(
    adapter: FeedAdapter, client: httpx.AsyncClient, now: datetime
) -> FeedResult:
    try:
        return await adapter.fetch(client, now=now)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while fetching %s contests", adapter.platform.value)
        return FeedResult(
            platform=adapter.platform,
            error=FeedError(platform=adapter.platform, message=f"Unexpected error: {exc}"),
        )


async def aggregate_contests(
    adapters: Sequence[FeedAdapter] | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    now: datetime | None = None,
) -> AggregationResult:
    """Fetch every feed concurrently and return contests sorted by start time.

    A failing feed contributes no contests and is listed in ``failures``.
    Ties on the start time keep the adapter order.
    """

    adapters = list(adapters) if adapters is not None else get_default_adapters()
    now = now or now_utc()

    owns_client = client is None
    if client is None:
        client = create_feed_client(timeout=get_settings().upstream_timeout_seconds)
    try:
        results = await asyncio.gather(
            *(_fetch_isolated(adapter, client, now) for adapter in adapters)
        )
    finally:
        if owns_client:
            await client.aclose()

    contests: list[Contest] = []
    failures: list[FeedError] = []
    for result in results:
        if result.ok:
            contests.extend(result.contests)
        elif result.error is not None:
            failures.append(result.error)

    contests.sort(key=lambda contest: contest.start_time)
    if failures:
        logger.warning(
            "Aggregated %s contests; %s feeds failed: %s",
            len(contests),
            len(failures),
            ", ".join(failure.platform.value for failure in failures),
        )
    return AggregationResult(contests=contests, failures=failures)


async def fetch_platform_contests(
    platform: Platform,
    *,
    adapter: FeedAdapter | None = None,
    client: httpx.AsyncClient | None = None,
    now: datetime | None = None,
) -> FeedResult:
    """Fetch the upcoming contests of a single platform."""

    adapter = adapter or get_adapter(platform)
    if client is not None:
        return await _fetch_isolated(adapter, client, now or now_utc())
    async with create_feed_client(timeout=get_settings().upstream_timeout_seconds) as owned:
        return await _fetch_isolated(adapter, owned, now or now_utc())


__all__ = ["AggregationResult", "aggregate_contests", "fetch_platform_contests"]
