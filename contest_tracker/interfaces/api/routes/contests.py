"""Endpoints exposing upcoming programming contests."""

from __future__ import annotations

from datetime import datetime

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from contest_tracker.application.use_cases.contests import (
    ContestFilter,
    aggregate_contests,
    fetch_platform_contests,
    filter_contests,
    summarize_contests,
)
from contest_tracker.domain.entities import Contest, Platform
from contest_tracker.infrastructure.feeds import FeedAdapter
from contest_tracker.interfaces.api.dependencies import get_feed_adapters, get_feed_client
from contest_tracker.interfaces.api.schemas import (
    ContestListResponse,
    ContestRead,
    ContestStatsRead,
    FeedErrorResponse,
    PlatformContestsResponse,
)
from contest_tracker.utils import now_utc

router = APIRouter(prefix="/contests", tags=["contests"])


def _contest_to_schema(contest: Contest) -> ContestRead:
    return ContestRead.model_validate(contest)


def _parse_platforms(values: list[str]) -> list[Platform]:
    platforms: list[Platform] = []
    for value in values:
        try:
            platforms.append(Platform(value.strip().lower()))
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown platform: {value}",
            ) from exc
    return platforms


@router.get("/aggregate", response_model=ContestListResponse)
async def list_upcoming_contests(
    platform: list[str] | None = Query(default=None),
    q: str | None = Query(default=None, max_length=200),
    start: datetime | None = None,
    end: datetime | None = None,
    adapters: list[FeedAdapter] = Depends(get_feed_adapters),
    client: httpx.AsyncClient = Depends(get_feed_client),
) -> ContestListResponse:
    """Return every upcoming contest across platforms, sorted by start time."""

    contest_filter = ContestFilter.create(
        platforms=_parse_platforms(platform or []), search_query=q, start=start, end=end
    )
    now = now_utc()
    result = await aggregate_contests(adapters, client=client, now=now)
    contests = filter_contests(result.contests, contest_filter)
    stats = summarize_contests(contests, now=now)
    return ContestListResponse(
        contests=[_contest_to_schema(contest) for contest in contests],
        failed_platforms=result.failed_platforms,
        stats=ContestStatsRead(total=stats.total, today=stats.today, this_week=stats.this_week),
    )


@router.get(
    "/{platform}",
    response_model=PlatformContestsResponse,
    responses={status.HTTP_502_BAD_GATEWAY: {"model": FeedErrorResponse}},
)
async def list_platform_contests(
    platform: str,
    adapters: list[FeedAdapter] = Depends(get_feed_adapters),
    client: httpx.AsyncClient = Depends(get_feed_client),
):
    """Return the upcoming contests published by a single platform."""

    try:
        selected = Platform(platform.lower())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Unknown platform"
        ) from exc

    adapter = next((item for item in adapters if item.platform is selected), None)
    if adapter is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown platform")

    result = await fetch_platform_contests(selected, adapter=adapter, client=client)
    if result.error is not None:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=FeedErrorResponse(
                error=f"Failed to fetch {selected.display_name} contests: {result.error.message}"
            ).model_dump(by_alias=True),
        )
    return PlatformContestsResponse(
        upcoming_contests=[_contest_to_schema(contest) for contest in result.contests]
    )
