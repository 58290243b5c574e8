"""Pydantic models describing aggregated contests."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from contest_tracker.domain.entities import ContestPhase, Platform

from .base import CamelModel


class ContestRead(CamelModel):
    """Contest as returned by the feed and aggregation endpoints."""

    id: str
    name: str
    platform: Platform
    start_time: datetime
    end_time: datetime
    duration: int = Field(..., description="Duration in minutes")
    url: str
    phase: ContestPhase
    type: str
    external_id: str | None = None


class PlatformContestsResponse(CamelModel):
    upcoming_contests: list[ContestRead]


class FeedErrorResponse(CamelModel):
    error: str


class ContestStatsRead(CamelModel):
    total: int
    today: int
    this_week: int


class ContestListResponse(CamelModel):
    contests: list[ContestRead]
    failed_platforms: list[Platform] = Field(default_factory=list)
    stats: ContestStatsRead


__all__ = [
    "ContestListResponse",
    "ContestRead",
    "ContestStatsRead",
    "FeedErrorResponse",
    "PlatformContestsResponse",
]
