"""Integration tests for the contest endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from contest_tracker.domain.entities import Platform
from contest_tracker.infrastructure.feeds import (
    CodeforcesFeedAdapter,
    HackerRankFeedAdapter,
    KontestsFeedAdapter,
)
from contest_tracker.interfaces.api.dependencies import get_feed_adapters, get_feed_client


def _iso(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S.000Z")


@pytest.fixture()
def upstream():
    """Canned upstream responses keyed by host and path."""

    start = datetime.now(timezone.utc).replace(microsecond=0) + timedelta(days=2)
    return {
        "start": start,
        "routes": {
            "/api/contest.list": httpx.Response(
                200,
                json={
                    "status": "OK",
                    "result": [
                        {
                            "id": 2100,
                            "name": "Codeforces Round 990 (Div. 2)",
                            "type": "CF",
                            "phase": "BEFORE",
                            "durationSeconds": 7200,
                            "startTimeSeconds": int((start + timedelta(hours=3)).timestamp()),
                        }
                    ],
                },
            ),
            "/api/v1/code_chef": httpx.Response(
                200,
                json=[
                    {
                        "name": "Starters 150",
                        "url": "https://www.codechef.com/START150",
                        "start_time": _iso(start),
                        "end_time": _iso(start + timedelta(hours=2)),
                        "duration": "7200.0",
                        "status": "BEFORE",
                    }
                ],
            ),
            "/api/v1/hacker_rank": httpx.Response(503, text="Service Unavailable"),
        },
    }


@pytest.fixture()
def feed_overrides(app, upstream):
    def handler(request: httpx.Request) -> httpx.Response:
        return upstream["routes"].get(request.url.path, httpx.Response(404))

    async def _client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            yield client

    app.dependency_overrides[get_feed_client] = _client
    app.dependency_overrides[get_feed_adapters] = lambda: [
        CodeforcesFeedAdapter(),
        KontestsFeedAdapter(Platform.CODECHEF, "code_chef"),
        HackerRankFeedAdapter(),
    ]
    yield
    app.dependency_overrides.clear()


def test_platform_endpoint_returns_upcoming_contests(client, feed_overrides, upstream) -> None:
    response = client.get("/contests/codechef")

    assert response.status_code == 200
    (contest,) = response.json()["upcomingContests"]
    assert contest["name"] == "Starters 150"
    assert contest["platform"] == "codechef"
    assert contest["phase"] == "BEFORE"
    assert contest["duration"] == 120
    assert len(contest["id"]) == 16
    started = datetime.fromisoformat(contest["startTime"].replace("Z", "+00:00"))
    assert started == upstream["start"]
    assert "endTime" in contest


def test_platform_endpoint_reports_upstream_failure(client, feed_overrides) -> None:
    response = client.get("/contests/hackerrank")

    assert response.status_code == 502
    assert "HackerRank" in response.json()["error"]


def test_unknown_platform_is_not_found(client, feed_overrides) -> None:
    assert client.get("/contests/topcoder").status_code == 404
    assert client.get("/contests/atcoder").status_code == 404


def test_aggregate_merges_sorts_and_reports_failures(client, feed_overrides) -> None:
    response = client.get("/contests/aggregate")

    assert response.status_code == 200
    body = response.json()
    assert [contest["name"] for contest in body["contests"]] == [
        "Starters 150",
        "Codeforces Round 990 (Div. 2)",
    ]
    assert body["failedPlatforms"] == ["hackerrank"]
    assert body["stats"] == {"total": 2, "today": 0, "thisWeek": 2}


def test_aggregate_applies_filters(client, feed_overrides) -> None:
    response = client.get(
        "/contests/aggregate", params={"platform": ["codeforces"], "q": "div. 2"}
    )

    assert response.status_code == 200
    names = [contest["name"] for contest in response.json()["contests"]]
    assert names == ["Codeforces Round 990 (Div. 2)"]


def test_aggregate_rejects_unknown_platform_filter(client, feed_overrides) -> None:
    response = client.get("/contests/aggregate", params={"platform": "topcoder"})

    assert response.status_code == 400
