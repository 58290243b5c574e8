"""Adapter for the official Codeforces ``contest.list`` API."""

from __future__ import annotations

from typing import Any

from contest_tracker.domain.entities import Contest, ContestPhase, DurationUnit, Platform

from .base import FeedAdapter, MalformedFeedError, coerce_number, coerce_timestamp

CODEFORCES_API_URL = "https://codeforces.com/api/contest.list"
CODEFORCES_CONTEST_URL = "https://codeforces.com/contest/{id}"

# PENDING_SYSTEM_TEST and SYSTEM_TEST fall back to CODING: started, not final.
_PHASES = {
    "BEFORE": ContestPhase.BEFORE,
    "CODING": ContestPhase.CODING,
    "FINISHED": ContestPhase.FINISHED,
}


class CodeforcesFeedAdapter(FeedAdapter):
    platform = Platform.CODEFORCES
    url = CODEFORCES_API_URL
    duration_unit = DurationUnit.SECONDS

    def extract_entries(self, payload: Any) -> list[Any]:
        if not isinstance(payload, dict) or payload.get("status") != "OK":
            comment = payload.get("comment") if isinstance(payload, dict) else None
            raise MalformedFeedError(
                f"Codeforces API returned an error: {comment or 'unexpected payload'}"
            )
        result = payload.get("result")
        if not isinstance(result, list):
            raise MalformedFeedError("Codeforces API returned no contest list")
        return result

    def parse_entry(self, entry: Any) -> Contest | None:
        contest_id = entry["id"]
        return Contest.build(
            name=str(entry["name"]),
            platform=self.platform,
            start_time=coerce_timestamp(entry["startTimeSeconds"]),
            duration=coerce_number(entry.get("durationSeconds")),
            duration_unit=self.duration_unit,
            url=CODEFORCES_CONTEST_URL.format(id=contest_id),
            phase=_PHASES.get(str(entry.get("phase") or ""), ContestPhase.CODING),
            type=entry.get("type"),
            external_id=str(contest_id),
        )


__all__ = ["CODEFORCES_API_URL", "CodeforcesFeedAdapter"]
