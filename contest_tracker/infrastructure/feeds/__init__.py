"""Upstream contest feed adapters and their registry."""

from contest_tracker.domain.entities import Platform

from .base import (
    FeedAdapter,
    FeedError,
    FeedResult,
    MalformedFeedError,
    create_feed_client,
)
from .codeforces import CodeforcesFeedAdapter
from .competeapi import AtCoderFeedAdapter, CompeteApiFeedAdapter
from .kontests import HackerRankFeedAdapter, KontestsFeedAdapter


def get_default_adapters() -> list[FeedAdapter]:
    """Return one adapter per tracked platform."""

    return [
        CodeforcesFeedAdapter(),
        KontestsFeedAdapter(Platform.CODECHEF, "code_chef"),
        KontestsFeedAdapter(Platform.LEETCODE, "leet_code"),
        HackerRankFeedAdapter(),
        KontestsFeedAdapter(Platform.HACKEREARTH, "hacker_earth"),
        AtCoderFeedAdapter(),
    ]


def get_adapter(platform: Platform) -> FeedAdapter:
    """Return the default adapter serving ``platform``."""

    for adapter in get_default_adapters():
        if adapter.platform is platform:
            return adapter
    raise LookupError(f"No feed adapter registered for {platform.value}")


__all__ = [
    "AtCoderFeedAdapter",
    "CodeforcesFeedAdapter",
    "CompeteApiFeedAdapter",
    "FeedAdapter",
    "FeedError",
    "FeedResult",
    "HackerRankFeedAdapter",
    "KontestsFeedAdapter",
    "MalformedFeedError",
    "create_feed_client",
    "get_adapter",
    "get_default_adapters",
]
