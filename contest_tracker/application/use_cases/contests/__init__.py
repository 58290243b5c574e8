"""Use cases for reading and narrowing the upcoming contest list."""

from .aggregate import AggregationResult, aggregate_contests, fetch_platform_contests
from .filters import ContestFilter, ContestStats, filter_contests, summarize_contests

__all__ = [
    "AggregationResult",
    "ContestFilter",
    "ContestStats",
    "aggregate_contests",
    "fetch_platform_contests",
    "filter_contests",
    "summarize_contests",
]
