"""
Feed fetching and aggregation.

This package fetches configured sources concurrently and turns their
entries into ranked NewsItem batches.
"""

from .aggregator import aggregate, rank_items
from .fetcher import build_client, fetch_source, normalize_entry, read_feed

__all__ = [
    "aggregate",
    "rank_items",
    "build_client",
    "fetch_source",
    "normalize_entry",
    "read_feed",
]
