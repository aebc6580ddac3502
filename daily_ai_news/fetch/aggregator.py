"""
Concurrent multi-source aggregation.

All sources are fetched at once and joined with a settle-all gather, so a
slow or failing source only costs its own timeout and never cancels its
siblings. The merged items are ranked newest first and capped.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import logging
from typing import Sequence

import httpx

from ..config import FetchConfig
from ..core.types import NewsItem, SourceDescriptor
from ..utils.logging import log_event
from .fetcher import build_client, fetch_source


logger = logging.getLogger(__name__)

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


async def aggregate(
    sources: Sequence[SourceDescriptor],
    cfg: FetchConfig,
    now: datetime | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[NewsItem]:
    """Fetch all sources concurrently and return the ranked, truncated batch.

    Args:
        sources: Sources to fetch
        cfg: Fetch configuration (recency window, timeout, batch cap)
        now: Reference time for the recency window, defaults to the current UTC time
        client: Optional shared HTTP client; one is created and closed when omitted

    Returns:
        At most cfg.max_items items, newest first, undated items last
    """
    now = now or datetime.now(timezone.utc)
    log_event(
        logger,
        f"Fetching from {len(sources)} sources...",
        event="aggregate_start",
        sources=len(sources),
    )

    if client is None:
        async with build_client(cfg) as owned_client:
            results = await _gather_sources(sources, now, cfg, owned_client)
    else:
        results = await _gather_sources(sources, now, cfg, client)

    merged: list[NewsItem] = []
    for source, result in zip(sources, results):
        if isinstance(result, BaseException):
            log_event(
                logger,
                f"Source {source.name} raised, skipping",
                level=logging.WARNING,
                event="source_error",
                source=source.name,
                error=f"{type(result).__name__}: {result}",
            )
            continue
        merged.extend(result)

    ranked = rank_items(merged, cfg.max_items)
    log_event(
        logger,
        f"Total news items to summarize: {len(ranked)}",
        event="aggregate_done",
        collected=len(merged),
        kept=len(ranked),
    )
    return ranked


async def _gather_sources(
    sources: Sequence[SourceDescriptor],
    now: datetime,
    cfg: FetchConfig,
    client: httpx.AsyncClient,
) -> list[list[NewsItem] | BaseException]:
    tasks = [
        asyncio.create_task(fetch_source(source, now, cfg, client))
        for source in sources
    ]
    return await asyncio.gather(*tasks, return_exceptions=True)


def rank_items(items: Sequence[NewsItem], max_items: int) -> list[NewsItem]:
    """Sort newest first and keep the first max_items.

    Undated items rank below every dated item, including ones older than
    the epoch. The sort is stable, so ties keep their merge order.
    """
    ordered = sorted(items, key=_sort_key, reverse=True)
    return ordered[: max(max_items, 0)]


def _sort_key(item: NewsItem) -> tuple[bool, datetime]:
    return (item.published_at is not None, item.published_at or _EPOCH)
