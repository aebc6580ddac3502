"""
Feed fetching and normalization for a single source.

Each source is fetched with httpx and parsed with feedparser. Every failure
mode (connection error, timeout, non-2xx status, unparseable feed) degrades
to an empty result for that source and a warning log event; nothing is
raised to the caller.
"""

from __future__ import annotations

import asyncio
import calendar
from datetime import datetime, timedelta, timezone
import logging
from typing import Any

import feedparser
import httpx

from ..config import FetchConfig
from ..core.types import NewsItem, SourceDescriptor
from ..sources import resolve_source_name
from ..utils.logging import log_event


logger = logging.getLogger(__name__)

FEED_ACCEPT = "application/rss+xml, application/xml, text/xml, */*"
UNTITLED = "Untitled"

_DATE_FIELDS = ("published_parsed", "updated_parsed", "created_parsed")
_SNIPPET_FIELDS = ("description", "summary")


def feed_headers(cfg: FetchConfig) -> dict[str, str]:
    """Headers sent with every feed request."""
    return {
        "User-Agent": cfg.user_agent,
        "Accept": FEED_ACCEPT,
        "Accept-Language": cfg.accept_language,
        "Cache-Control": "no-cache",
    }


def build_client(cfg: FetchConfig) -> httpx.AsyncClient:
    """Create the async HTTP client shared by one aggregation pass."""
    return httpx.AsyncClient(
        timeout=cfg.timeout_seconds,
        follow_redirects=True,
        trust_env=cfg.trust_env,
    )


async def read_feed(
    endpoint: str,
    client: httpx.AsyncClient,
    cfg: FetchConfig,
) -> list[Any]:
    """Download and parse one feed, returning its raw entries.

    Raises:
        httpx.HTTPError: On connection failures and non-2xx responses
        asyncio.TimeoutError: When the whole fetch exceeds cfg.timeout_seconds
        ValueError: When the body is not a readable feed
    """

    async def _download() -> bytes:
        resp = await client.get(endpoint, headers=feed_headers(cfg))
        resp.raise_for_status()
        return resp.content

    body = await asyncio.wait_for(_download(), timeout=cfg.timeout_seconds)
    parsed = feedparser.parse(body)
    entries = list(parsed.get("entries") or [])
    if parsed.get("bozo"):
        reason = parsed.get("bozo_exception")
        if not entries:
            raise ValueError(f"Invalid feed: {reason}")
        log_event(
            logger,
            "Feed is malformed, keeping parsed entries",
            level=logging.WARNING,
            event="feed_malformed",
            endpoint=endpoint,
            reason=str(reason),
            entries=len(entries),
        )
    return entries


async def fetch_source(
    source: SourceDescriptor,
    now: datetime,
    cfg: FetchConfig,
    client: httpx.AsyncClient,
) -> list[NewsItem]:
    """Fetch one source and return its recent, normalized items.

    Args:
        source: The source to fetch
        now: Reference time for the recency window
        cfg: Fetch configuration
        client: Shared async HTTP client

    Returns:
        Items in feed order; an empty list when the source failed
    """
    try:
        entries = await read_feed(source.endpoint, client, cfg)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        _warn_failure(source, "timeout", f"no response within {cfg.timeout_seconds}s")
        return []
    except httpx.HTTPStatusError as exc:
        _warn_failure(source, "http_status", f"HTTP {exc.response.status_code}")
        return []
    except httpx.HTTPError as exc:
        _warn_failure(source, "network_failed", f"{type(exc).__name__}: {exc}")
        return []
    except ValueError as exc:
        _warn_failure(source, "parse_error", str(exc))
        return []

    source_name = resolve_source_name(source.endpoint)
    cutoff = now - timedelta(hours=cfg.recency_hours)
    items: list[NewsItem] = []
    for entry in entries:
        try:
            item = normalize_entry(entry, source_name)
        except (TypeError, ValueError, OverflowError) as exc:
            log_event(
                logger,
                "Skipping unreadable entry",
                level=logging.WARNING,
                event="entry_skipped",
                source=source.name,
                error=f"{type(exc).__name__}: {exc}",
            )
            continue
        if item is None:
            continue
        if not is_recent(item, cutoff):
            continue
        items.append(item)

    log_event(
        logger,
        f"Fetched {len(items)} items from {source.name}",
        event="source_fetched",
        source=source.name,
        endpoint=source.endpoint,
        entries=len(entries),
        kept=len(items),
    )
    return items


def normalize_entry(entry: Any, source_name: str) -> NewsItem | None:
    """Convert a feedparser entry into a NewsItem; None when it has no link."""
    link = str(entry.get("link") or "").strip()
    if not link:
        return None
    title = str(entry.get("title") or "").strip() or UNTITLED
    snippet = _first_text(entry, _SNIPPET_FIELDS)
    return NewsItem(
        title=title,
        link=link,
        source_name=source_name,
        published_at=entry_published_at(entry),
        content_snippet=snippet,
    )


def entry_published_at(entry: Any) -> datetime | None:
    """Return the first available entry timestamp as an aware UTC datetime."""
    for key in _DATE_FIELDS:
        value = entry.get(key)
        if value:
            # feedparser normalizes parsed dates to UTC struct_time
            return datetime.fromtimestamp(calendar.timegm(value), tz=timezone.utc)
    return None


def is_recent(item: NewsItem, cutoff: datetime) -> bool:
    """Undated items are always kept; the cutoff itself is inclusive."""
    if item.published_at is None:
        return True
    return item.published_at >= cutoff


def _first_text(entry: Any, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = entry.get(key)
        if value and str(value).strip():
            return str(value).strip()
    return None


def _warn_failure(source: SourceDescriptor, category: str, detail: str) -> None:
    log_event(
        logger,
        f"Failed to fetch {source.name}: {detail}",
        level=logging.WARNING,
        event="source_failed",
        source=source.name,
        endpoint=source.endpoint,
        error_category=category,
        error=detail,
    )
