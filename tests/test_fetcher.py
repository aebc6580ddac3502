"""Tests for single-source fetching, normalization and the recency filter."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import httpx

from daily_ai_news.config import FetchConfig
from daily_ai_news.core.types import SourceCategory, SourceDescriptor
from daily_ai_news.fetch import fetcher
from daily_ai_news.fetch.fetcher import fetch_source


SOURCE = SourceDescriptor("Example", "https://www.example.com/feed", SourceCategory.TECH)


def _fetch(handler, now, cfg: FetchConfig | None = None):
    cfg = cfg or FetchConfig()

    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_source(SOURCE, now, cfg, client)

    return asyncio.run(_run())


def test_fetch_normalizes_entries(now, rss_feed, rss_item):
    body = rss_feed(
        rss_item(
            title="GPT news",
            link="https://example.com/gpt",
            published=now - timedelta(hours=1),
            description="A new model was released.",
        )
    )

    items = _fetch(lambda request: httpx.Response(200, content=body), now)

    assert len(items) == 1
    item = items[0]
    assert item.title == "GPT news"
    assert item.link == "https://example.com/gpt"
    assert item.source_name == "example.com"
    assert item.published_at == now - timedelta(hours=1)
    assert item.content_snippet == "A new model was released."


def test_fetch_sends_feed_headers(now, rss_feed):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.headers)
        return httpx.Response(200, content=rss_feed())

    cfg = FetchConfig(user_agent="TestBot/1.0")
    _fetch(handler, now, cfg)

    assert seen["user-agent"] == "TestBot/1.0"
    assert seen["cache-control"] == "no-cache"
    assert "accept-language" in seen
    assert "application/rss+xml" in seen["accept"]


def test_recency_filter_drops_only_stale_entries(now, rss_feed, rss_item):
    body = rss_feed(
        rss_item(title="fresh", link="https://example.com/fresh", published=now - timedelta(hours=1)),
        rss_item(title="stale", link="https://example.com/stale", published=now - timedelta(hours=30)),
        rss_item(title="undated", link="https://example.com/undated"),
    )

    items = _fetch(lambda request: httpx.Response(200, content=body), now)

    assert [item.title for item in items] == ["fresh", "undated"]
    assert items[1].published_at is None


def test_recency_boundary_is_inclusive(now, rss_feed, rss_item):
    body = rss_feed(
        rss_item(title="edge", link="https://example.com/edge", published=now - timedelta(hours=24)),
        rss_item(
            title="past-edge",
            link="https://example.com/past",
            published=now - timedelta(hours=24, seconds=1),
        ),
    )

    items = _fetch(lambda request: httpx.Response(200, content=body), now)

    assert [item.title for item in items] == ["edge"]


def test_recency_window_is_configurable(now, rss_feed, rss_item):
    body = rss_feed(
        rss_item(title="two-hours", link="https://example.com/a", published=now - timedelta(hours=2)),
    )

    items = _fetch(
        lambda request: httpx.Response(200, content=body),
        now,
        FetchConfig(recency_hours=1),
    )

    assert items == []


def test_entries_without_link_are_dropped_and_titles_defaulted(now, rss_feed, rss_item):
    body = rss_feed(
        rss_item(title="no link", link=None),
        rss_item(title=None, link="https://example.com/untitled"),
    )

    items = _fetch(lambda request: httpx.Response(200, content=body), now)

    assert len(items) == 1
    assert items[0].title == "Untitled"
    assert items[0].link == "https://example.com/untitled"


def test_non_success_status_yields_no_items(now, rss_feed, rss_item):
    body = rss_feed(rss_item())
    assert _fetch(lambda request: httpx.Response(503, content=body), now) == []


def test_connection_error_yields_no_items(now):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert _fetch(handler, now) == []


def test_read_timeout_yields_no_items(now):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    assert _fetch(handler, now) == []


def test_slow_feed_is_abandoned_after_timeout(now, rss_feed, rss_item):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, content=rss_feed(rss_item()))

    items = _fetch(handler, now, FetchConfig(timeout_seconds=0.05))

    assert items == []


def test_unparseable_body_yields_no_items(now):
    items = _fetch(lambda request: httpx.Response(200, content=b"definitely not a feed"), now)
    assert items == []


def test_malformed_feed_keeps_recovered_entries(now, rss_feed, rss_item):
    body = rss_feed(
        rss_item(title="ok", link="https://example.com/ok", published=now - timedelta(hours=1))
    ).replace(b"</channel>", b"<broken></channel>")

    items = _fetch(lambda request: httpx.Response(200, content=body), now)

    assert [item.title for item in items] == ["ok"]


def test_unreadable_entry_is_skipped(monkeypatch, now, rss_feed, rss_item):
    real_normalize = fetcher.normalize_entry

    def flaky_normalize(entry, source_name):
        if entry.get("title") == "bad":
            raise ValueError("cannot normalize")
        return real_normalize(entry, source_name)

    monkeypatch.setattr(fetcher, "normalize_entry", flaky_normalize)
    body = rss_feed(
        rss_item(title="first", link="https://example.com/1"),
        rss_item(title="bad", link="https://example.com/2"),
        rss_item(title="last", link="https://example.com/3"),
    )

    items = _fetch(lambda request: httpx.Response(200, content=body), now)

    assert [item.title for item in items] == ["first", "last"]
