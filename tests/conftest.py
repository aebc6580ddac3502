"""Shared fixtures for feed and pipeline tests."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from xml.sax.saxutils import escape

import pytest


NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def build_item(
    title: str | None = "Story",
    link: str | None = "https://example.com/story",
    published: datetime | None = None,
    description: str | None = None,
) -> str:
    parts = ["<item>"]
    if title is not None:
        parts.append(f"<title>{escape(title)}</title>")
    if link is not None:
        parts.append(f"<link>{escape(link)}</link>")
    if published is not None:
        parts.append(f"<pubDate>{format_datetime(published, usegmt=True)}</pubDate>")
    if description is not None:
        parts.append(f"<description>{escape(description)}</description>")
    parts.append("</item>")
    return "".join(parts)


def build_rss(*items: str) -> bytes:
    body = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        "<title>Test Feed</title><link>https://example.com</link>"
        "<description>Test</description>"
        f"{''.join(items)}"
        "</channel></rss>"
    )
    return body.encode("utf-8")


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def rss_item():
    return build_item


@pytest.fixture
def rss_feed():
    return build_rss
