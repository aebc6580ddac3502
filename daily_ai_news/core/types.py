"""
Core data types for the Daily AI News pipeline.

This module defines the records that flow through a run:
- SourceDescriptor: One configured feed source
- NewsItem: A normalized entry produced by a source fetch
- ProcessedNewsItem: A NewsItem with its summary and key points
- RunResult: The ordered output of one complete pipeline run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


class SourceCategory(str, Enum):
    """Closed set of source category tags."""

    TECH = "tech"
    COMPANY = "company"
    ACADEMIC = "academic"


@dataclass(frozen=True)
class SourceDescriptor:
    """Static configuration for one feed source.

    Attributes:
        name: Display label used in logs and the source table
        endpoint: Feed URL to fetch
        category: Category tag of the source
    """
    name: str
    endpoint: str
    category: SourceCategory = SourceCategory.TECH


@dataclass(frozen=True)
class NewsItem:
    """A normalized news entry from one feed.

    The link is the identity of an item. Items from different sources
    that share a link are kept side by side, never merged.

    Attributes:
        title: Entry headline, never empty
        link: URL of the story
        source_name: Display name resolved from the source endpoint
        published_at: Timezone-aware publish time, or None when unknown
        content_snippet: Short description text from the feed, if any
    """
    title: str
    link: str
    source_name: str
    published_at: datetime | None = None
    content_snippet: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "sourceName": self.source_name,
            "publishDate": _format_timestamp(self.published_at) if self.published_at else "",
            "contentSnippet": self.content_snippet or "",
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NewsItem:
        publish_date = data.get("publishDate") or ""
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            source_name=str(data.get("sourceName") or ""),
            published_at=_parse_timestamp(publish_date) if publish_date else None,
            content_snippet=data.get("contentSnippet") or None,
        )


@dataclass(frozen=True)
class ProcessedNewsItem:
    """A NewsItem enriched with a short summary and key points.

    Attributes:
        item: The original NewsItem
        summary: Leading slice of the content snippet, may be empty
        key_points: Ordered list of 1-5 short strings, never empty
    """
    item: NewsItem
    summary: str = ""
    key_points: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = self.item.to_dict()
        data["summary"] = self.summary
        data["keyPoints"] = list(self.key_points)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProcessedNewsItem:
        key_points = data.get("keyPoints") or []
        if not isinstance(key_points, list):
            raise ValueError("keyPoints must be a list")
        return cls(
            item=NewsItem.from_dict(data),
            summary=str(data.get("summary") or ""),
            key_points=[str(point) for point in key_points],
        )


@dataclass(frozen=True)
class RunResult:
    """Output of one pipeline run, handed to the persistence writer.

    Attributes:
        date: UTC calendar date of the run
        generated_at: UTC timestamp when the result was assembled
        news: Processed items in aggregator order
    """
    date: date
    generated_at: datetime
    news: list[ProcessedNewsItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "generatedAt": _format_timestamp(self.generated_at),
            "news": [item.to_dict() for item in self.news],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunResult:
        news = data.get("news") or []
        if not isinstance(news, list):
            raise ValueError("news must be a list")
        return cls(
            date=date.fromisoformat(str(data["date"])),
            generated_at=_parse_timestamp(str(data["generatedAt"])),
            news=[ProcessedNewsItem.from_dict(entry) for entry in news],
        )


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_timestamp(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
