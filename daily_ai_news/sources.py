"""Default feed sources and endpoint-to-display-name resolution."""

from __future__ import annotations

from urllib.parse import urlparse

from .core.types import SourceCategory, SourceDescriptor


UNKNOWN_SOURCE = "Unknown Source"

NEWS_SOURCES: tuple[SourceDescriptor, ...] = (
    SourceDescriptor("36Kr AI", "https://36kr.com/feed/cat-all-ai", SourceCategory.TECH),
    SourceDescriptor("人人都是产品经理 AI", "https://www.woshipm.com/feed", SourceCategory.TECH),
    SourceDescriptor("极客公园", "https://www.geekpark.net/rss", SourceCategory.TECH),
    SourceDescriptor("AI 科技评论", "https://www.leiphone.com/category/ai/feed", SourceCategory.TECH),
    SourceDescriptor("机器之心", "https://www.jiqizhixin.com/rss", SourceCategory.TECH),
    SourceDescriptor("OpenAI Blog", "https://openai.com/news/rss.xml", SourceCategory.COMPANY),
    SourceDescriptor("arXiv CS", "http://export.arxiv.org/rss/cs.AI", SourceCategory.ACADEMIC),
)

# Checked in order; the first substring found in the endpoint wins.
SOURCE_NAME_HINTS: tuple[tuple[str, str], ...] = (
    ("36kr.com", "36Kr"),
    ("woshipm.com", "人人都是产品经理"),
    ("geekpark.net", "极客公园"),
    ("leiphone.com", "雷锋网 AI科技评论"),
    ("jiqizhixin.com", "机器之心"),
    ("openai.com", "OpenAI"),
    ("arxiv.org", "arXiv"),
)


def resolve_source_name(endpoint: str) -> str:
    """Return the display name for a feed endpoint.

    Known publications map to fixed names; anything else falls back to the
    URL host without a leading "www.", or UNKNOWN_SOURCE when the endpoint
    has no parseable host.
    """
    for needle, name in SOURCE_NAME_HINTS:
        if needle in endpoint:
            return name
    try:
        host = urlparse(endpoint).hostname
    except ValueError:
        return UNKNOWN_SOURCE
    if not host:
        return UNKNOWN_SOURCE
    return host.removeprefix("www.")
