"""
Per-item key point generation with deterministic fallback.

Items are summarized one at a time with a fixed pause between provider
calls to stay under the provider's rate limits. A provider failure is
never retried and never raised: the item falls back to key points built
from its own title and snippet.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Callable, Sequence

from ..config import SummaryConfig
from ..core.types import NewsItem, ProcessedNewsItem
from ..llm.prompts import build_key_points_prompt
from ..llm.providers.base import TextGenerationProvider
from ..utils.logging import log_event


logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_POINT = "无法生成要点总结"
MAX_KEY_POINTS = 5

_MARKER_RE = re.compile(r"^-\s*")


def parse_key_points(
    text: str,
    max_points: int = MAX_KEY_POINTS,
    fallback_point: str = DEFAULT_FALLBACK_POINT,
) -> list[str]:
    """Extract dash-prefixed lines from a model response.

    Lines not starting with "-" (after trimming) are ignored, the marker is
    stripped and blank results are dropped. Returns at most max_points
    entries, or [fallback_point] when nothing usable remains.
    """
    points: list[str] = []
    for line in (text or "").splitlines():
        stripped = line.strip()
        if not stripped.startswith("-"):
            continue
        point = _MARKER_RE.sub("", stripped, count=1).strip()
        if point:
            points.append(point)
    if not points:
        return [fallback_point]
    return points[:max_points]


class Summarizer:
    """Turns NewsItems into ProcessedNewsItems through a text-generation provider."""

    def __init__(self, provider: TextGenerationProvider, cfg: SummaryConfig):
        self.provider = provider
        self.cfg = cfg

    def summarize(self, item: NewsItem) -> ProcessedNewsItem:
        """Summarize one item; always returns a result."""
        summary = (item.content_snippet or "")[: self.cfg.summary_chars]
        prompt = build_key_points_prompt(item, self.cfg)
        try:
            text = self.provider.generate(prompt)
        except Exception as exc:  # noqa: BLE001
            log_event(
                logger,
                f'Failed to generate summary for "{item.title}"',
                level=logging.ERROR,
                event="summary_failed",
                link=item.link,
                error=f"{type(exc).__name__}: {exc}",
            )
            return ProcessedNewsItem(
                item=item,
                summary=summary,
                key_points=self.fallback_points(item),
            )

        key_points = parse_key_points(
            text,
            max_points=min(self.cfg.bullets_max, MAX_KEY_POINTS),
            fallback_point=self.cfg.fallback_point,
        )
        return ProcessedNewsItem(item=item, summary=summary, key_points=key_points)

    def fallback_points(self, item: NewsItem) -> list[str]:
        points = [item.title]
        if item.content_snippet:
            points.append(item.content_snippet[: self.cfg.fallback_snippet_chars] + "...")
        return points

    def summarize_all(
        self,
        items: Sequence[NewsItem],
        on_item: Callable[[int, NewsItem], None] | None = None,
    ) -> list[ProcessedNewsItem]:
        """Summarize items sequentially, preserving order.

        Sleeps cfg.delay_seconds between successive provider calls.

        Args:
            items: Items to summarize
            on_item: Optional callback invoked with (index, item) after each item
        """
        log_event(
            logger,
            f"Processing {len(items)} news items with AI...",
            event="summarize_start",
            count=len(items),
        )
        processed: list[ProcessedNewsItem] = []
        for idx, item in enumerate(items):
            log_event(
                logger,
                f"[{idx + 1}/{len(items)}] Processing: {item.title}",
                level=logging.DEBUG,
                event="summarize_item",
                link=item.link,
            )
            processed.append(self.summarize(item))
            if on_item is not None:
                on_item(idx, item)
            if idx < len(items) - 1 and self.cfg.delay_seconds > 0:
                time.sleep(self.cfg.delay_seconds)

        log_event(
            logger,
            f"Processed {len(processed)} news items",
            event="summarize_done",
            count=len(processed),
        )
        return processed
