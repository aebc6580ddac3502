"""Markdown rendering of the latest run result.

The reading side never shows a raw error: a missing or unreadable result
renders a waiting page with the expected update cadence instead.
"""

from __future__ import annotations

from ..core.types import RunResult


PAGE_TITLE = "Daily AI News"
WAITING_MESSAGE = "正在加载最新AI新闻..."
WAITING_HINT = "如果这是您的首次访问，请等待定时任务生成今天的数据。"
CADENCE_HINT = "数据通常在每天上午7点（北京时间）更新"
EMPTY_MESSAGE = "暂无今日新闻"


def render_markdown(result: RunResult | None) -> str:
    """Render a run result as Markdown, or the waiting page when there is none."""
    lines = [f"# {PAGE_TITLE}", ""]
    if result is None:
        lines.extend([WAITING_MESSAGE, "", WAITING_HINT, "", f"_{CADENCE_HINT}_"])
        return "\n".join(lines) + "\n"

    lines.append(f"_{result.date.isoformat()}_")
    lines.append("")
    if not result.news:
        lines.append(EMPTY_MESSAGE)
        return "\n".join(lines) + "\n"

    for idx, processed in enumerate(result.news, start=1):
        item = processed.item
        lines.append(f"## {idx}. [{_escape(item.title)}]({item.link})")
        meta = item.source_name
        if item.published_at is not None:
            meta += f" · {item.published_at.strftime('%Y-%m-%d %H:%M')} UTC"
        lines.append(f"_{meta}_")
        lines.append("")
        for point in processed.key_points:
            lines.append(f"- {point}")
        lines.append("")
    return "\n".join(lines)


def _escape(text: str) -> str:
    return text.replace("[", "\\[").replace("]", "\\]")
