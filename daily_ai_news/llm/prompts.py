"""Prompt loading and rendering helpers for LLM providers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from ..config import SummaryConfig
from ..core.types import NewsItem


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: object) -> str:
    template = _load_template(name)
    return template.format(**values)


def build_key_points_prompt(item: NewsItem, cfg: SummaryConfig) -> str:
    """Render the key point instruction for one item.

    The item's snippet is the body text; items without one repeat the title.
    """
    content = (item.content_snippet or item.title)[: cfg.max_input_chars]
    return _render_template(
        "key_points",
        title=item.title,
        content=content,
        language=cfg.language,
        bullets_min=cfg.bullets_min,
        bullets_max=cfg.bullets_max,
    )
