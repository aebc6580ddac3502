"""Run result persistence and rendering."""

from .renderer import render_markdown
from .store import LATEST_FILENAME, load_latest, write_run_result

__all__ = ["write_run_result", "load_latest", "render_markdown", "LATEST_FILENAME"]
