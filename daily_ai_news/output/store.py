"""
JSON persistence for run results.

Every run is written twice: once as news-YYYY-MM-DD.json and once as
latest.json, which replaces the previous latest result atomically.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ..core.types import RunResult
from ..utils.logging import log_event


logger = logging.getLogger(__name__)

LATEST_FILENAME = "latest.json"


def dated_filename(result: RunResult) -> str:
    return f"news-{result.date.isoformat()}.json"


def write_run_result(result: RunResult, data_dir: Path) -> tuple[Path, Path]:
    """Write a run result under its dated name and as the latest result.

    Returns:
        Tuple of (dated file path, latest file path)
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    text = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)

    dated_path = data_dir / dated_filename(result)
    dated_path.write_text(text, encoding="utf-8")
    log_event(logger, f"Saved to {dated_path}", event="result_saved", path=str(dated_path))

    latest_path = data_dir / LATEST_FILENAME
    tmp_path = latest_path.with_suffix(".json.tmp")
    tmp_path.write_text(text, encoding="utf-8")
    os.replace(tmp_path, latest_path)
    log_event(logger, f"Saved to {latest_path}", event="result_saved", path=str(latest_path))

    return dated_path, latest_path


def load_latest(data_dir: Path) -> RunResult | None:
    """Read the latest run result, or None when missing or unreadable."""
    latest_path = data_dir / LATEST_FILENAME
    if not latest_path.exists():
        return None
    try:
        data = json.loads(latest_path.read_text(encoding="utf-8"))
        return RunResult.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
        log_event(
            logger,
            "Failed to load latest news data",
            level=logging.WARNING,
            event="latest_unreadable",
            path=str(latest_path),
            error=f"{type(exc).__name__}: {exc}",
        )
        return None
