"""
Main pipeline orchestration for Daily AI News.

This module coordinates one run:
1. Build the text-generation provider (fails fast without an API key)
2. Fetch all sources concurrently, filter by recency, rank and truncate
3. Summarize each item sequentially with a throttle between calls
4. Write the run result as a dated file and as latest.json

An empty aggregation aborts the run before summarization, so a run never
replaces latest.json with an empty result.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from .config import AppConfig
from .core.types import RunResult
from .fetch.aggregator import aggregate
from .llm.providers.base import TextGenerationProvider
from .llm.providers.factory import create_provider
from .output.store import write_run_result
from .summarize.summarizer import Summarizer
from .utils.logging import log_event, setup_llm_logger, setup_logging


class NoNewsError(RuntimeError):
    """Raised when aggregation yields no items, aborting the run."""


def run_pipeline(
    data_dir: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
    provider: TextGenerationProvider | None = None,
    now: datetime | None = None,
) -> RunResult:
    """Run the complete fetch, summarize and persist pipeline.

    Args:
        data_dir: Directory receiving the dated and latest JSON files
        cfg: Application configuration
        show_progress: Whether to display a progress bar while summarizing
        console: Rich console for progress output (creates default if None)
        provider: Pre-built provider; built from cfg.provider when None
        now: Reference time for the recency window and result timestamps

    Returns:
        The persisted RunResult

    Raises:
        ValueError: When the provider is misconfigured (e.g. missing API key)
        NoNewsError: When no source produced any recent item
    """
    log_dir = Path(cfg.output.log_dir)
    logger = setup_logging(cfg.logging, log_dir)
    llm_logger = setup_llm_logger(cfg.logging, log_dir)
    now = now or datetime.now(timezone.utc)

    log_event(
        logger,
        "Pipeline start",
        event="pipeline_start",
        data_dir=str(data_dir),
        sources=len(cfg.sources),
        start_time=now.isoformat(),
    )

    if provider is None:
        provider = create_provider(cfg.provider, cfg.logging, llm_logger)
    summarizer = Summarizer(provider, cfg.summary)

    items = asyncio.run(aggregate(cfg.sources, cfg.fetch, now=now))
    if not items:
        log_event(logger, "No news found", event="pipeline_no_news")
        raise NoNewsError(f"No news found in the last {cfg.fetch.recency_hours:g} hours")

    log_event(logger, f"Found {len(items)} news items", event="aggregate_result", count=len(items))

    if show_progress:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console or Console(),
        ) as progress:
            task = progress.add_task("Summarizing", total=len(items))
            processed = summarizer.summarize_all(
                items, on_item=lambda _idx, _item: progress.advance(task, 1)
            )
    else:
        processed = summarizer.summarize_all(items)

    generated_at = now.astimezone(timezone.utc)
    result = RunResult(date=generated_at.date(), generated_at=generated_at, news=processed)
    dated_path, latest_path = write_run_result(result, data_dir)

    log_event(
        logger,
        "Pipeline done",
        event="pipeline_done",
        items=len(processed),
        distinct_sources=len({p.item.source_name for p in processed}),
        dated_path=str(dated_path),
        latest_path=str(latest_path),
    )
    return result
