"""
Command-line interface for Daily AI News.

Uses Typer to expose three commands:
- run: fetch, summarize and persist today's news
- show: render the latest persisted result in the terminal
- sources: list the configured feed sources

Loads .env.local and .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table
import typer

from .config import AppConfig, load_config
from .output.renderer import render_markdown
from .output.store import LATEST_FILENAME, dated_filename, load_latest
from .runner import NoNewsError, run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


def _load_env() -> None:
    load_dotenv(Path(".env.local"))
    load_dotenv()


def _load(config: Path | None) -> AppConfig:
    return load_config(str(config) if config else None)


@app.command()
def run(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    data_dir: Path | None = typer.Option(None, "--data-dir", "-o", help="Output data directory."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    max_items: int | None = typer.Option(
        None, "--max-items", help="Maximum number of items to summarize."
    ),
    recency_hours: float | None = typer.Option(
        None, "--recency-hours", help="Drop entries older than this many hours."
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="GEMINI_API_KEY",
        help="Override provider API key (or set GEMINI_API_KEY / .env.local).",
    ),
):
    """Fetch today's AI news, summarize every item and save the result.

    Writes news-YYYY-MM-DD.json and latest.json into the data directory.
    Exits with status 1 when no source produced a recent item.
    """
    _load_env()
    cfg = _load(config)

    if api_key:
        cfg.provider.api_key = api_key
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file
    if max_items is not None:
        cfg.fetch.max_items = max_items
    if recency_hours is not None:
        cfg.fetch.recency_hours = recency_hours

    out_dir = data_dir or Path(cfg.output.data_dir)
    try:
        result = run_pipeline(out_dir, cfg, show_progress=progress, console=console)
    except NoNewsError as exc:
        console.print(f"[bold red]No news found:[/] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"[green]Saved[/] {out_dir / dated_filename(result)}")
    console.print(f"[green]Saved[/] {out_dir / LATEST_FILENAME}")
    console.print(f"Generated news for {result.date.isoformat()}:")
    console.print(f"- Total items: {len(result.news)}")
    console.print(f"- Sources: {len({p.item.source_name for p in result.news})}")


@app.command()
def show(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    data_dir: Path | None = typer.Option(None, "--data-dir", "-o", help="Data directory to read."),
    raw: bool = typer.Option(False, "--raw", help="Print Markdown source instead of rendering it."),
):
    """Render the latest saved news, or a waiting notice when none exists yet."""
    cfg = _load(config)
    result = load_latest(data_dir or Path(cfg.output.data_dir))
    text = render_markdown(result)
    if raw:
        typer.echo(text)
    else:
        console.print(Markdown(text))


@app.command()
def sources(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
):
    """List the configured feed sources."""
    cfg = _load(config)
    table = Table(title="Feed sources")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Endpoint")
    for source in cfg.sources:
        table.add_row(source.name, source.category.value, source.endpoint)
    console.print(table)


if __name__ == "__main__":
    app()
