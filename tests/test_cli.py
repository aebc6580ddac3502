from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from daily_ai_news import cli
from daily_ai_news.output.renderer import WAITING_MESSAGE
from daily_ai_news.runner import NoNewsError


runner = CliRunner()


def test_show_without_latest_prints_waiting_state(tmp_path: Path):
    result = runner.invoke(cli.app, ["show", "--data-dir", str(tmp_path), "--raw"])

    assert result.exit_code == 0
    assert WAITING_MESSAGE in result.output


def test_run_exits_nonzero_when_no_news(monkeypatch, tmp_path: Path):
    def fake_run_pipeline(data_dir, cfg, show_progress=True, console=None):
        raise NoNewsError("No news found in the last 24 hours")

    monkeypatch.setattr(cli, "run_pipeline", fake_run_pipeline)
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli.app, ["run", "--data-dir", str(tmp_path), "--no-progress"])

    assert result.exit_code == 1
    assert not (tmp_path / "latest.json").exists()


def test_run_applies_cli_overrides(monkeypatch, tmp_path: Path):
    seen = {}

    def fake_run_pipeline(data_dir, cfg, show_progress=True, console=None):
        seen["cfg"] = cfg
        seen["data_dir"] = data_dir
        raise NoNewsError("stop")

    monkeypatch.setattr(cli, "run_pipeline", fake_run_pipeline)
    monkeypatch.chdir(tmp_path)

    runner.invoke(
        cli.app,
        ["run", "-o", str(tmp_path / "out"), "--max-items", "3", "--recency-hours", "12", "--api-key", "k"],
    )

    cfg = seen["cfg"]
    assert seen["data_dir"] == tmp_path / "out"
    assert cfg.fetch.max_items == 3
    assert cfg.fetch.recency_hours == 12
    assert cfg.provider.api_key == "k"


def test_sources_lists_configured_sources():
    result = runner.invoke(cli.app, ["sources"])

    assert result.exit_code == 0
    assert "company" in result.output
    assert "academic" in result.output
