"""Tests for run result persistence."""

from __future__ import annotations

from datetime import date, datetime, timezone
import json
from pathlib import Path

from daily_ai_news.core.types import NewsItem, ProcessedNewsItem, RunResult
from daily_ai_news.output.store import load_latest, write_run_result


def _result(day: int = 16, titles=("模型发布",)) -> RunResult:
    generated = datetime(2026, 10, day, 23, 0, tzinfo=timezone.utc)
    news = [
        ProcessedNewsItem(
            item=NewsItem(
                title=title,
                link=f"https://example.com/{idx}",
                source_name="机器之心",
                published_at=datetime(2026, 10, day, 20, 30, tzinfo=timezone.utc) if idx == 0 else None,
                content_snippet="摘要内容" if idx == 0 else None,
            ),
            summary="摘要内容" if idx == 0 else "",
            key_points=["要点一", "要点二"],
        )
        for idx, title in enumerate(titles)
    ]
    return RunResult(date=date(2026, 10, day), generated_at=generated, news=news)


def test_write_creates_dated_and_latest_files(tmp_path: Path):
    dated, latest = write_run_result(_result(titles=("A", "B")), tmp_path / "data")

    assert dated.name == "news-2026-10-16.json"
    assert latest.name == "latest.json"
    assert dated.read_text(encoding="utf-8") == latest.read_text(encoding="utf-8")

    data = json.loads(latest.read_text(encoding="utf-8"))
    assert data["date"] == "2026-10-16"
    assert data["generatedAt"] == "2026-10-16T23:00:00Z"
    assert [n["title"] for n in data["news"]] == ["A", "B"]
    first, second = data["news"]
    assert first["sourceName"] == "机器之心"
    assert first["publishDate"] == "2026-10-16T20:30:00Z"
    assert first["keyPoints"] == ["要点一", "要点二"]
    assert second["publishDate"] == ""
    assert second["contentSnippet"] == ""


def test_json_keeps_non_ascii_text(tmp_path: Path):
    _, latest = write_run_result(_result(), tmp_path)
    assert "模型发布" in latest.read_text(encoding="utf-8")


def test_latest_is_superseded_by_newer_run(tmp_path: Path):
    write_run_result(_result(day=15, titles=("old",)), tmp_path)
    write_run_result(_result(day=16, titles=("new",)), tmp_path)

    loaded = load_latest(tmp_path)

    assert loaded is not None
    assert loaded.date == date(2026, 10, 16)
    assert [p.item.title for p in loaded.news] == ["new"]
    assert (tmp_path / "news-2026-10-15.json").exists()
    assert not (tmp_path / "latest.json.tmp").exists()


def test_load_latest_restores_written_result(tmp_path: Path):
    original = _result(titles=("A", "B"))
    write_run_result(original, tmp_path)

    assert load_latest(tmp_path) == original


def test_load_latest_missing_returns_none(tmp_path: Path):
    assert load_latest(tmp_path) is None


def test_load_latest_unreadable_returns_none(tmp_path: Path):
    (tmp_path / "latest.json").write_text("{not json", encoding="utf-8")
    assert load_latest(tmp_path) is None

    (tmp_path / "latest.json").write_text('{"news": []}', encoding="utf-8")
    assert load_latest(tmp_path) is None
