"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- sources: Feed sources to aggregate (defaults to NEWS_SOURCES)
- FetchConfig: Feed fetching, recency window and batch size
- SummaryConfig: Key point generation and fallback settings
- ProviderConfig: Text-generation provider settings
- OutputConfig: Where run results and logs are written
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml

from .core.types import SourceCategory, SourceDescriptor
from .sources import NEWS_SOURCES


@dataclass
class FetchConfig:
    """Configuration for feed fetching and aggregation.

    Attributes:
        timeout_seconds: Upper bound for one feed fetch, connect to last byte
        recency_hours: Entries published longer ago than this are dropped
        max_items: Hard cap on the number of aggregated items across all sources
        user_agent: HTTP User-Agent header string
        accept_language: HTTP Accept-Language header string
        trust_env: Whether to respect system proxy settings
    """

    timeout_seconds: float = 30.0
    recency_hours: float = 24.0
    max_items: int = 15
    user_agent: str = "Mozilla/5.0 (compatible; DailyAINewsBot/1.0)"
    accept_language: str = "en-US,en;q=0.9"
    trust_env: bool = True


@dataclass
class SummaryConfig:
    """Configuration for key point summarization.

    Attributes:
        language: Output language requested from the model
        bullets_min: Minimum number of key points to request
        bullets_max: Maximum number of key points kept from a response
        max_input_chars: Maximum characters of item text sent to the model
        summary_chars: Length of the snippet-derived summary field
        fallback_snippet_chars: Snippet length used in the provider-error fallback
        delay_seconds: Pause between successive provider calls
        fallback_point: Key point used when a response has no usable lines
    """

    language: str = "Chinese"
    bullets_min: int = 3
    bullets_max: int = 5
    max_input_chars: int = 4000
    summary_chars: int = 200
    fallback_snippet_chars: int = 100
    delay_seconds: float = 0.5
    fallback_point: str = "无法生成要点总结"


@dataclass
class ProviderConfig:
    """Configuration for the text-generation provider.

    Attributes:
        name: Provider name ("gemini" currently supported)
        model: Model identifier
        api_key_env: Environment variable name containing the API key
        api_key: Optional inline API key (overrides env var)
        base_url: Base URL for the provider API
        temperature: Sampling temperature
        max_output_tokens: Upper bound on generated tokens
        timeout_seconds: Request timeout for one generation call
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "gemini"
    model: str = "gemini-2.5-flash"
    api_key_env: str = "GEMINI_API_KEY"
    api_key: str | None = None
    base_url: str = "https://generativelanguage.googleapis.com"
    temperature: float = 0.3
    max_output_tokens: int = 1024
    timeout_seconds: float = 60.0
    trust_env: bool = True


@dataclass
class OutputConfig:
    """Configuration for run output.

    Attributes:
        data_dir: Directory receiving dated and latest JSON results
        log_dir: Directory receiving log files
    """

    data_dir: str = "data"
    log_dir: str = "logs"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"
    llm_log_enabled: bool = True
    llm_log_detail: str = "response_only"
    llm_log_file: str = "llm.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    sources: list[SourceDescriptor] = field(default_factory=lambda: list(NEWS_SOURCES))
    fetch: FetchConfig = field(default_factory=FetchConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "sources": [
            {"name": s.name, "endpoint": s.endpoint, "category": s.category.value}
            for s in cfg.sources
        ],
        "fetch": asdict(cfg.fetch),
        "summary": asdict(cfg.summary),
        "provider": asdict(cfg.provider),
        "output": asdict(cfg.output),
        "logging": asdict(cfg.logging),
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        sources=[_source_from_dict(item) for item in data["sources"] or []],
        fetch=FetchConfig(**data["fetch"]),
        summary=SummaryConfig(**data["summary"]),
        provider=ProviderConfig(**data["provider"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )


def _source_from_dict(item: dict[str, Any]) -> SourceDescriptor:
    name = str(item.get("name") or "").strip()
    endpoint = str(item.get("endpoint") or item.get("url") or "").strip()
    if not name or not endpoint:
        raise ValueError(f"Source requires a name and an endpoint: {item!r}")
    raw_category = str(item.get("category") or item.get("type") or SourceCategory.TECH.value)
    try:
        category = SourceCategory(raw_category.lower())
    except ValueError:
        supported = ", ".join(c.value for c in SourceCategory)
        raise ValueError(
            f"Unsupported source category: {raw_category}. Supported: {supported}"
        ) from None
    return SourceDescriptor(name=name, endpoint=endpoint, category=category)


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
