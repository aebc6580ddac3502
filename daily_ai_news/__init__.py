"""
Daily AI News - aggregated AI news with generated key points.

This package fetches a fixed set of AI news feeds concurrently, keeps the
most recent items, asks Gemini for 3-5 key points per item and saves the
result as dated and latest JSON files.

Main entry point is the CLI via `daily-ai-news run` command.

Example:
    $ daily-ai-news run -o data/
"""

__all__ = ["__version__", "AppConfig", "load_config", "run_pipeline", "NoNewsError"]
__version__ = "0.1.0"

from .config import AppConfig, load_config
from .runner import NoNewsError, run_pipeline
