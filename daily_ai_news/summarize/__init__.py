"""Key point summarization."""

from .summarizer import DEFAULT_FALLBACK_POINT, Summarizer, parse_key_points

__all__ = ["Summarizer", "parse_key_points", "DEFAULT_FALLBACK_POINT"]
