"""
Core domain models.

This package contains the data types shared by every pipeline stage.
"""

from .types import NewsItem, ProcessedNewsItem, RunResult, SourceCategory, SourceDescriptor

__all__ = [
    "SourceCategory",
    "SourceDescriptor",
    "NewsItem",
    "ProcessedNewsItem",
    "RunResult",
]
