"""Abstract interface for text-generation backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextGenerationProvider(ABC):
    """Provider interface used by the summarizer.

    Implementations make exactly one request per call and raise on any
    failure; retries and fallbacks are the caller's concern.
    """

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the model's text response for a single prompt."""
        raise NotImplementedError
