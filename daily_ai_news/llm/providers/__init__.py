"""Text-generation provider implementations."""

from .base import TextGenerationProvider
from .factory import available_providers, create_provider
from .gemini import GeminiProvider

__all__ = [
    "TextGenerationProvider",
    "GeminiProvider",
    "available_providers",
    "create_provider",
]
