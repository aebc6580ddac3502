"""LLM providers and prompt rendering."""

from .prompts import build_key_points_prompt
from .providers.base import TextGenerationProvider
from .providers.factory import available_providers, create_provider
from .providers.gemini import GeminiProvider

__all__ = [
    "TextGenerationProvider",
    "GeminiProvider",
    "create_provider",
    "available_providers",
    "build_key_points_prompt",
]
