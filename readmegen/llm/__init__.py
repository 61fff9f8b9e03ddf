"""LLM provider adapters and selection."""

from .base import Provider, ProviderKind, create_provider, select_provider
from .gemini import GeminiProvider
from .openai import OpenAIProvider

__all__ = [
    "GeminiProvider",
    "OpenAIProvider",
    "Provider",
    "ProviderKind",
    "create_provider",
    "select_provider",
]
