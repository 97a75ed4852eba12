"""LLM provider factory."""

from ..config import Settings
from .base import LLMProvider
from .openai import OpenAIProvider, describe_status_error

__all__ = ["LLMProvider", "OpenAIProvider", "describe_status_error", "get_llm_provider"]


def get_llm_provider(settings: Settings) -> LLMProvider:
    """Create and return the configured LLM provider."""
    return OpenAIProvider(
        api_key=settings.api_key,
        base_url=settings.base_url,
        model=settings.model,
    )
