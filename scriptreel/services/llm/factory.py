"""
LLM Provider Factory

Creates and caches LLM provider instances based on configuration.
"""

import os
from typing import Dict, Optional

from .base import LLMProvider, ProviderType
from .gemini_provider import GeminiProvider
from .ollama_provider import OllamaProvider


# Cache for provider instances
_provider_cache: Dict[ProviderType, LLMProvider] = {}


def get_default_provider_type() -> ProviderType:
    """Get the default provider type from environment

    Checks LLM_PROVIDER first, then picks Gemini if an API key exists,
    otherwise Ollama.
    """
    provider_env = os.getenv("LLM_PROVIDER", "").strip().lower()

    if provider_env == "ollama":
        return ProviderType.OLLAMA
    elif provider_env == "gemini":
        return ProviderType.GEMINI

    if os.getenv("GEMINI_API_KEY"):
        return ProviderType.GEMINI

    return ProviderType.OLLAMA


def get_llm_provider(provider_type: Optional[ProviderType] = None, use_cache: bool = True) -> LLMProvider:
    """Get an LLM provider instance

    Raises:
        ValueError: If the provider is not available
    """
    if provider_type is None:
        provider_type = get_default_provider_type()

    if use_cache and provider_type in _provider_cache:
        return _provider_cache[provider_type]

    provider: LLMProvider
    if provider_type == ProviderType.GEMINI:
        provider = GeminiProvider()
        if not provider.is_available():
            raise ValueError(
                "Gemini provider is not available. "
                "Set GEMINI_API_KEY environment variable or use LLM_PROVIDER=ollama"
            )
    elif provider_type == ProviderType.OLLAMA:
        provider = OllamaProvider()
        if not provider.is_available():
            raise ValueError(
                "Ollama provider is not available. "
                "Make sure Ollama is running (ollama serve) or set LLM_PROVIDER=gemini"
            )
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")

    if use_cache:
        _provider_cache[provider_type] = provider

    return provider


def clear_provider_cache():
    """Clear the provider cache"""
    _provider_cache.clear()
