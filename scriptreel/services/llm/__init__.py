"""
LLM Service - Abstraction layer for the script generation model

Usage:
    from scriptreel.services.llm import get_llm_provider, LLMConfig

    llm = get_llm_provider()
    response = await llm.generate("Your prompt here", LLMConfig(model="gemini-2.5-flash"))
    print(response.text)
"""

from .base import (
    LLMProvider,
    LLMResponse,
    LLMConfig,
    ProviderType,
    UsageStats,
)
from .factory import get_llm_provider, get_default_provider_type, clear_provider_cache
from .gemini_provider import GeminiProvider
from .ollama_provider import OllamaProvider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMConfig",
    "ProviderType",
    "UsageStats",
    "GeminiProvider",
    "OllamaProvider",
    "get_llm_provider",
    "get_default_provider_type",
    "clear_provider_cache",
]
