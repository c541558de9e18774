"""
Gemini LLM Provider

Implementation of LLMProvider for Google's Gemini models via ``google-genai``.
"""

import asyncio
import os
from typing import Any, List, Optional

from google import genai
from google.genai import types

from .base import LLMConfig, LLMProvider, LLMResponse, ProviderType, UsageStats


class GeminiProvider(LLMProvider):
    """Google Gemini LLM Provider"""

    provider_type = ProviderType.GEMINI

    AVAILABLE_MODELS = [
        "gemini-2.5-flash",
        "gemini-2.5-pro",
        "gemini-flash-lite-latest",
        "gemini-2.0-flash",
    ]

    def __init__(self, api_key: Optional[str] = None):
        """Initialize Gemini provider

        Args:
            api_key: Gemini API key. If not provided, uses GEMINI_API_KEY env var
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        self.client = genai.Client(api_key=self.api_key) if self.api_key else None

    def is_available(self) -> bool:
        return self.client is not None

    def list_models(self) -> List[str]:
        return self.AVAILABLE_MODELS.copy()

    def _build_generation_config(self, config: LLMConfig) -> Optional[types.GenerateContentConfig]:
        kwargs: dict = {}
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        if config.max_tokens:
            kwargs["max_output_tokens"] = config.max_tokens
        if config.system_instruction:
            kwargs["system_instruction"] = config.system_instruction
        if config.response_schema:
            kwargs["response_mime_type"] = "application/json"
            kwargs["response_schema"] = config.response_schema
        return types.GenerateContentConfig(**kwargs) if kwargs else None

    def _extract_usage(self, response: Any) -> Optional[UsageStats]:
        usage = getattr(response, "usage_metadata", None)
        if not usage:
            return None
        return UsageStats(
            input_tokens=getattr(usage, "prompt_token_count", 0) or 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) or 0,
        )

    async def generate(self, prompt: str, config: Optional[LLMConfig] = None) -> LLMResponse:
        if not self.is_available():
            raise RuntimeError("Gemini provider is not available. Check API key.")

        config = config or LLMConfig(model=self.AVAILABLE_MODELS[0])
        request_kwargs: dict = {"model": config.model, "contents": prompt}
        generation_config = self._build_generation_config(config)
        if generation_config:
            request_kwargs["config"] = generation_config

        # The SDK call is blocking; keep it off the event loop.
        response = await asyncio.to_thread(self.client.models.generate_content, **request_kwargs)

        return LLMResponse(
            text=response.text.strip() if response.text else "",
            model=config.model,
            provider=self.provider_type,
            usage=self._extract_usage(response),
            raw_response=response,
        )
