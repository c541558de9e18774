"""
Ollama LLM Provider

Implementation of LLMProvider for local models served by Ollama.
"""

import json
import os
from typing import Any, Dict, List, Optional

import httpx

from scriptreel.core import get_logger

from .base import (
    LLMConfig,
    LLMProvider,
    LLMResponse,
    ProviderType,
    UsageStats,
    get_ollama_equivalent,
)

logger = get_logger(__name__, service="llm")


class OllamaProvider(LLMProvider):
    """Ollama LLM Provider for local models"""

    provider_type = ProviderType.OLLAMA

    RECOMMENDED_MODELS = [
        "gemma3:12b",
        "gemma3:4b",
        "llama3.3:70b",
        "mistral:7b",
    ]

    DEFAULT_MODEL = "gemma3:12b"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 300.0,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Ollama provider

        Args:
            base_url: Ollama server URL. Defaults to OLLAMA_HOST env or http://localhost:11434
            timeout: Request timeout in seconds (default 5 minutes for large models)
        """
        self.base_url = (base_url or os.getenv("OLLAMA_HOST", "http://localhost:11434")).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._async_transport = async_transport
        self._available_models: Optional[List[str]] = None

    def is_available(self) -> bool:
        try:
            with httpx.Client(timeout=5.0, transport=self._transport) as client:
                response = client.get(f"{self.base_url}/api/tags")
                return response.status_code == 200
        except httpx.HTTPError:
            return False

    def list_models(self) -> List[str]:
        if self._available_models is not None:
            return self._available_models

        try:
            with httpx.Client(timeout=10.0, transport=self._transport) as client:
                response = client.get(f"{self.base_url}/api/tags")
                if response.status_code == 200:
                    data = response.json()
                    self._available_models = [model["name"] for model in data.get("models", [])]
                    return self._available_models
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.warning("Failed to list Ollama models", extra={"error": str(e)})

        return self.RECOMMENDED_MODELS

    def _resolve_model(self, model: str) -> str:
        """Map Gemini model names to a local equivalent"""
        if model.startswith("gemini"):
            return get_ollama_equivalent(model)
        return model

    def _build_payload(self, prompt: str, config: LLMConfig) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self._resolve_model(config.model),
            "prompt": prompt,
            "stream": False,
        }

        options: Dict[str, Any] = {}
        if config.temperature is not None:
            options["temperature"] = config.temperature
        if config.max_tokens:
            options["num_predict"] = config.max_tokens
        options.update(config.extra_options)
        if options:
            payload["options"] = options

        if config.system_instruction:
            payload["system"] = config.system_instruction

        if config.response_schema:
            payload["format"] = "json"
            payload["prompt"] += (
                f"\n\nRespond with valid JSON matching this schema: {json.dumps(config.response_schema)}"
            )
        return payload

    async def generate(self, prompt: str, config: Optional[LLMConfig] = None) -> LLMResponse:
        config = config or LLMConfig(model=self.DEFAULT_MODEL)
        payload = self._build_payload(prompt, config)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._async_transport) as client:
            response = await client.post(f"{self.base_url}/api/generate", json=payload)
            response.raise_for_status()
            data = response.json()

        usage = None
        if "prompt_eval_count" in data or "eval_count" in data:
            usage = UsageStats(
                input_tokens=data.get("prompt_eval_count", 0),
                output_tokens=data.get("eval_count", 0),
            )
        return LLMResponse(
            text=data.get("response", "").strip(),
            model=payload["model"],
            provider=self.provider_type,
            usage=usage,
            raw_response=data,
        )
