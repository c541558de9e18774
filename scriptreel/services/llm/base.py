"""
Base classes for LLM providers

Defines the interface the script generator talks to, so Gemini and a local
Ollama server are interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ProviderType(str, Enum):
    """Supported LLM providers"""
    GEMINI = "gemini"
    OLLAMA = "ollama"


@dataclass
class LLMConfig:
    """Configuration for an LLM request"""
    model: str
    temperature: float = 0.8
    max_tokens: Optional[int] = None
    response_schema: Optional[Dict[str, Any]] = None  # For structured output
    system_instruction: Optional[str] = None

    # Provider-specific options
    extra_options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UsageStats:
    """Token usage statistics"""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0:
            self.total_tokens = self.input_tokens + self.output_tokens


@dataclass
class LLMResponse:
    """Unified response from any LLM provider"""
    text: str
    model: str
    provider: ProviderType
    usage: Optional[UsageStats] = None
    raw_response: Any = None  # Original response object from the provider


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    provider_type: ProviderType

    @abstractmethod
    async def generate(self, prompt: str, config: Optional[LLMConfig] = None) -> LLMResponse:
        """Generate a response from the LLM

        Args:
            prompt: The prompt text
            config: LLM configuration options

        Returns:
            LLMResponse with the generated text and metadata
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and properly configured"""
        pass

    @abstractmethod
    def list_models(self) -> List[str]:
        pass

    def get_default_model(self) -> str:
        models = self.list_models()
        return models[0] if models else ""

    @property
    def name(self) -> str:
        return self.provider_type.value


# Maps Gemini model names to Ollama equivalents
MODEL_MAPPINGS = {
    "gemini-flash-lite-latest": "gemma3:4b",
    "gemini-2.0-flash-lite": "gemma3:4b",
    "gemini-2.5-flash": "gemma3:12b",
    "gemini-2.5-pro": "deepseek-r1:32b",
}


def get_ollama_equivalent(gemini_model: str) -> str:
    """Get the Ollama model equivalent for a Gemini model name"""
    return MODEL_MAPPINGS.get(gemini_model, "gemma3:12b")
