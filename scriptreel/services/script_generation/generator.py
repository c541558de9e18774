"""
Script Generator

Asks the configured LLM for narration script variants of a topic and turns
the reply into an ordered list of scripts numbered 1..n.
"""

from typing import Any, Dict, List, Optional

from scriptreel.config import MAX_SCRIPT_VARIATIONS, MIN_SCRIPT_VARIATIONS, get_script_model
from scriptreel.core import LogTimer, ScriptGenerationError, ValidationError, get_logger
from scriptreel.services.infrastructure.parsing import parse_json_response
from scriptreel.services.llm import LLMConfig, LLMProvider, get_llm_provider

from .prompts import SCRIPT_SYSTEM, SCRIPTS_SCHEMA, build_script_prompt

logger = get_logger(__name__, service="script_generation")


def _extract_items(payload: Any) -> List[Any]:
    if isinstance(payload, dict):
        items = payload.get("scripts")
        return items if isinstance(items, list) else []
    if isinstance(payload, list):
        return payload
    return []


def normalize_scripts(payload: Any, limit: int) -> List[Dict[str, Any]]:
    """Keep usable script contents in reply order and renumber them 1..n."""
    contents: List[str] = []
    for item in _extract_items(payload):
        if isinstance(item, dict):
            content = item.get("content")
        elif isinstance(item, str):
            content = item
        else:
            content = None
        if isinstance(content, str) and content.strip():
            contents.append(content.strip())
    return [{"id": index, "content": content} for index, content in enumerate(contents[:limit], start=1)]


class ScriptGenerator:
    def __init__(self, provider: Optional[LLMProvider] = None, model: Optional[str] = None):
        self._provider = provider
        self.model = model or get_script_model()

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            try:
                self._provider = get_llm_provider()
            except ValueError as exc:
                raise ScriptGenerationError(str(exc)) from exc
        return self._provider

    async def generate(self, topic: str, num_variations: int = MIN_SCRIPT_VARIATIONS) -> List[Dict[str, Any]]:
        """Generate ``num_variations`` scripts for ``topic``.

        Raises:
            ValidationError: blank topic or variation count outside 3..5
            ScriptGenerationError: the provider failed or returned no usable script
        """
        if topic is None or not topic.strip():
            raise ValidationError("Topic is required")
        if not MIN_SCRIPT_VARIATIONS <= num_variations <= MAX_SCRIPT_VARIATIONS:
            raise ValidationError(
                f"num_variations must be between {MIN_SCRIPT_VARIATIONS} and {MAX_SCRIPT_VARIATIONS}"
            )

        config = LLMConfig(
            model=self.model,
            system_instruction=SCRIPT_SYSTEM,
            response_schema=SCRIPTS_SCHEMA,
        )
        provider = self.provider
        try:
            with LogTimer(logger, "script_generation.generate"):
                response = await provider.generate(build_script_prompt(topic, num_variations), config)
        except ScriptGenerationError:
            raise
        except Exception as exc:
            raise ScriptGenerationError(f"Failed to generate scripts: {exc}") from exc

        scripts = normalize_scripts(parse_json_response(response.text), num_variations)
        if not scripts:
            logger.warning("Model returned no usable scripts", extra={"provider": provider.name})
            raise ScriptGenerationError("No scripts were generated. Please try again.")

        logger.info("Scripts generated", extra={"count": len(scripts), "provider": provider.name})
        return scripts
