"""
Tests for ScriptGenerator.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from scriptreel.core import ScriptGenerationError, ValidationError
from scriptreel.services.llm import LLMResponse, ProviderType
from scriptreel.services.script_generation import ScriptGenerator, normalize_scripts


def _provider(text=None, error=None):
    provider = MagicMock()
    provider.name = "gemini"
    if error is not None:
        provider.generate = AsyncMock(side_effect=error)
    else:
        provider.generate = AsyncMock(return_value=LLMResponse(text=text, model="m", provider=ProviderType.GEMINI))
    return provider


class TestNormalizeScripts:
    def test_renumbers_and_drops_empty(self):
        payload = {"scripts": [
            {"id": 7, "content": " [HOOK] A "},
            {"id": 8, "content": "   "},
            {"id": 9},
            "[HOOK] B",
        ]}
        assert normalize_scripts(payload, 5) == [
            {"id": 1, "content": "[HOOK] A"},
            {"id": 2, "content": "[HOOK] B"},
        ]

    def test_limits_count(self):
        payload = {"scripts": [{"content": str(i)} for i in range(8)]}
        assert len(normalize_scripts(payload, 3)) == 3

    def test_bad_shapes(self):
        assert normalize_scripts({"scripts": "nope"}, 3) == []
        assert normalize_scripts(None, 3) == []


class TestScriptGenerator:
    @pytest.mark.asyncio
    async def test_generates_scripts(self):
        reply = json.dumps({"scripts": [
            {"id": 1, "content": "[HOOK] One"},
            {"id": 2, "content": "[HOOK] Two"},
            {"id": 3, "content": "[HOOK] Three"},
        ]})
        provider = _provider(f"```json\n{reply}\n```")
        generator = ScriptGenerator(provider=provider, model="gemini-2.5-flash")

        scripts = await generator.generate("Morning routines", 3)

        assert [s["id"] for s in scripts] == [1, 2, 3]
        prompt, config = provider.generate.call_args.args
        assert "Morning routines" in prompt
        assert "3" in prompt
        assert config.model == "gemini-2.5-flash"
        assert config.response_schema is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic,count", [("", 3), ("   ", 3), ("Topic", 2), ("Topic", 6)])
    async def test_invalid_input(self, topic, count):
        provider = _provider("{}")
        with pytest.raises(ValidationError):
            await ScriptGenerator(provider=provider).generate(topic, count)
        provider.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_failure(self):
        generator = ScriptGenerator(provider=_provider(error=RuntimeError("quota")))
        with pytest.raises(ScriptGenerationError, match="quota"):
            await generator.generate("Topic", 3)

    @pytest.mark.asyncio
    async def test_no_usable_scripts(self):
        generator = ScriptGenerator(provider=_provider("I cannot help with that."))
        with pytest.raises(ScriptGenerationError):
            await generator.generate("Topic", 3)
