"""Tests for AI provider wrappers and provider selection."""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.ai import registry
from app.ai.claude_provider import ClaudeProvider
from app.ai.openai_provider import OpenAIProvider
from app.ai.registry import configured_providers, select_provider
from app.ai.sarvam_provider import SarvamProvider
from app.config import settings
from app.core.errors import (
    GenerationError,
    InputValidationError,
    ProviderUnavailableError,
)


def _chat_response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_generate_passes_budget_and_temperature(self) -> None:
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_chat_response("Hi there"))
        provider = OpenAIProvider(client=client, model="gpt-test")

        result = await provider.generate("prompt", system="role", max_tokens=200, temperature=0.7)

        assert result == "Hi there"
        client.chat.completions.create.assert_called_once_with(
            model="gpt-test",
            messages=[
                {"role": "system", "content": "role"},
                {"role": "user", "content": "prompt"},
            ],
            max_tokens=200,
            temperature=0.7,
        )

    @pytest.mark.asyncio
    async def test_none_content_becomes_empty_string(self) -> None:
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_chat_response(None))
        provider = OpenAIProvider(client=client)

        assert await provider.generate("prompt") == ""

    @pytest.mark.asyncio
    async def test_errors_propagate(self) -> None:
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("boom"))
        provider = OpenAIProvider(client=client)

        with pytest.raises(RuntimeError, match="boom"):
            await provider.generate("prompt")

    @pytest.mark.asyncio
    async def test_read_image_sends_data_url(self) -> None:
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_chat_response("text"))
        provider = OpenAIProvider(client=client, vision_model="vision-test")

        await provider.read_image(b"\x89PNG", "image/png", "Read it", max_tokens=500)

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "vision-test"
        assert kwargs["max_tokens"] == 500
        assert "temperature" not in kwargs
        parts = kwargs["messages"][0]["content"]
        assert parts[0] == {"type": "text", "text": "Read it"}
        expected = "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()
        assert parts[1]["image_url"]["url"] == expected

    def test_unconfigured(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "openai_api_key", None)
        assert OpenAIProvider().is_available() is False


class TestClaudeProvider:
    @pytest.mark.asyncio
    async def test_generate_joins_text_blocks(self) -> None:
        block = MagicMock(type="text", text="Dear guest")
        response = MagicMock(content=[block])
        client = MagicMock()
        client.messages.create = AsyncMock(return_value=response)
        provider = ClaudeProvider(client=client, model="claude-test")

        result = await provider.generate("prompt", system="role", max_tokens=1000, temperature=0.7)

        assert result == "Dear guest"
        client.messages.create.assert_called_once_with(
            model="claude-test",
            max_tokens=1000,
            messages=[{"role": "user", "content": "prompt"}],
            temperature=0.7,
            system="role",
        )

    @pytest.mark.asyncio
    async def test_empty_content(self) -> None:
        client = MagicMock()
        client.messages.create = AsyncMock(return_value=MagicMock(content=[]))
        provider = ClaudeProvider(client=client)

        assert await provider.generate("prompt") == ""


class TestSarvamProvider:
    @pytest.mark.asyncio
    async def test_generate(self) -> None:
        client = MagicMock()
        client.chat.completions = AsyncMock(return_value=_chat_response("Namaste"))
        provider = SarvamProvider(client=client)

        result = await provider.generate("prompt", max_tokens=200, temperature=0.7)

        assert result == "Namaste"
        kwargs = client.chat.completions.call_args.kwargs
        assert kwargs["max_tokens"] == 200
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    @pytest.mark.asyncio
    async def test_no_image_support(self) -> None:
        provider = SarvamProvider(client=MagicMock())
        assert provider.supports_vision is False
        with pytest.raises(GenerationError):
            await provider.read_image(b"x", "image/png", "Read it")


class TestSelectProvider:
    @pytest.fixture(autouse=True)
    def no_keys(self, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", None)
        monkeypatch.setattr(settings, "anthropic_api_key", None)
        monkeypatch.setattr(settings, "sarvam_api_key", None)
        monkeypatch.setattr(settings, "default_ai_provider", "openai")

    def test_nothing_configured(self) -> None:
        with pytest.raises(ProviderUnavailableError):
            select_provider("auto")

    def test_auto_prefers_default(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "openai_api_key", "sk-test")
        monkeypatch.setattr(settings, "anthropic_api_key", "ak-test")
        name, provider = select_provider("auto")
        assert name == "openai"
        assert isinstance(provider, OpenAIProvider)

    def test_auto_falls_through(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "anthropic_api_key", "ak-test")
        name, provider = select_provider("auto")
        assert name == "claude"
        assert isinstance(provider, ClaudeProvider)

    def test_auto_vision_skips_text_only(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "default_ai_provider", "sarvam")
        monkeypatch.setattr(settings, "sarvam_api_key", "sv-test")
        with pytest.raises(ProviderUnavailableError):
            select_provider("auto", require_vision=True)

    def test_explicit_unconfigured(self) -> None:
        with pytest.raises(ProviderUnavailableError):
            select_provider("claude")

    def test_explicit_text_only_for_vision(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "sarvam_api_key", "sv-test")
        with pytest.raises(InputValidationError):
            select_provider("sarvam", require_vision=True)

    def test_unknown_name(self) -> None:
        with pytest.raises(InputValidationError):
            select_provider("mystery")

    def test_unconfigured_providers_build_no_client(self, monkeypatch) -> None:
        factory = MagicMock()
        monkeypatch.setitem(registry.PROVIDERS, "openai", factory)
        monkeypatch.setitem(registry.PROVIDERS, "claude", factory)
        monkeypatch.setitem(registry.PROVIDERS, "sarvam", factory)

        with pytest.raises(ProviderUnavailableError):
            select_provider("auto")
        assert configured_providers() == []
        factory.assert_not_called()

    def test_selection_reuses_provider_instance(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "anthropic_api_key", "ak-reuse")
        _, first = select_provider("auto")
        _, second = select_provider("claude")
        assert first is second

    def test_new_key_builds_new_provider(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "openai_api_key", "sk-first")
        _, first = select_provider("openai")
        monkeypatch.setattr(settings, "openai_api_key", "sk-second")
        _, second = select_provider("openai")
        assert first is not second
