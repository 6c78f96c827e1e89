"""Tests for the response orchestrator."""

import pytest

from app.core.errors import (
    GenerationError,
    InputValidationError,
    NotFoundError,
    ProviderUnavailableError,
)
from app.models.responses import Sentiment
from app.prompts.defaults import SYSTEM_ROLE
from app.services.orchestrator import (
    GENERATION_TEMPERATURE,
    ResponseOrchestrator,
    build_prompt,
)

from conftest import FakeProvider, make_configuration


@pytest.fixture
def orchestrator(config_store, response_store, fake_provider):
    return ResponseOrchestrator(
        config_store, response_store, provider_factory=lambda: fake_provider
    )


class TestBuildPrompt:
    def test_render_then_length_suffix(self, config_store) -> None:
        config = config_store.create(make_configuration(response_length="short"))
        prompt, policy = build_prompt(config, "Great food!")

        assert prompt == (
            "Hello John Doe from Sample Bistro\n\n"
            "Keep the response concise, around 2-3 sentences."
        )
        assert policy.max_tokens == 200


class TestGenerate:
    @pytest.mark.asyncio
    async def test_end_to_end(self, orchestrator, config_store, response_store, fake_provider) -> None:
        config = config_store.create(make_configuration())

        result = await orchestrator.generate("Great food!")

        call = fake_provider.calls[0]
        assert call["prompt"].startswith("Hello John Doe from Sample Bistro\n\n")
        assert call["system"] == SYSTEM_ROLE
        assert call["max_tokens"] == 500
        assert call["temperature"] == GENERATION_TEMPERATURE == 0.7

        assert result.id == 1
        assert result.configuration_id == config.id
        assert result.feedback_text == "Great food!"
        assert result.ai_response == "Thank you for dining with us!"
        assert result.analytics.word_count == 6
        assert result.analytics.sentiment == Sentiment.POSITIVE
        assert response_store.get(1).ai_response == result.ai_response

    @pytest.mark.asyncio
    async def test_uses_latest_configuration_by_default(self, orchestrator, config_store) -> None:
        config_store.create(make_configuration(restaurant_name="Older"))
        latest = config_store.create(make_configuration(restaurant_name="Newer"))

        result = await orchestrator.generate("fine")
        assert result.configuration_id == latest.id

    @pytest.mark.asyncio
    async def test_explicit_configuration_id(self, orchestrator, config_store, fake_provider) -> None:
        chosen = config_store.create(make_configuration(restaurant_name="Chosen", response_length="detailed"))
        config_store.create(make_configuration(restaurant_name="Later"))

        result = await orchestrator.generate("fine", configuration_id=chosen.id)

        assert result.configuration_id == chosen.id
        assert "Chosen" in fake_provider.calls[0]["prompt"]
        assert fake_provider.calls[0]["max_tokens"] == 1000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("feedback", ["", "   ", None])
    async def test_empty_feedback_rejected(self, orchestrator, response_store, fake_provider, feedback) -> None:
        with pytest.raises(InputValidationError):
            await orchestrator.generate(feedback)
        assert response_store.count() == 0
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_unknown_configuration(self, orchestrator, response_store) -> None:
        with pytest.raises(NotFoundError):
            await orchestrator.generate("hello", configuration_id=99)
        assert response_store.count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "   \n"])
    async def test_empty_output_not_persisted(self, config_store, response_store, reply) -> None:
        orchestrator = ResponseOrchestrator(
            config_store, response_store, provider_factory=lambda: FakeProvider(reply=reply)
        )
        with pytest.raises(GenerationError):
            await orchestrator.generate("Great food!")
        assert response_store.count() == 0

    @pytest.mark.asyncio
    async def test_provider_failure_wrapped(self, config_store, response_store) -> None:
        provider = FakeProvider(error=RuntimeError("rate limited"))
        orchestrator = ResponseOrchestrator(
            config_store, response_store, provider_factory=lambda: provider
        )
        with pytest.raises(GenerationError) as exc_info:
            await orchestrator.generate("Great food!")

        assert "rate limited" in str(exc_info.value)
        assert exc_info.value.provider == "fake"
        assert response_store.count() == 0

    @pytest.mark.asyncio
    async def test_input_errors_reported_before_provider_selection(self, config_store, response_store) -> None:
        def no_provider():
            raise ProviderUnavailableError("not configured")

        orchestrator = ResponseOrchestrator(config_store, response_store, provider_factory=no_provider)

        with pytest.raises(InputValidationError):
            await orchestrator.generate("")
        with pytest.raises(NotFoundError):
            await orchestrator.generate("hi", configuration_id=50)
        with pytest.raises(ProviderUnavailableError):
            await orchestrator.generate("hi")

    @pytest.mark.asyncio
    async def test_repeated_requests_create_new_records(self, orchestrator, response_store) -> None:
        first = await orchestrator.generate("Same text")
        second = await orchestrator.generate("Same text")
        assert second.id > first.id
        assert response_store.count() == 2


class TestPreview:
    def test_preview_does_not_call_provider(self, orchestrator, config_store, fake_provider, response_store) -> None:
        config = config_store.create(make_configuration(response_length="short"))

        preview = orchestrator.preview("Great food!")

        assert preview.configuration_id == config.id
        assert preview.max_tokens == 200
        assert preview.prompt.startswith("Hello John Doe from Sample Bistro")
        assert fake_provider.calls == []
        assert response_store.count() == 0

    def test_preview_requires_feedback(self, orchestrator) -> None:
        with pytest.raises(InputValidationError):
            orchestrator.preview("  ")
