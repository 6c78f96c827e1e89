"""REPLYDESK — Response Orchestrator.

Runs one generation request end to end:
  resolve configuration → render prompt → append length instruction
  → call provider → store record → compute analytics

Nothing is persisted unless the provider returns non-empty text.
"""

import time
from typing import Callable, Optional, Tuple

from app.ai.base_provider import AIProvider
from app.core.errors import (
    GenerationError,
    InputValidationError,
    ProviderUnavailableError,
)
from app.core.logging import get_logger
from app.models.facts import FactConfiguration
from app.models.responses import (
    FeedbackResponseCreate,
    GeneratedResponse,
    PromptPreview,
)
from app.prompts.defaults import SYSTEM_ROLE
from app.prompts.length_policy import (
    LengthPolicy,
    apply_length_policy,
    resolve_length_policy,
)
from app.prompts.renderer import render_prompt
from app.services.analytics import compute_analytics
from app.storage.base import ConfigurationStore, ResponseStore

logger = get_logger("services.orchestrator")

GENERATION_TEMPERATURE = 0.7


def build_prompt(
    config: FactConfiguration, feedback_text: str
) -> Tuple[str, LengthPolicy]:
    """Render a configuration's template and append its length instruction."""
    rendered = render_prompt(
        config.system_facts.prompt_template,
        config.restaurant_facts,
        config.customer_facts,
        feedback_text,
    )
    policy = resolve_length_policy(config.system_facts.response_length)
    return apply_length_policy(rendered, policy), policy


class ResponseOrchestrator:
    """Composes the stores, the prompt builder and a text provider.

    The provider comes from `provider_factory`, called only once the
    feedback is validated and the configuration resolved, so input and
    not-found errors are reported ahead of provider configuration errors.
    """

    def __init__(
        self,
        configurations: ConfigurationStore,
        responses: ResponseStore,
        provider_factory: Optional[Callable[[], AIProvider]] = None,
    ):
        self.configurations = configurations
        self.responses = responses
        self.provider_factory = provider_factory

    def resolve_configuration(
        self, configuration_id: Optional[int] = None
    ) -> FactConfiguration:
        """Explicit id → that configuration; otherwise the latest. Raises NotFoundError."""
        if configuration_id is not None:
            return self.configurations.get(configuration_id)
        return self.configurations.get_latest()

    @staticmethod
    def _require_feedback(feedback_text: Optional[str]) -> str:
        if not feedback_text or not feedback_text.strip():
            raise InputValidationError("Feedback text is required")
        return feedback_text

    def preview(
        self, feedback_text: str, configuration_id: Optional[int] = None
    ) -> PromptPreview:
        """Build the prompt that `generate` would send, without calling the provider."""
        feedback_text = self._require_feedback(feedback_text)
        config = self.resolve_configuration(configuration_id)
        prompt, policy = build_prompt(config, feedback_text)
        return PromptPreview(
            configuration_id=config.id,
            prompt=prompt,
            max_tokens=policy.max_tokens,
            response_length=config.system_facts.response_length,
        )

    async def generate(
        self, feedback_text: str, configuration_id: Optional[int] = None
    ) -> GeneratedResponse:
        """Generate, store and analyse a response to one piece of feedback.

        Raises:
            InputValidationError: feedback_text is empty.
            NotFoundError: the configuration does not exist.
            GenerationError: the provider failed or returned no text.
            PersistenceError: the record could not be stored.
        """
        feedback_text = self._require_feedback(feedback_text)
        config = self.resolve_configuration(configuration_id)
        prompt, policy = build_prompt(config, feedback_text)

        if self.provider_factory is None:
            raise ProviderUnavailableError("No text provider configured")
        provider = self.provider_factory()
        provider_name = provider.name

        logger.info(
            "Generating response",
            extra={
                "configuration_id": config.id,
                "provider": provider_name,
                "prompt_chars": len(prompt),
                "max_tokens": policy.max_tokens,
            },
        )
        started = time.perf_counter()
        try:
            text = await provider.generate(
                prompt,
                system=SYSTEM_ROLE,
                max_tokens=policy.max_tokens,
                temperature=GENERATION_TEMPERATURE,
            )
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Provider {provider_name} failed: {e}")
            raise GenerationError(
                f"AI generation failed: {e}", provider=provider_name
            ) from e
        duration_ms = round((time.perf_counter() - started) * 1000)

        if not text or not text.strip():
            logger.warning(
                "Provider returned empty content",
                extra={"provider": provider_name, "duration_ms": duration_ms},
            )
            raise GenerationError("Failed to generate response", provider=provider_name)

        record = self.responses.create(
            FeedbackResponseCreate(
                feedback_text=feedback_text,
                ai_response=text,
                configuration_id=config.id,
            )
        )
        logger.info(
            "Response stored",
            extra={
                "response_id": record.id,
                "configuration_id": config.id,
                "provider": provider_name,
                "duration_ms": duration_ms,
            },
        )
        return GeneratedResponse(
            **dict(record), analytics=compute_analytics(text, feedback_text)
        )
