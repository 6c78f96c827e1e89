"""REPLYDESK — Provider Selection."""

from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple

from app.ai.base_provider import AIProvider
from app.ai.claude_provider import ClaudeProvider
from app.ai.openai_provider import OpenAIProvider
from app.ai.sarvam_provider import SarvamProvider
from app.config import settings
from app.core.errors import InputValidationError, ProviderUnavailableError

PROVIDERS: Dict[str, Callable[[], AIProvider]] = {
    "openai": OpenAIProvider,
    "claude": ClaudeProvider,
    "sarvam": SarvamProvider,
}

# Settings attribute holding each provider's API key
API_KEY_SETTINGS: Dict[str, str] = {
    "openai": "openai_api_key",
    "claude": "anthropic_api_key",
    "sarvam": "sarvam_api_key",
}


def is_configured(provider_name: str) -> bool:
    """True when the provider's API key is set. Builds no client."""
    return bool(getattr(settings, API_KEY_SETTINGS[provider_name]))


def configured_providers() -> List[str]:
    return [name for name in PROVIDERS if is_configured(name)]


@lru_cache(maxsize=None)
def _provider_for_key(provider_name: str, api_key: Optional[str]) -> AIProvider:
    return PROVIDERS[provider_name]()


def get_provider(provider_name: str) -> AIProvider:
    """Shared provider instance; rebuilt only when its API key changes."""
    return _provider_for_key(
        provider_name, getattr(settings, API_KEY_SETTINGS[provider_name])
    )


def select_provider(
    provider_name: str = "auto", require_vision: bool = False
) -> Tuple[str, AIProvider]:
    """Select and return an available AI provider.

    When provider_name is 'auto', tries DEFAULT_AI_PROVIDER first,
    then falls through remaining providers.
    """
    if provider_name == "auto":
        default = settings.default_ai_provider
        order = ([default] if default in PROVIDERS else []) + [
            name for name in PROVIDERS if name != default
        ]
        for name in order:
            if not is_configured(name):
                continue
            provider = get_provider(name)
            if provider.supports_vision or not require_vision:
                return name, provider
        needed = "a vision-capable " if require_vision else "an "
        raise ProviderUnavailableError(
            f"No AI provider configured. Set {needed}API key: "
            "OPENAI_API_KEY, ANTHROPIC_API_KEY"
            + ("" if require_vision else ", or SARVAM_API_KEY")
            + " in .env."
        )

    if provider_name not in PROVIDERS:
        raise InputValidationError(f"Unknown provider: {provider_name}.")

    if not is_configured(provider_name):
        raise ProviderUnavailableError(
            f"{provider_name} provider not configured.", provider=provider_name
        )
    provider = get_provider(provider_name)
    if require_vision and not provider.supports_vision:
        raise InputValidationError(f"{provider_name} provider does not accept images.")
    return provider_name, provider
