"""REPLYDESK — Abstract AI Provider."""

from abc import ABC, abstractmethod
from typing import Optional

from app.core.errors import GenerationError


class AIProvider(ABC):
    """Abstract base for text generation.

    Providers are a black box to the rest of the service: they take a
    rendered prompt and return text, or raise. An empty string is a valid
    return value here; callers decide whether that is a failure.
    """

    name: str = "base"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """Generate a completion for a user prompt.

        Args:
            prompt: The fully rendered user prompt.
            system: Optional system role description.
            max_tokens: Token budget for the completion.
            temperature: Sampling temperature.

        Returns:
            The generated text ("" if the provider returned no content).
        """
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is configured and ready."""
        ...

    @property
    def supports_vision(self) -> bool:
        return False

    async def read_image(
        self,
        image: bytes,
        mime_type: str,
        instruction: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: Optional[float] = None,
    ) -> str:
        """Answer an instruction about an image. Vision-capable providers override this."""
        raise GenerationError(
            f"{self.name} provider does not support image input", provider=self.name
        )
