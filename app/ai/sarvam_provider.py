"""REPLYDESK — Sarvam AI Provider."""

from typing import Any, Dict, List, Optional
from sarvamai import AsyncSarvamAI

from app.ai.base_provider import AIProvider
from app.config import settings
from app.core.logging import get_logger

logger = get_logger("ai.sarvam")


class SarvamProvider(AIProvider):
    """Sarvam AI provider for text generation (model: sarvam-m). No image input."""

    name = "sarvam"

    def __init__(self, client: Optional[AsyncSarvamAI] = None):
        self.client = client or (
            AsyncSarvamAI(api_subscription_key=settings.sarvam_api_key)
            if settings.sarvam_api_key
            else None
        )

    def is_available(self) -> bool:
        return self.client is not None

    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        if not self.is_available():
            raise RuntimeError("Sarvam provider not configured")

        messages: List[Dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions(
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
            if not response.choices:
                return ""
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"Sarvam generation failed: {e}")
            raise
