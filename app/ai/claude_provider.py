"""REPLYDESK — Anthropic Claude Provider."""

import base64
from typing import Any, Dict, List, Optional
from anthropic import AsyncAnthropic

from app.ai.base_provider import AIProvider
from app.config import settings
from app.core.logging import get_logger

logger = get_logger("ai.claude")


class ClaudeProvider(AIProvider):
    """Anthropic Claude provider (text and vision)."""

    name = "claude"

    def __init__(self, client: Optional[AsyncAnthropic] = None, model: Optional[str] = None):
        self.client = client or (
            AsyncAnthropic(
                api_key=settings.anthropic_api_key, timeout=settings.ai_timeout_seconds
            )
            if settings.anthropic_api_key
            else None
        )
        self.model = model or settings.claude_model

    def is_available(self) -> bool:
        return self.client is not None

    @property
    def supports_vision(self) -> bool:
        return True

    async def _complete(
        self, content: Any, system: Optional[str], max_tokens: int, **kwargs
    ) -> str:
        if not self.is_available():
            raise RuntimeError("Claude provider not configured")
        if system:
            kwargs["system"] = system
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": content}],
                **kwargs,
            )
            # Concatenate text blocks; ignore anything else
            return "".join(
                block.text for block in response.content if getattr(block, "type", "") == "text"
            )
        except Exception as e:
            logger.error(f"Claude generation failed: {e}")
            raise

    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        return await self._complete(prompt, system, max_tokens, temperature=temperature)

    async def read_image(
        self,
        image: bytes,
        mime_type: str,
        instruction: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: Optional[float] = None,
    ) -> str:
        content: List[Dict[str, Any]] = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": mime_type,
                    "data": base64.b64encode(image).decode("ascii"),
                },
            },
            {"type": "text", "text": instruction},
        ]
        kwargs: Dict[str, Any] = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        return await self._complete(content, system, max_tokens, **kwargs)
