"""REPLYDESK — OpenAI Provider."""

import base64
from typing import Any, Dict, List, Optional
from openai import AsyncOpenAI

from app.ai.base_provider import AIProvider
from app.config import settings
from app.core.logging import get_logger

logger = get_logger("ai.openai")


class OpenAIProvider(AIProvider):
    """OpenAI chat-completions provider (text and vision)."""

    name = "openai"

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: Optional[str] = None,
        vision_model: Optional[str] = None,
    ):
        self.client = client or (
            AsyncOpenAI(
                api_key=settings.openai_api_key, timeout=settings.ai_timeout_seconds
            )
            if settings.openai_api_key
            else None
        )
        self.model = model or settings.openai_model
        self.vision_model = vision_model or settings.vision_model

    def is_available(self) -> bool:
        return self.client is not None

    @property
    def supports_vision(self) -> bool:
        return True

    async def _complete(self, model: str, messages: List[Dict[str, Any]], **kwargs) -> str:
        if not self.is_available():
            raise RuntimeError("OpenAI provider not configured")
        try:
            response = await self.client.chat.completions.create(
                model=model, messages=messages, **kwargs
            )
            if not response.choices:
                return ""
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"OpenAI generation failed: {e}")
            raise

    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        messages: List[Dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return await self._complete(
            self.model, messages, max_tokens=max_tokens, temperature=temperature
        )

    async def read_image(
        self,
        image: bytes,
        mime_type: str,
        instruction: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        temperature: Optional[float] = None,
    ) -> str:
        data_url = f"data:{mime_type};base64,{base64.b64encode(image).decode('ascii')}"
        messages: List[Dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append(
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": instruction},
                    {"type": "image_url", "image_url": {"url": data_url}},
                ],
            }
        )
        kwargs: Dict[str, Any] = {"max_tokens": max_tokens}
        if temperature is not None:
            kwargs["temperature"] = temperature
        return await self._complete(self.vision_model, messages, **kwargs)
