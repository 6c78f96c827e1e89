"""REPLYDESK — Feedback Screenshot Reading.

Uses a vision-capable provider to transcribe feedback text from a
screenshot, or to pull structured facts out of a review form.
"""

import json
import re
from typing import List, Optional

from pydantic import ValidationError

from app.ai.base_provider import AIProvider
from app.core.errors import GenerationError, InputValidationError
from app.core.logging import get_logger
from app.models.responses import ExtractedFact

logger = get_logger("services.screenshots")

MAX_IMAGE_BYTES = 10 * 1024 * 1024

TRANSCRIBE_INSTRUCTION = (
    "This is a screenshot of customer feedback from a restaurant app or review. "
    "Please extract and transcribe the exact text content from this image. "
    "Focus on the customer's feedback/review text only."
)

FACT_EXTRACTION_PROMPT = """You are an expert at analyzing customer feedback screenshots from restaurant review systems.
Extract all factual information about the customer and their experience. Look for:
- Service ratings (e.g., "Service: 1/5 stars" or "Service rated 1 star")
- Food quality ratings
- Value/price ratings
- Overall ratings
- Customer demographics (age, gender, marital status)
- Visit frequency
- Time of visit (lunch, dinner, etc.)
- Party size
- How they found the restaurant
- Likelihood to recommend
- Any specific complaints or compliments
- Server information
- Location information
- Contact information (if visible)

Return a JSON array of extracted facts. Each fact should have:
- category: The type of information (e.g., "Service Rating", "Age", "Visit Frequency")
- value: The actual value (e.g., "1/5 stars", "46-55", "10+ times per year")
- confidence: "high", "medium", or "low" based on how clear the information is

Be very thorough and extract ALL visible information from the feedback form."""

FACT_EXTRACTION_INSTRUCTION = (
    "Analyze this customer feedback screenshot and extract all facts about the "
    "customer and their experience. Return only a JSON array of facts."
)

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


def validate_image(image: bytes, content_type: Optional[str]) -> str:
    """Return the image MIME type, or raise InputValidationError."""
    if not image:
        raise InputValidationError("No image file provided")
    if not content_type or not content_type.startswith("image/"):
        raise InputValidationError(f"Unsupported file type: {content_type or 'unknown'}")
    if len(image) > MAX_IMAGE_BYTES:
        raise InputValidationError("Image is larger than 10 MB")
    return content_type


def parse_facts(raw: str) -> List[ExtractedFact]:
    """Parse the provider's JSON array of facts.

    Markdown fences and surrounding prose are tolerated. If no valid array
    can be read, the raw text comes back as a single low-confidence fact.
    """
    match = _JSON_ARRAY.search(raw or "")
    if match:
        try:
            items = json.loads(match.group(0))
            if isinstance(items, list):
                return [
                    ExtractedFact(
                        category=str(item.get("category", "")),
                        value=str(item.get("value", "")),
                        confidence=str(item.get("confidence", "medium")),
                    )
                    for item in items
                    if isinstance(item, dict)
                ]
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to parse facts JSON: {e}. Raw: {raw[:300]}")
    else:
        logger.warning("No JSON array found in fact extraction response")
    return [ExtractedFact(category="Raw Feedback", value=(raw or "")[:200], confidence="low")]


async def _read(provider: AIProvider, *args, **kwargs) -> str:
    try:
        return await provider.read_image(*args, **kwargs)
    except GenerationError:
        raise
    except Exception as e:
        raise GenerationError(
            f"Image analysis failed: {e}", provider=provider.name
        ) from e


async def extract_feedback_text(
    provider: AIProvider, image: bytes, content_type: Optional[str]
) -> str:
    """Transcribe the customer's feedback text from a screenshot."""
    mime_type = validate_image(image, content_type)
    text = await _read(provider, image, mime_type, TRANSCRIBE_INSTRUCTION, max_tokens=500)
    if not text.strip():
        raise GenerationError("No text found in image", provider=provider.name)
    return text


async def extract_feedback_facts(
    provider: AIProvider, image: bytes, content_type: Optional[str]
) -> List[ExtractedFact]:
    """Extract structured customer/experience facts from a review screenshot."""
    mime_type = validate_image(image, content_type)
    raw = await _read(
        provider,
        image,
        mime_type,
        FACT_EXTRACTION_INSTRUCTION,
        system=FACT_EXTRACTION_PROMPT,
        max_tokens=1000,
        temperature=0.3,
    )
    return parse_facts(raw)
