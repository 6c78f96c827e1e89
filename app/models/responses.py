"""REPLYDESK — Response Record & Analytics Models."""

from enum import Enum
from typing import Optional

from app.models.facts import CamelModel, FrozenCamelModel

# Used when a record is created without a configuration reference.
FALLBACK_CONFIGURATION_ID = 1


class Sentiment(str, Enum):
    """Keyword-based sentiment of the customer's feedback."""

    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class FeedbackResponseCreate(CamelModel):
    """A generated response ready to be stored."""

    feedback_text: str
    ai_response: str
    configuration_id: Optional[int] = None


class FeedbackResponse(FrozenCamelModel):
    """A stored generated response. Immutable once created."""

    id: int
    feedback_text: str
    ai_response: str
    configuration_id: int


class ResponseAnalytics(CamelModel):
    word_count: int
    sentiment: Sentiment


class GeneratedResponse(FeedbackResponse):
    """Stored record plus the analytics computed at generation time."""

    analytics: ResponseAnalytics


class PromptPreview(CamelModel):
    """The exact prompt that would be sent for a piece of feedback."""

    configuration_id: int
    prompt: str
    max_tokens: int
    response_length: str


class ExtractedFact(CamelModel):
    """One fact read off a feedback screenshot."""

    category: str
    value: str
    confidence: str = "medium"  # high | medium | low
