"""REPLYDESK — Response Analytics.

Lightweight numbers shown next to a generated response. Sentiment is a
keyword check on the customer's feedback, not on the generated text.
"""

from app.models.responses import ResponseAnalytics, Sentiment

POSITIVE_KEYWORDS = ("great", "excellent", "amazing", "wonderful", "outstanding")
NEGATIVE_KEYWORDS = ("bad", "terrible", "awful", "horrible")


def word_count(text: str) -> int:
    """Number of whitespace-delimited tokens."""
    return len(text.split())


def classify_sentiment(feedback_text: str) -> Sentiment:
    """Substring match, case-insensitive; positive keywords are checked first."""
    lowered = feedback_text.lower()
    if any(word in lowered for word in POSITIVE_KEYWORDS):
        return Sentiment.POSITIVE
    if any(word in lowered for word in NEGATIVE_KEYWORDS):
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def compute_analytics(generated_text: str, feedback_text: str) -> ResponseAnalytics:
    return ResponseAnalytics(
        word_count=word_count(generated_text),
        sentiment=classify_sentiment(feedback_text),
    )
