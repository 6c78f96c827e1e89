"""Tests for response analytics."""

import pytest

from app.models.responses import Sentiment
from app.services.analytics import classify_sentiment, compute_analytics, word_count


@pytest.mark.parametrize(
    "feedback, expected",
    [
        ("This was great but also terrible", Sentiment.POSITIVE),
        ("Service was awful", Sentiment.NEGATIVE),
        ("We visited Tuesday", Sentiment.NEUTRAL),
        ("EXCELLENT pasta", Sentiment.POSITIVE),
        ("Horrible wait times", Sentiment.NEGATIVE),
        ("", Sentiment.NEUTRAL),
    ],
)
def test_classify_sentiment(feedback, expected):
    assert classify_sentiment(feedback) == expected


def test_substring_match():
    """Keywords match inside longer words, e.g. 'badly'."""
    assert classify_sentiment("Cooked badly") == Sentiment.NEGATIVE


def test_word_count():
    assert word_count("Thank you  for\nvisiting us") == 5
    assert word_count("  padded   ") == 1
    assert word_count("") == 0


def test_compute_analytics_uses_feedback_for_sentiment():
    analytics = compute_analytics("We are sorry to hear that", "The soup was bad")
    assert analytics.word_count == 6
    assert analytics.sentiment == Sentiment.NEGATIVE
