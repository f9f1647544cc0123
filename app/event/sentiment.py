# app/event/sentiment.py
from app.event.models import Sentiment

POSITIVE_WORDS = ("great", "amazing", "excellent", "wonderful", "fantastic", "love", "awesome")
NEGATIVE_WORDS = ("bad", "terrible", "awful", "hate", "boring", "disappointing")


def analyze_sentiment(comment: str, rating: int) -> Sentiment:
    """Rating decides unless it is the middling 3; then the comment's keywords do."""
    if rating >= 4:
        return Sentiment.POSITIVE
    if rating <= 2:
        return Sentiment.NEGATIVE

    lowered = comment.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)

    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL
