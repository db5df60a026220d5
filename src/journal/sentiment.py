"""Simple keyword-based sentiment analysis for journal entries."""

from typing import Callable, Optional

from shared_types import Sentiment

from .errors import EntryValidationError

# Lexicon-based sentiment (no external deps needed)
_POSITIVE = (
    "happy", "great", "good", "amazing", "wonderful",
    "excited", "love", "joy", "peaceful", "grateful",
)

_NEGATIVE = (
    "sad", "bad", "terrible", "awful", "hate",
    "angry", "frustrated", "worried", "anxious", "depressed",
)

# Texts at or below this length are too short to classify.
MIN_CLASSIFIABLE_LENGTH = 10

SentimentClassifier = Callable[[str], Sentiment]


def analyze_sentiment(text: str) -> dict:
    """Count lexicon hits in text.

    Each term counts once no matter how often it appears, and matches
    anywhere in the lowercased text.

    Returns:
        {label: Sentiment, positive_count: int, negative_count: int,
         positive_hits: list[str], negative_hits: list[str]}
    """
    lowered = text.lower()
    pos_hits = [w for w in _POSITIVE if w in lowered]
    neg_hits = [w for w in _NEGATIVE if w in lowered]

    if len(pos_hits) > len(neg_hits):
        label = Sentiment.POSITIVE
    elif len(neg_hits) > len(pos_hits):
        label = Sentiment.NEGATIVE
    else:
        label = Sentiment.NEUTRAL

    return {
        "label": label,
        "positive_count": len(pos_hits),
        "negative_count": len(neg_hits),
        "positive_hits": pos_hits,
        "negative_hits": neg_hits,
    }


def classify(text: str) -> Sentiment:
    """Map text to positive, negative or neutral."""
    return analyze_sentiment(text)["label"]


def is_classifiable(text: str) -> bool:
    return len(text) > MIN_CLASSIFIABLE_LENGTH


def resolve_sentiment(
    text: str,
    supplied: Optional[str] = None,
    classifier: SentimentClassifier = classify,
) -> Sentiment:
    """Pick the sentiment to store for an entry.

    A caller-supplied label always wins. Otherwise short texts stay neutral
    and longer ones go through ``classifier``.
    """
    if supplied is not None:
        try:
            return Sentiment(supplied)
        except ValueError:
            raise EntryValidationError(
                f"sentiment must be one of {[s.value for s in Sentiment]}, got {supplied!r}"
            )
    if not is_classifiable(text):
        return Sentiment.NEUTRAL
    return classifier(text)
