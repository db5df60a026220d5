"""Shared enums and types for moodlog."""

from enum import StrEnum


class Sentiment(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class TimeRange(StrEnum):
    WEEK = "week"
    MONTH = "month"
