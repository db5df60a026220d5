"""Journal entry value types and field validation."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from shared_types import Sentiment

from .errors import EntryValidationError

RATING_MIN = 1
RATING_MAX = 10
MAX_CONTENT_LENGTH = 5000
MAX_ITEM_LENGTH = 50
MOOD_FACTOR_NAMES = ("sleep", "exercise", "social", "work")
LIST_FIELDS = ("tags", "activities", "goals", "gratitude")
WEATHER_FIELDS = ("condition", "temperature", "location", "icon")

# Fields a partial update may replace; id/owner/timestamps are immutable.
UPDATABLE_FIELDS = frozenset(
    {
        "content",
        "mood",
        "productivity",
        "sentiment",
        "mood_factors",
        "weather",
        "is_private",
        *LIST_FIELDS,
    }
)


@dataclass
class Weather:
    """Weather snapshot captured when the entry was written."""

    condition: Optional[str] = None
    temperature: Optional[float] = None
    location: Optional[str] = None
    icon: Optional[str] = None


@dataclass
class JournalEntry:
    """Single mood/productivity journal entry."""

    owner: str
    content: str
    mood: int
    productivity: int
    sentiment: Sentiment = Sentiment.NEUTRAL
    mood_factors: dict[str, int] = field(default_factory=dict)
    weather: Optional[Weather] = None
    tags: list[str] = field(default_factory=list)
    activities: list[str] = field(default_factory=list)
    goals: list[str] = field(default_factory=list)
    gratitude: list[str] = field(default_factory=list)
    is_private: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def _check_rating(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EntryValidationError(f"{name} must be an integer, got {value!r}")
    if not RATING_MIN <= value <= RATING_MAX:
        raise EntryValidationError(
            f"{name} must be between {RATING_MIN} and {RATING_MAX}, got {value}"
        )
    return value


def _clean_content(content: Any) -> str:
    if not isinstance(content, str):
        raise EntryValidationError("content must be a string")
    content = content.strip()
    if not 1 <= len(content) <= MAX_CONTENT_LENGTH:
        raise EntryValidationError(
            f"content must be between 1 and {MAX_CONTENT_LENGTH} characters"
        )
    return content


def _clean_items(name: str, items: Any) -> list[str]:
    if items is None:
        return []
    if isinstance(items, str) or not isinstance(items, (list, tuple)):
        raise EntryValidationError(f"{name} must be a list of strings")
    cleaned = []
    for item in items:
        if not isinstance(item, str):
            raise EntryValidationError(f"{name} must be a list of strings")
        item = item.strip()
        if not 1 <= len(item) <= MAX_ITEM_LENGTH:
            raise EntryValidationError(
                f"each {name} item must be between 1 and {MAX_ITEM_LENGTH} characters"
            )
        cleaned.append(item)
    return cleaned


def _clean_mood_factors(factors: Any) -> dict[str, int]:
    if factors is None:
        return {}
    if not isinstance(factors, dict):
        raise EntryValidationError("mood_factors must be a mapping")
    unknown = set(factors) - set(MOOD_FACTOR_NAMES)
    if unknown:
        raise EntryValidationError(f"Unknown mood factors: {sorted(unknown)}")
    return {
        name: _check_rating(f"mood_factors.{name}", value)
        for name, value in factors.items()
        if value is not None
    }


def _clean_weather(weather: Any) -> Optional[Weather]:
    if weather is None or isinstance(weather, Weather):
        return weather
    if not isinstance(weather, dict):
        raise EntryValidationError("weather must be a mapping")
    unknown = set(weather) - set(WEATHER_FIELDS)
    if unknown:
        raise EntryValidationError(f"Unknown weather fields: {sorted(unknown)}")
    return Weather(**weather)


def _clean_sentiment(value: Any) -> Sentiment:
    try:
        return Sentiment(value)
    except ValueError:
        raise EntryValidationError(
            f"sentiment must be one of {[s.value for s in Sentiment]}, got {value!r}"
        )


def validate_fields(fields: dict) -> dict:
    """Validate and normalize a (possibly partial) set of entry fields.

    Only keys present in ``fields`` are checked, so the same rules apply to
    creation and to partial updates.

    Raises:
        EntryValidationError: on unknown/immutable keys or out-of-range values
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise EntryValidationError(f"Fields cannot be set: {sorted(unknown)}")

    cleaned: dict[str, Any] = {}
    for key, value in fields.items():
        if key == "content":
            cleaned[key] = _clean_content(value)
        elif key in ("mood", "productivity"):
            cleaned[key] = _check_rating(key, value)
        elif key == "sentiment":
            cleaned[key] = _clean_sentiment(value)
        elif key == "mood_factors":
            cleaned[key] = _clean_mood_factors(value)
        elif key == "weather":
            cleaned[key] = _clean_weather(value)
        elif key == "is_private":
            cleaned[key] = bool(value)
        else:
            cleaned[key] = _clean_items(key, value)
    return cleaned


def new_entry(owner: str, **fields) -> JournalEntry:
    """Build a validated, not-yet-stored entry for ``owner``.

    Raises:
        EntryValidationError: if a required field is missing or invalid
    """
    if not owner:
        raise EntryValidationError("owner is required")
    missing = [k for k in ("content", "mood", "productivity") if fields.get(k) is None]
    if missing:
        raise EntryValidationError(f"Missing required fields: {missing}")
    if fields.get("sentiment") is None:
        fields.pop("sentiment", None)
    return JournalEntry(owner=owner, **validate_fields(fields))
