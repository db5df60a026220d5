"""Pydantic request/response schemas for the web API."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, computed_field
from pydantic.alias_generators import to_camel

from shared_types import Sentiment

Rating = Annotated[int, Field(ge=1, le=10)]
ShortText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=5000)]


class CamelModel(BaseModel):
    """JSON uses camelCase; Python code may use either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Journal ---


class MoodFactors(CamelModel):
    sleep: Optional[Rating] = None
    exercise: Optional[Rating] = None
    social: Optional[Rating] = None
    work: Optional[Rating] = None


class Weather(CamelModel):
    condition: Optional[str] = Field(None, max_length=100)
    temperature: Optional[float] = None
    location: Optional[str] = Field(None, max_length=100)
    icon: Optional[str] = Field(None, max_length=20)


class JournalCreate(CamelModel):
    content: Content
    mood: Rating
    productivity: Rating
    sentiment: Optional[Sentiment] = None
    mood_factors: Optional[MoodFactors] = None
    weather: Optional[Weather] = None
    tags: list[ShortText] = []
    activities: list[ShortText] = []
    goals: list[ShortText] = []
    gratitude: list[ShortText] = []
    is_private: bool = True


class JournalUpdate(CamelModel):
    content: Optional[Content] = None
    mood: Optional[Rating] = None
    productivity: Optional[Rating] = None
    sentiment: Optional[Sentiment] = None
    mood_factors: Optional[MoodFactors] = None
    tags: Optional[list[ShortText]] = None
    activities: Optional[list[ShortText]] = None
    goals: Optional[list[ShortText]] = None
    gratitude: Optional[list[ShortText]] = None
    is_private: Optional[bool] = None


class JournalEntry(CamelModel):
    id: str
    content: str
    mood: int
    productivity: int
    sentiment: Sentiment
    mood_factors: MoodFactors = MoodFactors()
    weather: Optional[Weather] = None
    tags: list[str] = []
    activities: list[str] = []
    goals: list[str] = []
    gratitude: list[str] = []
    is_private: bool = True
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="formattedDate")
    @property
    def formatted_date(self) -> str:
        """Long English date of creation, e.g. "Saturday, June 15, 2024"."""
        d = self.created_at
        return f"{d:%A, %B} {d.day}, {d.year}"


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_docs: int
    has_next_page: bool
    has_prev_page: bool


class JournalPage(CamelModel):
    entries: list[JournalEntry]
    pagination: Pagination


class JournalExport(CamelModel):
    user: dict
    export_date: datetime
    count: int
    entries: list[JournalEntry]


# --- Analytics ---


class TrendPoint(CamelModel):
    date: str
    mood: int
    productivity: int


class AnalyticsReport(CamelModel):
    total_entries: int
    avg_mood: float
    avg_productivity: float
    mood_trends: list[TrendPoint]
    sentiment_counts: dict[str, int]
    time_range: str
