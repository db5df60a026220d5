"""Mood/productivity trend and sentiment aggregation over a time window."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

import structlog

from shared_types import TimeRange

from .models import JournalEntry

logger = structlog.get_logger()

WINDOW_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
}
DEFAULT_TIME_RANGE = TimeRange.WEEK


@dataclass
class TrendPoint:
    date: str  # YYYY-MM-DD of created_at
    mood: int
    productivity: int


@dataclass
class TrendSummary:
    count: int
    avg_mood: float
    avg_productivity: float
    series: list[TrendPoint] = field(default_factory=list)


@dataclass
class AnalyticsReport:
    total_entries: int
    avg_mood: float
    avg_productivity: float
    mood_trends: list[TrendPoint]
    sentiment_counts: dict[str, int]
    time_range: str


def resolve_window(
    time_range: Optional[str], now: Optional[datetime] = None
) -> tuple[TimeRange, datetime]:
    """Map a symbolic range to (range, window_start).

    Unknown or missing ranges fall back to a week.
    """
    now = now or datetime.now(timezone.utc)
    try:
        resolved = TimeRange(time_range)
    except ValueError:
        if time_range is not None:
            logger.debug("analytics.time_range_fallback", requested=time_range)
        resolved = DEFAULT_TIME_RANGE
    return resolved, now - timedelta(days=WINDOW_DAYS[resolved])


def round_one_decimal(value: Decimal | float) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _mean(values: list[int]) -> float:
    if not values:
        return 0.0
    return round_one_decimal(Decimal(sum(values)) / Decimal(len(values)))


def _in_window(entries: Iterable[JournalEntry], since: Optional[datetime]) -> list[JournalEntry]:
    if since is None:
        return list(entries)
    return [e for e in entries if e.created_at >= since]


def trend(entries: Iterable[JournalEntry], since: Optional[datetime] = None) -> TrendSummary:
    """Averages plus one series point per entry.

    Args:
        entries: Entries ordered oldest first. Order is kept as given.
        since: Optional window start; entries created before it are dropped.
    """
    included = _in_window(entries, since)
    return TrendSummary(
        count=len(included),
        avg_mood=_mean([e.mood for e in included]),
        avg_productivity=_mean([e.productivity for e in included]),
        series=[
            TrendPoint(
                date=e.created_at.date().isoformat(),
                mood=e.mood,
                productivity=e.productivity,
            )
            for e in included
        ],
    )


def distribution(entries: Iterable[JournalEntry]) -> dict[str, int]:
    """Tally stored sentiment labels. Labels with no entries are omitted."""
    return dict(Counter(str(e.sentiment) for e in entries))


def build_report(
    repository,
    owner: str,
    time_range: Optional[str] = DEFAULT_TIME_RANGE,
    now: Optional[datetime] = None,
) -> AnalyticsReport:
    """Fetch an owner's entries for the window and aggregate them.

    Args:
        repository: EntryRepository providing ``find_by_owner_since``
        owner: Owner id all entries are scoped to
        time_range: "week" or "month"; anything else is treated as "week"
        now: Reference time (defaults to current UTC time)
    """
    resolved, since = resolve_window(time_range, now)
    entries = _in_window(repository.find_by_owner_since(owner, since), since)

    summary = trend(entries)
    report = AnalyticsReport(
        total_entries=summary.count,
        avg_mood=summary.avg_mood,
        avg_productivity=summary.avg_productivity,
        mood_trends=summary.series,
        sentiment_counts=distribution(entries),
        time_range=resolved.value,
    )
    logger.info(
        "analytics.report_built",
        owner=owner,
        time_range=report.time_range,
        total_entries=report.total_entries,
    )
    return report
