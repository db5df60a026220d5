"""Shared test fixtures for moodlog."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class StepClock:
    """Settable clock for JournalStorage timestamps."""

    def __init__(self, start: datetime = NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def set(self, when: datetime) -> None:
        self.now = when

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def storage(tmp_path, clock):
    """Empty journal database with a controllable clock."""
    from journal.storage import JournalStorage

    return JournalStorage(tmp_path / "journal.db", clock=clock)


@pytest.fixture
def add_entry(storage, clock):
    """Insert an entry created ``days_ago`` days before NOW."""
    from journal.models import new_entry

    def _add(owner="alice", days_ago: float = 0, **fields):
        fields.setdefault("content", "Ordinary day at the office")
        fields.setdefault("mood", 5)
        fields.setdefault("productivity", 5)
        clock.set(NOW - timedelta(days=days_ago))
        return storage.insert(new_entry(owner, **fields))

    return _add


@pytest.fixture
def sample_entries(add_entry):
    """Three entries for alice spread over the last week, oldest first."""
    return [
        add_entry(days_ago=5, content="Felt happy after a long run", mood=7, productivity=6,
                  sentiment="positive", tags=["running", "health"]),
        add_entry(days_ago=3, content="Stuck in meetings, a bit worried", mood=5, productivity=4,
                  sentiment="negative", tags=["work"]),
        add_entry(days_ago=1, content="Shipped the release, grateful for the team", mood=8,
                  productivity=9, sentiment="positive", tags=["work", "Gratitude"]),
    ]


@pytest.fixture
def now():
    """Reference time every fixture entry is dated against."""
    return NOW
