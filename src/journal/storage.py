"""SQLite journal entry repository, scoped per owner."""

import json
import sqlite3
import uuid
from dataclasses import asdict, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Protocol

import structlog

from db import managed_connection
from shared_types import Sentiment

from .errors import EntryNotFoundError
from .models import LIST_FIELDS, JournalEntry, Weather, validate_fields

logger = structlog.get_logger()


class EntryRepository(Protocol):
    """Query contract the analytics and search engines consume.

    ``find_by_owner_since`` returns ascending ``created_at``;
    ``search_by_owner`` and ``list_by_owner(newest_first=True)`` return
    descending ``created_at``. Ties keep insertion order.
    """

    def find_by_owner_since(self, owner: str, since: Optional[datetime]) -> list[JournalEntry]: ...

    def search_by_owner(self, owner: str, query: str, skip: int, limit: int) -> list[JournalEntry]: ...

    def count_matches(self, owner: str, query: str) -> int: ...

    def list_by_owner(
        self, owner: str, skip: int, limit: int, newest_first: bool = True
    ) -> list[JournalEntry]: ...

    def count_by_owner(self, owner: str) -> int: ...

    def get_by_id(self, owner: str, entry_id: str) -> JournalEntry: ...

    def insert(self, entry: JournalEntry) -> JournalEntry: ...

    def update_partial(self, owner: str, entry_id: str, fields: dict) -> JournalEntry: ...

    def delete(self, owner: str, entry_id: str) -> bool: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc(dt: datetime) -> datetime:
    """Normalize to aware UTC; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _ts(dt: datetime) -> str:
    # Fixed-width ISO so string comparison in SQL matches chronological order
    return _to_utc(dt).isoformat(timespec="microseconds")


def _entry_matches(content: str, tags_json: str, query: str) -> int:
    """SQL predicate: case-insensitive substring in content or any tag."""
    needle = query.casefold()
    if needle in content.casefold():
        return 1
    return int(any(needle in tag.casefold() for tag in json.loads(tags_json or "[]")))


_SQL_FUNCTIONS = {"entry_matches": (3, _entry_matches)}

_COLUMNS = (
    "id, owner, content, mood, productivity, sentiment, mood_factors, weather, "
    "tags, activities, goals, gratitude, is_private, created_at, updated_at"
)

# Owner scope + match predicate shared by the count and page queries
_MATCH_WHERE = "owner = ? AND entry_matches(content, tags, ?)"


class JournalStorage:
    """Journal entries in a single SQLite table, every query scoped by owner."""

    def __init__(
        self,
        db_path: str | Path,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock or _utcnow
        self._init_db()

    def _connect(self):
        return managed_connection(self.db_path, functions=_SQL_FUNCTIONS)

    def _init_db(self):
        with self._connect() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS journal_entries (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    owner TEXT NOT NULL,
                    content TEXT NOT NULL,
                    mood INTEGER NOT NULL CHECK(mood BETWEEN 1 AND 10),
                    productivity INTEGER NOT NULL CHECK(productivity BETWEEN 1 AND 10),
                    sentiment TEXT NOT NULL DEFAULT 'neutral'
                        CHECK(sentiment IN ('positive','negative','neutral')),
                    mood_factors TEXT NOT NULL DEFAULT '{}',
                    weather TEXT,
                    tags TEXT NOT NULL DEFAULT '[]',
                    activities TEXT NOT NULL DEFAULT '[]',
                    goals TEXT NOT NULL DEFAULT '[]',
                    gratitude TEXT NOT NULL DEFAULT '[]',
                    is_private INTEGER NOT NULL DEFAULT 1,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_entries_owner_created
                    ON journal_entries(owner, created_at);
            """)

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _from_row(row: sqlite3.Row) -> JournalEntry:
        weather = json.loads(row["weather"]) if row["weather"] else None
        return JournalEntry(
            id=row["id"],
            owner=row["owner"],
            content=row["content"],
            mood=row["mood"],
            productivity=row["productivity"],
            sentiment=Sentiment(row["sentiment"]),
            mood_factors=json.loads(row["mood_factors"]),
            weather=Weather(**weather) if weather is not None else None,
            tags=json.loads(row["tags"]),
            activities=json.loads(row["activities"]),
            goals=json.loads(row["goals"]),
            gratitude=json.loads(row["gratitude"]),
            is_private=bool(row["is_private"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @staticmethod
    def _to_params(entry: JournalEntry) -> dict:
        return {
            "id": entry.id,
            "owner": entry.owner,
            "content": entry.content,
            "mood": entry.mood,
            "productivity": entry.productivity,
            "sentiment": Sentiment(entry.sentiment).value,
            "mood_factors": json.dumps(entry.mood_factors),
            "weather": json.dumps(asdict(entry.weather)) if entry.weather else None,
            **{name: json.dumps(getattr(entry, name)) for name in LIST_FIELDS},
            "is_private": int(entry.is_private),
            "created_at": _ts(entry.created_at),
            "updated_at": _ts(entry.updated_at),
        }

    def _select(self, where: str, params: list, suffix: str = "") -> list[JournalEntry]:
        sql = f"SELECT {_COLUMNS} FROM journal_entries WHERE {where} {suffix}"
        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._from_row(r) for r in rows]

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def insert(self, entry: JournalEntry) -> JournalEntry:
        """Store a new entry, assigning id and timestamps."""
        now = self._clock()
        stored = replace(entry, id=uuid.uuid4().hex, created_at=_to_utc(now), updated_at=_to_utc(now))
        params = self._to_params(stored)
        columns = ", ".join(params)
        placeholders = ", ".join(f":{k}" for k in params)
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO journal_entries ({columns}) VALUES ({placeholders})",
                params,
            )
        logger.debug("journal.entry_inserted", entry_id=stored.id, owner=stored.owner)
        return stored

    def get_by_id(self, owner: str, entry_id: str) -> JournalEntry:
        """Fetch one entry.

        Raises:
            EntryNotFoundError: if missing or owned by someone else
        """
        rows = self._select("owner = ? AND id = ?", [owner, entry_id])
        if not rows:
            raise EntryNotFoundError(entry_id)
        return rows[0]

    def update_partial(self, owner: str, entry_id: str, fields: dict) -> JournalEntry:
        """Replace the given fields after re-validating them.

        Raises:
            EntryValidationError: on invalid fields
            EntryNotFoundError: if missing or owned by someone else
        """
        current = self.get_by_id(owner, entry_id)
        updated = replace(current, **validate_fields(fields), updated_at=_to_utc(self._clock()))
        params = self._to_params(updated)
        for immutable in ("id", "owner", "created_at"):
            params.pop(immutable)
        assignments = ", ".join(f"{k} = :{k}" for k in params)
        with self._connect() as conn:
            cur = conn.execute(
                f"UPDATE journal_entries SET {assignments} WHERE owner = :owner AND id = :id",
                {**params, "owner": owner, "id": entry_id},
            )
            if cur.rowcount == 0:
                raise EntryNotFoundError(entry_id)
        return updated

    def delete(self, owner: str, entry_id: str) -> bool:
        """Hard-delete an entry. Returns False if nothing matched."""
        with self._connect() as conn:
            cur = conn.execute(
                "DELETE FROM journal_entries WHERE owner = ? AND id = ?",
                (owner, entry_id),
            )
        return cur.rowcount > 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_owner_since(self, owner: str, since: Optional[datetime]) -> list[JournalEntry]:
        """Entries created at or after ``since``, oldest first."""
        if since is None:
            return self._select("owner = ?", [owner], "ORDER BY created_at ASC, seq ASC")
        return self._select(
            "owner = ? AND created_at >= ?",
            [owner, _ts(since)],
            "ORDER BY created_at ASC, seq ASC",
        )

    def list_by_owner(
        self, owner: str, skip: int, limit: int, newest_first: bool = True
    ) -> list[JournalEntry]:
        order = "DESC" if newest_first else "ASC"
        return self._select(
            "owner = ?",
            [owner, limit, skip],
            f"ORDER BY created_at {order}, seq {order} LIMIT ? OFFSET ?",
        )

    def count_by_owner(self, owner: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM journal_entries WHERE owner = ?", (owner,)
            ).fetchone()
        return row[0]

    def search_by_owner(self, owner: str, query: str, skip: int, limit: int) -> list[JournalEntry]:
        """Entries whose content or tags contain ``query``, newest first."""
        return self._select(
            _MATCH_WHERE,
            [owner, query, limit, skip],
            "ORDER BY created_at DESC, seq DESC LIMIT ? OFFSET ?",
        )

    def count_matches(self, owner: str, query: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT COUNT(*) FROM journal_entries WHERE {_MATCH_WHERE}",
                (owner, query),
            ).fetchone()
        return row[0]
