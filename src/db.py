"""Shared SQLite helpers: WAL mode, row_factory defaults, managed connections."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator


def wal_connect(db_path: str | Path, row_factory: bool = False) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode.

    Args:
        db_path: Path to database file.
        row_factory: If True, set conn.row_factory = sqlite3.Row.
    """
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def managed_connection(
    db_path: str | Path,
    functions: dict[str, tuple[int, Callable]] | None = None,
) -> Iterator[sqlite3.Connection]:
    """Yield a Row-factory WAL connection; commit on success, always close.

    Args:
        db_path: Path to database file.
        functions: Optional name -> (n_args, callable) registered as deterministic SQL functions.
    """
    conn = wal_connect(db_path, row_factory=True)
    try:
        for name, (n_args, fn) in (functions or {}).items():
            conn.create_function(name, n_args, fn, deterministic=True)
        with conn:
            yield conn
    finally:
        conn.close()
