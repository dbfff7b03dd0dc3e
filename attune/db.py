"""SQLite preference store and session log. All public functions return Pydantic models."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from attune.config import get_db_path as _config_get_db_path
from attune.models import SessionRecord, StoredPreferences, Verdict
from attune.ports import StorageError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS preferences (
    id                   INTEGER PRIMARY KEY CHECK (id = 1),
    work_minutes         REAL,
    short_break_minutes  REAL,
    long_break_minutes   REAL,
    auto_start_breaks    INTEGER NOT NULL DEFAULT 0,
    auto_start_pomodoros INTEGER NOT NULL DEFAULT 0,
    notifications        INTEGER NOT NULL DEFAULT 0,
    sound_effects        INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS sessions (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    result           TEXT    NOT NULL,
    duration_seconds INTEGER NOT NULL,
    completed_at     TEXT    NOT NULL
);
"""

_PREFERENCE_COLUMNS: tuple[str, ...] = (
    "work_minutes",
    "short_break_minutes",
    "long_break_minutes",
    "auto_start_breaks",
    "auto_start_pomodoros",
    "notifications",
    "sound_effects",
)


def _get_db_path() -> Path:
    """Return the database file path from config (or default)."""
    return _config_get_db_path()


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """Open a connection and ensure the schema exists."""
    path = db_path or _get_db_path()
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.executescript(_SCHEMA)
    return conn


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


def fetch_preferences(conn: sqlite3.Connection) -> StoredPreferences:
    """Return stored preferences, or all defaults if nothing was saved yet."""
    row = conn.execute("SELECT * FROM preferences WHERE id = 1").fetchone()
    if row is None:
        return StoredPreferences()
    return StoredPreferences(**{col: row[col] for col in _PREFERENCE_COLUMNS})


def update_preferences(conn: sqlite3.Connection, partial: dict[str, Any]) -> StoredPreferences:
    """Merge *partial* into the stored preferences. Columns not given are kept."""
    unknown = set(partial) - set(_PREFERENCE_COLUMNS)
    if unknown:
        raise StorageError(f"Unknown preference fields: {', '.join(sorted(unknown))}")

    conn.execute("INSERT OR IGNORE INTO preferences (id) VALUES (1)")
    if partial:
        assignments = ", ".join(f"{col} = ?" for col in partial)
        conn.execute(
            f"UPDATE preferences SET {assignments} WHERE id = 1",
            tuple(partial.values()),
        )
    conn.commit()
    return fetch_preferences(conn)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def _row_to_session(row: sqlite3.Row) -> SessionRecord:
    """Convert a database row to a SessionRecord model."""
    return SessionRecord(
        result=Verdict(row["result"]),
        duration_seconds=row["duration_seconds"],
        timestamp=datetime.fromisoformat(row["completed_at"]),
    )


def append_session(
    conn: sqlite3.Connection, result: Verdict, duration_seconds: int
) -> SessionRecord:
    """Record a finished work interval."""
    record = SessionRecord(result=result, duration_seconds=duration_seconds)
    conn.execute(
        "INSERT INTO sessions (result, duration_seconds, completed_at) VALUES (?, ?, ?)",
        (record.result.value, record.duration_seconds, record.timestamp.isoformat()),
    )
    conn.commit()
    return record


def list_sessions(conn: sqlite3.Connection) -> list[SessionRecord]:
    """Return the full session history, oldest first."""
    rows = conn.execute("SELECT * FROM sessions ORDER BY id ASC").fetchall()
    return [_row_to_session(r) for r in rows]


class SqliteStore:
    """Preference store and session log sharing one SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def fetch_preferences(self) -> StoredPreferences:
        try:
            return fetch_preferences(self.conn)
        except sqlite3.Error as exc:
            raise StorageError(f"Could not read preferences: {exc}") from exc

    def update_preferences(self, partial: dict[str, Any]) -> None:
        try:
            update_preferences(self.conn, partial)
        except sqlite3.Error as exc:
            raise StorageError(f"Could not save preferences: {exc}") from exc

    def fetch_session_history(self) -> list[SessionRecord]:
        try:
            return list_sessions(self.conn)
        except sqlite3.Error as exc:
            raise StorageError(f"Could not read sessions: {exc}") from exc

    def append_session(self, result: Verdict, duration_seconds: int) -> SessionRecord:
        try:
            return append_session(self.conn, result, duration_seconds)
        except sqlite3.Error as exc:
            raise StorageError(f"Could not save session: {exc}") from exc
