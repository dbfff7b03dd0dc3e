"""Tests for the database layer."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from attune import db
from attune.models import StoredPreferences, Verdict
from attune.ports import StorageError


@pytest.fixture()
def conn(tmp_path: Path):
    """Provide a fresh database for each test."""
    db_path = tmp_path / "test.db"
    connection = db.get_connection(db_path=db_path)
    yield connection
    connection.close()


class TestPreferences:
    def test_defaults_when_nothing_saved(self, conn) -> None:
        assert db.fetch_preferences(conn) == StoredPreferences()

    def test_update_and_fetch(self, conn) -> None:
        db.update_preferences(conn, {"work_minutes": 30.5, "notifications": True})
        stored = db.fetch_preferences(conn)
        assert stored.work_minutes == 30.5
        assert stored.notifications is True
        assert stored.short_break_minutes is None

    def test_update_merges(self, conn) -> None:
        db.update_preferences(conn, {"auto_start_breaks": True, "work_minutes": 20})
        db.update_preferences(conn, {"work_minutes": 35, "long_break_minutes": 21})
        stored = db.fetch_preferences(conn)
        assert stored.auto_start_breaks is True
        assert stored.work_minutes == 35
        assert stored.long_break_minutes == 21

    def test_unknown_field_rejected(self, conn) -> None:
        with pytest.raises(StorageError):
            db.update_preferences(conn, {"theme": "dark"})

    def test_malformed_row_raises(self, conn) -> None:
        db.update_preferences(conn, {"work_minutes": "lots"})
        with pytest.raises(ValidationError):
            db.fetch_preferences(conn)


class TestSessions:
    def test_empty(self, conn) -> None:
        assert db.list_sessions(conn) == []

    def test_append_and_list_in_order(self, conn) -> None:
        first = db.append_session(conn, Verdict.FOCUSED, 1500)
        db.append_session(conn, Verdict.UNFOCUSED, 1300)
        history = db.list_sessions(conn)
        assert [s.result for s in history] == [Verdict.FOCUSED, Verdict.UNFOCUSED]
        assert history[0] == first
        assert history[1].duration_seconds == 1300

    def test_persists_across_connections(self, tmp_path: Path) -> None:
        path = tmp_path / "shared.db"
        c1 = db.get_connection(db_path=path)
        db.append_session(c1, Verdict.FOCUSED, 60)
        c1.close()
        c2 = db.get_connection(db_path=path)
        assert len(db.list_sessions(c2)) == 1
        c2.close()


class TestSqliteStore:
    def test_round_trip(self, conn) -> None:
        store = db.SqliteStore(conn)
        store.update_preferences({"sound_effects": True})
        assert store.fetch_preferences().sound_effects is True
        record = store.append_session(Verdict.UNFOCUSED, 900)
        assert store.fetch_session_history() == [record]

    def test_wraps_sqlite_errors(self) -> None:
        broken = MagicMock()
        broken.execute.side_effect = sqlite3.OperationalError("database is locked")
        store = db.SqliteStore(broken)
        with pytest.raises(StorageError):
            store.fetch_preferences()
        with pytest.raises(StorageError):
            store.fetch_session_history()
        with pytest.raises(StorageError):
            store.append_session(Verdict.FOCUSED, 60)
        with pytest.raises(StorageError):
            store.update_preferences({"notifications": True})
