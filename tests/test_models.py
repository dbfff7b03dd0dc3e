"""Tests for Pydantic models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from attune.models import (
    AppConfig,
    DurationSettings,
    Preferences,
    SessionRecord,
    StoredPreferences,
    TimerMode,
    TimerState,
    Verdict,
)


class TestTimerMode:
    def test_values(self) -> None:
        assert TimerMode.WORK.value == "work"
        assert TimerMode.SHORT_BREAK.value == "short_break"
        assert TimerMode.LONG_BREAK.value == "long_break"

    def test_is_break(self) -> None:
        assert not TimerMode.WORK.is_break
        assert TimerMode.SHORT_BREAK.is_break
        assert TimerMode.LONG_BREAK.is_break


class TestVerdict:
    def test_from_string(self) -> None:
        assert Verdict("focused") is Verdict.FOCUSED
        assert Verdict("unfocused") is Verdict.UNFOCUSED


class TestDurationSettings:
    def test_defaults(self) -> None:
        settings = DurationSettings()
        assert settings.work_minutes == 25
        assert settings.short_break_minutes == 5
        assert settings.long_break_minutes == 15

    def test_seconds_for_rounds(self) -> None:
        settings = DurationSettings(work_minutes=21.67, short_break_minutes=4.33, long_break_minutes=13)
        assert settings.seconds_for(TimerMode.WORK) == 1300
        assert settings.seconds_for(TimerMode.SHORT_BREAK) == 260
        assert settings.seconds_for(TimerMode.LONG_BREAK) == 780

    def test_rejects_non_positive(self) -> None:
        with pytest.raises(ValidationError):
            DurationSettings(work_minutes=0)

    def test_frozen(self) -> None:
        settings = DurationSettings()
        with pytest.raises(ValidationError):
            settings.work_minutes = 30  # type: ignore[misc]


class TestStoredPreferences:
    def test_empty_uses_defaults(self) -> None:
        stored = StoredPreferences()
        assert stored.durations() == DurationSettings()
        assert stored.flags() == Preferences()

    def test_partial_durations(self) -> None:
        stored = StoredPreferences(short_break_minutes=6.5)
        assert stored.durations() == DurationSettings(short_break_minutes=6.5)

    def test_flags(self) -> None:
        stored = StoredPreferences(auto_start_breaks=True, work_minutes=30)
        assert stored.flags() == Preferences(auto_start_breaks=True)

    def test_coerces_integers_from_storage(self) -> None:
        stored = StoredPreferences(notifications=1, sound_effects=0)
        assert stored.notifications is True
        assert stored.sound_effects is False

    def test_malformed_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StoredPreferences(work_minutes="lots")


class TestSessionRecord:
    def test_create(self) -> None:
        record = SessionRecord(result=Verdict.FOCUSED, duration_seconds=1500)
        assert isinstance(record.timestamp, datetime)

    def test_duration_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SessionRecord(result=Verdict.FOCUSED, duration_seconds=0)


class TestTimerState:
    def test_remaining_display(self) -> None:
        state = TimerState(remaining_seconds=1499)
        assert state.remaining_display == "24:59"

    def test_progress_bounds(self) -> None:
        with pytest.raises(ValidationError):
            TimerState(remaining_seconds=10, progress=1.5)


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.db_path is None
        assert config.classifier_url is None
        assert config.classifier_timeout == 10.0
