"""Pydantic models -- single source of truth for all data types."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_WORK_MINUTES: float = 25
DEFAULT_SHORT_BREAK_MINUTES: float = 5
DEFAULT_LONG_BREAK_MINUTES: float = 15


class TimerMode(str, enum.Enum):
    """Which interval the timer is counting down."""

    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not TimerMode.WORK


class Verdict(str, enum.Enum):
    """Outcome of classifying a finished work interval."""

    FOCUSED = "focused"
    UNFOCUSED = "unfocused"


class DurationSettings(BaseModel):
    """Interval lengths in (possibly fractional) minutes."""

    model_config = ConfigDict(frozen=True)

    work_minutes: float = Field(default=DEFAULT_WORK_MINUTES, gt=0)
    short_break_minutes: float = Field(default=DEFAULT_SHORT_BREAK_MINUTES, gt=0)
    long_break_minutes: float = Field(default=DEFAULT_LONG_BREAK_MINUTES, gt=0)

    def minutes_for(self, mode: TimerMode) -> float:
        if mode is TimerMode.WORK:
            return self.work_minutes
        if mode is TimerMode.SHORT_BREAK:
            return self.short_break_minutes
        return self.long_break_minutes

    def seconds_for(self, mode: TimerMode) -> int:
        """Full length of *mode* in whole seconds."""
        return int(round(self.minutes_for(mode) * 60))


class Preferences(BaseModel):
    """Behaviour flags owned by the user profile."""

    model_config = ConfigDict(frozen=True)

    auto_start_breaks: bool = False
    auto_start_pomodoros: bool = False
    notifications: bool = False
    sound_effects: bool = False


class StoredPreferences(Preferences):
    """Preferences as persisted, including durations if any were ever saved."""

    work_minutes: Optional[float] = Field(default=None, ge=0)
    short_break_minutes: Optional[float] = Field(default=None, ge=0)
    long_break_minutes: Optional[float] = Field(default=None, ge=0)

    def flags(self) -> Preferences:
        return Preferences(
            auto_start_breaks=self.auto_start_breaks,
            auto_start_pomodoros=self.auto_start_pomodoros,
            notifications=self.notifications,
            sound_effects=self.sound_effects,
        )

    def durations(self) -> DurationSettings:
        """Stored durations, substituting defaults for anything missing or zero."""
        return DurationSettings(
            work_minutes=self.work_minutes or DEFAULT_WORK_MINUTES,
            short_break_minutes=self.short_break_minutes or DEFAULT_SHORT_BREAK_MINUTES,
            long_break_minutes=self.long_break_minutes or DEFAULT_LONG_BREAK_MINUTES,
        )


class SessionRecord(BaseModel):
    """A completed, classified work interval."""

    model_config = ConfigDict(frozen=True)

    result: Verdict
    duration_seconds: int = Field(gt=0)
    timestamp: datetime = Field(default_factory=datetime.now)


class TimerState(BaseModel):
    """Snapshot of the timer as seen by the presentation layer."""

    model_config = ConfigDict(frozen=True)

    mode: TimerMode = TimerMode.WORK
    remaining_seconds: int = Field(ge=0)
    running: bool = False
    progress: float = Field(default=1.0, ge=0, le=1)

    @property
    def remaining_display(self) -> str:
        """Format remaining time as MM:SS."""
        minutes, seconds = divmod(self.remaining_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"


class AppConfig(BaseModel):
    """Application configuration (persisted to ~/.config/attune/config.json)."""

    db_path: Optional[str] = None  # None = use default (~/.local/share/attune/)
    classifier_url: Optional[str] = None  # None = always use the random fallback
    classifier_timeout: float = Field(default=10.0, gt=0)
