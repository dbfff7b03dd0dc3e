"""Adaptive work/break timer state machine.

The engine never sleeps and owns no threads. Something outside it (see
``attune.timer``) calls :meth:`TimerEngine.tick` once per elapsed second.
When a running countdown reaches zero the engine runs the end-of-interval
sequence synchronously inside that same ``tick()`` call::

    pause -> classify -> log session -> adapt durations -> notify -> next mode

Every collaborator call in that sequence is attempted exactly once. Failures
are logged and replaced by a fallback, so an interval always completes and
the mode always advances.

Usage::

    engine = TimerEngine(store, store, classifier, notifier)
    engine.subscribe(lambda state: print(state.remaining_display))
    engine.initialize()
    engine.start()
    while True:
        time.sleep(1)
        engine.tick()
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from attune.adaptation import adapt
from attune.models import (
    DurationSettings,
    Preferences,
    StoredPreferences,
    TimerMode,
    TimerState,
    Verdict,
)
from attune.ports import FocusClassifier, Notifier, PreferenceStore, SessionLog

log = logging.getLogger(__name__)

StateCallback = Callable[[TimerState], None]

# Shape of the stand-in signal window sent to the classifier.
SAMPLE_CHANNELS: int = 6
SAMPLE_LENGTH: int = 320


class TimerEngine:
    """Pomodoro-style timer whose interval lengths follow the user's focus history."""

    def __init__(
        self,
        store: PreferenceStore,
        session_log: SessionLog,
        classifier: FocusClassifier,
        notifier: Optional[Notifier] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._store = store
        self._session_log = session_log
        self._classifier = classifier
        self._notifier = notifier
        self._rng = rng or random.Random()

        self._settings = DurationSettings()
        self._preferences = Preferences()
        self._mode = TimerMode.WORK
        self._running = False
        self._remaining = self._settings.seconds_for(self._mode)
        self._progress = 1.0
        self._subscribers: list[StateCallback] = []

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> TimerState:
        return TimerState(
            mode=self._mode,
            remaining_seconds=self._remaining,
            running=self._running,
            progress=self._progress,
        )

    @property
    def settings(self) -> DurationSettings:
        return self._settings

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """Call *callback* with every new state. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _publish(self) -> None:
        state = self.state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                log.error("Error in timer state observer", exc_info=True)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load preferences and pick starting durations.

        Stored durations are only trusted when there is session history to
        back them; a cleared history always starts again from 25/5/15.
        """
        has_history = False
        try:
            has_history = len(self._session_log.fetch_session_history()) > 0
        except Exception:
            log.warning("Could not load session history; using default durations.", exc_info=True)

        try:
            stored = self._store.fetch_preferences()
        except Exception:
            log.warning("Could not load preferences; using defaults.", exc_info=True)
            stored = StoredPreferences()

        self._preferences = stored.flags()
        self._settings = stored.durations() if has_history else DurationSettings()
        self._running = False
        self._restart_countdown()
        log.info(
            "Timer initialized: work=%s short=%s long=%s",
            self._settings.work_minutes,
            self._settings.short_break_minutes,
            self._settings.long_break_minutes,
        )
        self._publish()

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._publish()

    def pause(self) -> None:
        if not self._running:
            return
        self._running = False
        self._publish()

    def reset(self) -> None:
        """Restart the current interval from its full length, paused."""
        self._running = False
        self._restart_countdown()
        self._publish()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self._running:
            return
        if self._remaining > 0:
            self._remaining -= 1
            full = self._full_duration()
            self._progress = min(1.0, self._remaining / full) if full else 0.0
            self._publish()
        if self._remaining == 0:
            self.on_expire()

    def set_mode(self, mode: TimerMode, manual: bool = True) -> None:
        """Switch to *mode*.

        A manual switch always leaves the timer paused. Otherwise the
        auto-start preference for the new mode decides.
        """
        self._mode = mode
        self._restart_countdown()
        if manual:
            self._running = False
        elif mode is TimerMode.WORK:
            self._running = self._preferences.auto_start_pomodoros
        else:
            self._running = self._preferences.auto_start_breaks
        log.info("Mode set to %s (manual=%s, running=%s)", mode.value, manual, self._running)
        self._publish()

    def update_durations(self, settings: DurationSettings) -> None:
        """Replace the durations; the current interval restarts paused."""
        self._settings = settings
        self._running = False
        self._restart_countdown()
        self._publish()

    def update_preferences(self, preferences: Preferences) -> None:
        """Replace the behaviour flags and persist them (best effort)."""
        self._preferences = preferences
        try:
            self._store.update_preferences(preferences.model_dump())
        except Exception:
            log.warning("Could not save preferences; keeping them for this run.", exc_info=True)

    # ------------------------------------------------------------------
    # End of interval
    # ------------------------------------------------------------------

    def on_expire(self) -> None:
        """Finish the current interval and move to the next mode."""
        expired = self._mode
        next_mode = self._next_mode(expired)
        self._running = False
        self._publish()

        if expired is TimerMode.WORK:
            self._finish_work_interval()

        self.set_mode(next_mode, manual=False)

    def _finish_work_interval(self) -> None:
        duration_seconds = self._settings.seconds_for(TimerMode.WORK)

        verdict = self._classify()
        log.info("Work interval complete: %s", verdict.value)

        try:
            self._session_log.append_session(verdict, duration_seconds)
        except Exception:
            log.warning("Could not record the finished session.", exc_info=True)

        self._adapt_durations()
        self._restart_countdown()
        self._publish()

        if self._preferences.notifications:
            self._notify("Pomodoro done", f"You were {verdict.value}")

    def _classify(self) -> Verdict:
        try:
            return Verdict(self._classifier.classify_focus(self._make_sample()))
        except Exception:
            log.warning("Focus classification failed; using a random verdict.", exc_info=True)
        return Verdict.FOCUSED if self._rng.random() < 0.5 else Verdict.UNFOCUSED

    def _make_sample(self) -> list[list[float]]:
        return [
            [self._rng.random() for _ in range(SAMPLE_LENGTH)]
            for _ in range(SAMPLE_CHANNELS)
        ]

    def _adapt_durations(self) -> None:
        try:
            history = self._session_log.fetch_session_history()
        except Exception:
            log.warning("Could not load session history; durations unchanged.", exc_info=True)
            return

        adapted = adapt(history)
        if adapted is None:
            return

        log.info(
            "Durations adjusted from %d sessions: work=%s short=%s long=%s",
            len(history),
            adapted.work_minutes,
            adapted.short_break_minutes,
            adapted.long_break_minutes,
        )
        self._settings = adapted
        try:
            self._store.update_preferences(
                {**self._preferences.model_dump(), **adapted.model_dump()}
            )
        except Exception:
            log.warning("Could not save adapted durations; keeping them for this run.", exc_info=True)

    def _notify(self, title: str, body: str) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.request_notification(title, body)
        except Exception:
            log.warning("Notification failed.", exc_info=True)

    def _next_mode(self, expired: TimerMode) -> TimerMode:
        """Pick the mode after *expired* from the durations it ran with."""
        if expired is not TimerMode.WORK:
            return TimerMode.WORK
        if self._settings.short_break_minutes >= self._settings.long_break_minutes:
            return TimerMode.SHORT_BREAK
        return TimerMode.LONG_BREAK

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _full_duration(self) -> int:
        return self._settings.seconds_for(self._mode)

    def _restart_countdown(self) -> None:
        self._remaining = self._full_duration()
        self._progress = 1.0
