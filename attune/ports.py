"""Contracts for the collaborators the timer engine talks to.

The engine only relies on these method signatures. Any exception raised by
an adapter is treated as a transient failure and recovered inside the engine,
so implementations are free to let their own errors propagate.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from attune.models import SessionRecord, StoredPreferences, Verdict


class AttuneError(Exception):
    """Base class for all errors raised by attune."""


class AdapterError(AttuneError):
    """A call to an external collaborator failed or timed out."""


class StorageError(AdapterError):
    """The preference store or session log could not be read or written."""


class ClassifierError(AdapterError):
    """The focus classifier was unavailable or rejected the sample."""


class PreferenceStore(Protocol):
    def fetch_preferences(self) -> StoredPreferences: ...

    def update_preferences(self, partial: dict[str, Any]) -> None:
        """Merge *partial* into the stored preferences, keeping other fields."""
        ...


class SessionLog(Protocol):
    def fetch_session_history(self) -> list[SessionRecord]: ...

    def append_session(self, result: Verdict, duration_seconds: int) -> SessionRecord: ...


class FocusClassifier(Protocol):
    def classify_focus(self, sample: Sequence[Sequence[float]]) -> Verdict: ...


class Notifier(Protocol):
    def request_notification(self, title: str, body: str) -> None: ...
