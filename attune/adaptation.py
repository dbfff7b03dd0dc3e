"""Recompute interval lengths from cumulative focus history.

Every session ever logged counts, so each new one moves the estimate only
a little and durations converge slowly rather than following recent streaks.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from attune.models import DurationSettings, SessionRecord, Verdict

MIN_WORK_MINUTES: float = 15
MAX_WORK_MINUTES: float = 35
BASE_WORK_MINUTES: float = 25
_RATIO_SPAN_MINUTES: float = 20


def _round2(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def focus_ratio(history: Sequence[SessionRecord]) -> Optional[float]:
    """Share of focused sessions, or None for an empty history."""
    if not history:
        return None
    focused = sum(1 for record in history if record.result == Verdict.FOCUSED)
    return focused / len(history)


def adapt(history: Sequence[SessionRecord]) -> Optional[DurationSettings]:
    """Return new durations for *history*, or None when there is nothing to learn from."""
    ratio = focus_ratio(history)
    if ratio is None:
        return None

    raw_work = _round2(BASE_WORK_MINUTES + (ratio - 0.5) * _RATIO_SPAN_MINUTES)
    work = min(MAX_WORK_MINUTES, max(MIN_WORK_MINUTES, raw_work))
    return DurationSettings(
        work_minutes=work,
        short_break_minutes=_round2(work / 5),
        long_break_minutes=_round2(work * 3 / 5),
    )
