"""Short messages shown when the timer switches between work and breaks."""

from __future__ import annotations

import random

_WORK_MESSAGES: list[str] = [
    "Back to it. One interval at a time.",
    "Pick the smallest next step and start there.",
    "Close the tabs you do not need for this interval.",
    "The timer keeps track so you do not have to.",
    "Settle in. The next break is already scheduled.",
]

_BREAK_MESSAGES: list[str] = [
    "Stand up and stretch for a minute.",
    "Look at something far away for twenty seconds.",
    "Refill your water.",
    "Let your shoulders drop and take a slow breath.",
    "Step away from the screen. It will still be here.",
]


def get_nudge() -> str:
    """Return a message for the start of a work interval."""
    return random.choice(_WORK_MESSAGES)


def get_break_message() -> str:
    """Return a message for the start of a break."""
    return random.choice(_BREAK_MESSAGES)
