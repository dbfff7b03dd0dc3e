"""Wall-clock driver: one engine tick per second, with a progress bar."""

from __future__ import annotations

import signal
import threading
import time
from contextlib import contextmanager
from typing import Iterator

from attune.display import MODE_LABELS, console, create_timer_progress, print_nudge
from attune.encouragement import get_break_message, get_nudge
from attune.engine import TimerEngine


@contextmanager
def _interrupt_deferred() -> Iterator[None]:
    """Hold Ctrl-C until the block finishes, then raise KeyboardInterrupt."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    received: list[int] = []
    previous = signal.signal(signal.SIGINT, lambda signum, _frame: received.append(signum))
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.default_int_handler)
    if received:
        raise KeyboardInterrupt


def run_interval(engine: TimerEngine) -> bool:
    """Run the engine's current interval to the end.

    Returns True if the interval completed, False if interrupted. An
    interrupted interval is left paused with its remaining time intact.
    Ctrl-C during a tick takes effect once that tick, including any
    end-of-interval work it triggers, has finished.
    """
    state = engine.state
    mode = state.mode
    total_seconds = engine.settings.seconds_for(mode)

    progress = create_timer_progress()
    engine.start()

    try:
        with progress:
            task = progress.add_task(
                MODE_LABELS[mode],
                total=total_seconds,
                completed=total_seconds - state.remaining_seconds,
            )
            while engine.state.running and engine.state.mode is mode:
                time.sleep(1)
                with _interrupt_deferred():
                    engine.tick()
                state = engine.state
                if state.mode is mode:
                    progress.update(task, completed=total_seconds - state.remaining_seconds)
                else:
                    progress.update(task, completed=total_seconds)
    except KeyboardInterrupt:
        engine.pause()
        console.print("\n[yellow]Timer paused.[/yellow]")
        return False

    if engine.state.mode is mode:
        return False

    if engine.preferences.sound_effects:
        console.print("\a", end="")

    if engine.state.mode.is_break:
        print_nudge(get_break_message())
    else:
        print_nudge(get_nudge())

    return True
