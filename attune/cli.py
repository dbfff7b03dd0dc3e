"""Attune CLI -- a focus timer that adapts to how your sessions go."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from attune import config as cfg
from attune import db, display, timer
from attune.adaptation import focus_ratio
from attune.classifier import HttpFocusClassifier
from attune.engine import TimerEngine
from attune.models import TimerMode, Verdict
from attune.notify import ConsoleNotifier, DesktopNotifier

app = typer.Typer(
    name="attune",
    help="A focus timer whose intervals adapt to how focused you have been.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Attune focus timer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _conn() -> db.sqlite3.Connection:
    """Get a database connection (convenience wrapper)."""
    return db.get_connection()


def _engine(conn: db.sqlite3.Connection, desktop: bool = False) -> TimerEngine:
    """Build an engine wired to the local database and configured classifier."""
    store = db.SqliteStore(conn)
    classifier = HttpFocusClassifier.from_config(cfg.load_config())
    notifier = DesktopNotifier() if desktop else ConsoleNotifier()
    engine = TimerEngine(store, store, classifier, notifier)
    engine.initialize()
    return engine


# ---------------------------------------------------------------------------
# Timer
# ---------------------------------------------------------------------------


@app.command()
def run(
    mode: TimerMode = typer.Option(TimerMode.WORK, "--mode", "-m", help="Interval to start with"),
    cycles: int = typer.Option(0, "--cycles", "-n", min=0, help="Stop after N intervals (0 = keep going)"),
    desktop: bool = typer.Option(False, "--desktop", help="Use desktop notifications"),
) -> None:
    """Run the timer, moving between work and breaks."""
    conn = _conn()
    engine = _engine(conn, desktop=desktop)
    if mode is not TimerMode.WORK:
        engine.set_mode(mode, manual=True)

    completed = 0
    while True:
        current = engine.state.mode
        length = display.format_minutes(engine.settings.minutes_for(current))
        display.print_info(f"{display.MODE_LABELS[current]}: {length}")

        if not timer.run_interval(engine):
            break
        completed += 1
        if cycles and completed >= cycles:
            break

        if not engine.state.running:
            upcoming = display.MODE_LABELS[engine.state.mode]
            if not typer.confirm(f"Start {upcoming}?", default=True):
                break

    display.print_success(f"Intervals completed: {completed}")
    conn.close()


# ---------------------------------------------------------------------------
# Status & settings
# ---------------------------------------------------------------------------


@app.command()
def status() -> None:
    """Show current durations, preferences and session history."""
    conn = _conn()
    engine = _engine(conn)
    history = db.list_sessions(conn)
    focused = sum(1 for s in history if s.result == Verdict.FOCUSED)

    display.print_settings(engine.settings)
    display.print_preferences(engine.preferences)
    display.print_history_summary(len(history), focused, focus_ratio(history))
    conn.close()


@app.command()
def prefs(
    auto_breaks: Optional[bool] = typer.Option(
        None, "--auto-breaks/--no-auto-breaks", help="Start breaks automatically"
    ),
    auto_pomodoros: Optional[bool] = typer.Option(
        None, "--auto-pomodoros/--no-auto-pomodoros", help="Start work intervals automatically"
    ),
    notifications: Optional[bool] = typer.Option(
        None, "--notifications/--no-notifications", help="Notify when a work interval ends"
    ),
    sound: Optional[bool] = typer.Option(
        None, "--sound/--no-sound", help="Ring the terminal bell between intervals"
    ),
) -> None:
    """Change timer behaviour preferences."""
    changes = {
        key: value
        for key, value in (
            ("auto_start_breaks", auto_breaks),
            ("auto_start_pomodoros", auto_pomodoros),
            ("notifications", notifications),
            ("sound_effects", sound),
        )
        if value is not None
    }

    conn = _conn()
    engine = _engine(conn)
    if changes:
        engine.update_preferences(engine.preferences.model_copy(update=changes))
        display.print_success("Preferences saved.")
    display.print_preferences(engine.preferences)
    conn.close()


@app.command()
def durations(
    work: Optional[float] = typer.Option(None, "--work", "-w", help="Work minutes"),
    short_break: Optional[float] = typer.Option(None, "--short", "-s", help="Short break minutes"),
    long_break: Optional[float] = typer.Option(None, "--long", "-l", help="Long break minutes"),
) -> None:
    """Set interval lengths by hand (they keep adapting after each session)."""
    changes = {
        key: value
        for key, value in (
            ("work_minutes", work),
            ("short_break_minutes", short_break),
            ("long_break_minutes", long_break),
        )
        if value is not None
    }
    if any(value <= 0 for value in changes.values()):
        display.print_warning("Durations must be greater than zero.")
        raise typer.Exit(1)

    conn = _conn()
    if changes:
        db.update_preferences(conn, changes)
        display.print_success("Durations saved.")
        if not db.list_sessions(conn):
            display.print_info("No sessions logged yet, so the timer still starts at 25/5/15.")

    engine = _engine(conn)
    display.print_settings(engine.settings)
    conn.close()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@app.command()
def config(
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Set a custom database file path"),
    reset: bool = typer.Option(False, "--reset", help="Reset to default local DB"),
    classifier_url: Optional[str] = typer.Option(
        None, "--classifier-url", help="Endpoint of the focus classification service"
    ),
    no_classifier: bool = typer.Option(
        False, "--no-classifier", help="Stop using the classifier (random verdicts)"
    ),
    show: bool = typer.Option(False, "--show", help="Show current config"),
) -> None:
    """Configure data location and the focus classifier."""
    if db_path:
        result = cfg.set_db_path(db_path)
        display.print_success(f"Database path set to: {result.db_path}")
    elif reset:
        cfg.reset_db_path()
        display.print_success("Reset to default local database.")
    elif classifier_url:
        result = cfg.set_classifier_url(classifier_url)
        display.print_success(f"Focus classifier set to: {result.classifier_url}")
    elif no_classifier:
        cfg.set_classifier_url(None)
        display.print_success("Focus classifier disabled; verdicts will be random.")
    elif show:
        current = cfg.load_config()
        resolved = cfg.get_db_path()
        if current.db_path:
            display.print_info(f"Database: {current.db_path}")
        else:
            display.print_info(f"Database: {resolved} (default)")
        display.print_info(f"Classifier: {current.classifier_url or 'not configured'}")
    else:
        display.print_info("Use --db-path, --reset, --classifier-url, --no-classifier, or --show.")
