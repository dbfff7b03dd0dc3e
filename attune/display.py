"""Rich terminal formatting helpers."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn, TimeRemainingColumn
from rich.table import Table
from rich.text import Text

from attune.models import DurationSettings, Preferences, TimerMode

console = Console()

MODE_LABELS: dict[TimerMode, str] = {
    TimerMode.WORK: "Pomodoro",
    TimerMode.SHORT_BREAK: "Short Break",
    TimerMode.LONG_BREAK: "Long Break",
}

_MODE_STYLE: dict[TimerMode, str] = {
    TimerMode.WORK: "bold blue",
    TimerMode.SHORT_BREAK: "bold green",
    TimerMode.LONG_BREAK: "bold magenta",
}


def format_minutes(minutes: float) -> str:
    """Render fractional minutes as e.g. ``21 min 40 sec``."""
    total_seconds = int(round(minutes * 60))
    mins, secs = divmod(total_seconds, 60)
    return f"{mins} min {secs} sec"


def print_settings(settings: DurationSettings, title: str = "Durations") -> None:
    """Print the three interval lengths."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("mode", width=12)
    table.add_column("length")
    for mode in TimerMode:
        table.add_row(MODE_LABELS[mode], format_minutes(settings.minutes_for(mode)), style=_MODE_STYLE[mode])
    console.print(Panel(table, title=title, border_style="blue"))


def print_preferences(preferences: Preferences) -> None:
    """Print the behaviour flags as on/off."""
    lines = [
        f"Auto-start breaks: {'on' if preferences.auto_start_breaks else 'off'}",
        f"Auto-start pomodoros: {'on' if preferences.auto_start_pomodoros else 'off'}",
        f"Notifications: {'on' if preferences.notifications else 'off'}",
        f"Sound effects: {'on' if preferences.sound_effects else 'off'}",
    ]
    console.print(Panel("\n".join(lines), title="Preferences", border_style="cyan"))


def print_history_summary(total: int, focused: int, ratio: Optional[float]) -> None:
    """Print how many sessions were logged and how many were focused."""
    if total == 0:
        console.print(Panel("No sessions yet.", title="History", border_style="dim"))
        return
    lines = [
        f"Sessions logged: {total}",
        f"Focused: {focused}",
        f"Unfocused: {total - focused}",
        f"Focus ratio: {ratio:.0%}" if ratio is not None else "Focus ratio: n/a",
    ]
    console.print(Panel("\n".join(lines), title="History", border_style="green"))


def print_nudge(message: str) -> None:
    """Print an encouragement message in a styled panel."""
    text = Text(message, justify="center")
    console.print(Panel(text, border_style="magenta", padding=(1, 4)))


def print_notification(title: str, body: str) -> None:
    """Print a completion notice."""
    console.print(Panel(Text(body, justify="center"), title=title, border_style="yellow"))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]{message}[/blue]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")


def create_timer_progress() -> Progress:
    """Create a Rich progress bar for the timer."""
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeRemainingColumn(),
        console=console,
    )
