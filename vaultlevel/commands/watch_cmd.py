"""Watch command - keep the vault level current as notes change."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.table import Table

from ..events import ChangeEvent, format_change, read_history
from ..models import LevelUp
from ..progression import badge_for, format_number
from ..tracker import LevelTracker
from ..watcher import run_watch_loop


def run_watch(tracker: LevelTracker, *, show_events: bool = False) -> None:
    """
    Watch the vault and recompute after each burst of changes.

    This is a blocking command that runs until interrupted (Ctrl+C).
    """
    console = Console(stderr=True)

    def on_change(event: ChangeEvent) -> None:
        if show_events:
            timestamp = datetime.now().strftime("%H:%M:%S")
            console.print(f"[dim]{timestamp}[/dim] {format_change(event)}", highlight=False)

    def on_level_up(event: LevelUp) -> None:
        badge = badge_for(event.new_level)
        console.print(
            f"[bold]🎉 Level Up![/bold] You reached level {event.new_level} "
            f"{badge.emoji} [{badge.color}]{badge.title}[/]"
        )

    tracker.on_level_up(on_level_up)

    state = tracker.recompute()
    console.print(f"[bold]Watching[/bold] {tracker.vault_path}")
    console.print(f"  Level {state.level}, {format_number(state.current_xp)}/{state.next_level_xp} XP")
    console.print(f"  Debounce: {tracker.config.quiet_period}s")
    console.print()
    console.print("[dim]Press Ctrl+C to stop watching[/dim]")
    console.print()

    run_watch_loop(tracker, on_change=on_change)

    console.print()
    console.print(f"[bold]Stopped.[/bold] Level {tracker.current_state.level}.")


def run_history(tracker: LevelTracker, *, last_n: int | None = None, console: Console | None = None) -> int:
    """
    Display recorded level-ups.

    Returns the number of records displayed.
    """
    console = console or Console()

    records = read_history(tracker.history_path, last_n=last_n)
    if not records:
        console.print("[dim]No level-ups recorded yet.[/dim]")
        return 0

    table = Table(title="Level History")
    table.add_column("When")
    table.add_column("Level", justify="right")
    table.add_column("Total XP", justify="right")
    table.add_column("Streak", justify="right")

    for record in records:
        badge = badge_for(record.new_level)
        table.add_row(
            record.timestamp[:19].replace("T", " "),
            f"{record.old_level} -> {record.new_level} {badge.emoji}",
            format_number(record.total_xp),
            str(record.streak),
        )

    console.print(table)
    return len(records)
