"""Status command - show the vault level panel."""

from __future__ import annotations

import json

from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ..models import ProgressState
from ..progression import BADGES, badge_for, format_number, has_streak_bonus
from ..tracker import LevelTracker


def render_state(state: ProgressState) -> Panel:
    """Build the level panel for a state."""
    badge = badge_for(state.level)
    bonus = has_streak_bonus(state.streak)

    header = Text(justify="center")
    header.append(f"{badge.emoji}\n")
    header.append(f"{badge.title}\n", style=f"bold {badge.color}")
    header.append(f"Level {state.level}", style="dim")

    xp_line = Text(justify="center")
    xp_line.append(f"{format_number(state.current_xp)}/{format_number(state.next_level_xp)} XP")
    if bonus:
        xp_line.append("  🔥 +5%", style="bold yellow")

    bar = ProgressBar(
        total=state.next_level_xp,
        completed=min(state.current_xp, state.next_level_xp),
        complete_style="yellow" if bonus else badge.color,
    )

    stats = Table.grid(expand=True, padding=(0, 2))
    for _ in range(3):
        stats.add_column(justify="center")

    streak_value = f"🔥 {state.streak}" if bonus else str(state.streak)
    stats.add_row(
        f"📝 {state.stats.total_notes}\n[dim]Notes[/dim]",
        f"🔗 {state.stats.total_connections}\n[dim]Connections[/dim]",
        f"🏷️ {state.stats.total_tags}\n[dim]Tags[/dim]",
    )
    stats.add_row(
        f"📖 {format_number(state.stats.total_words)}\n[dim]Words[/dim]",
        f"📅 {streak_value} days\n[dim]Streak[/dim]",
        f"⭐ {format_number(state.total_xp)}\n[dim]Total XP[/dim]",
    )

    footer = Text(justify="center", style="bold")
    if bonus:
        footer.append("✨ +5% XP Bonus Active! Keep the streak! 🔥")
    else:
        footer.append("✨ Keep writing to earn more XP!")

    return Panel(
        Group(header, Text(), xp_line, bar, Text(), stats, Text(), footer),
        title="Vault Level",
        border_style=badge.color,
        width=60,
    )


def run_status(
    tracker: LevelTracker,
    *,
    recompute: bool = True,
    output_json: bool = False,
    console: Console | None = None,
) -> ProgressState:
    """
    Show the vault level.

    Recomputes first unless ``recompute`` is False, in which case the last
    persisted state is shown as-is.
    """
    console = console or Console()

    state = tracker.recompute() if recompute else tracker.current_state

    if output_json:
        console.print_json(json.dumps(state.to_dict()))
    else:
        console.print(render_state(state))

    return state


def run_badges(console: Console | None = None) -> None:
    """Print the badge table."""
    console = console or Console()

    table = Table(title="Level Badges")
    table.add_column("From level", justify="right")
    table.add_column("Badge")
    table.add_column("Title", style="bold")
    table.add_column("Color")

    for level, badge in BADGES:
        table.add_row(str(level), badge.emoji, badge.title, f"[{badge.color}]{badge.color}[/]")

    console.print(table)
