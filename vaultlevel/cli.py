"""CLI entrypoint for vaultlevel."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import DEFAULT_STATE_DIR, ConfigError, load_config
from .tracker import LevelTracker


def _auto_detect_vault(start: Path) -> Path | None:
    """Find a vault root (a folder holding .obsidian) by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / ".obsidian").is_dir():
            return p
    return None


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="vaultlevel")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Path to the vault root (defaults to the nearest folder containing .obsidian)",
)
@click.option(
    "--state-dir",
    default=DEFAULT_STATE_DIR,
    show_default=True,
    help="State directory, relative to the vault root",
)
@click.option(
    "--debounce",
    "quiet_period",
    type=float,
    default=None,
    help="Quiet period in seconds before a watched change triggers a recompute",
)
@click.option("--verbose", "-V", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    vault: Path | None,
    state_dir: str,
    quiet_period: float | None,
    verbose: bool,
) -> None:
    """vaultlevel - Level up your note vault.

    Turns notes, links, tags and words into XP, levels and a daily streak.
    """
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    if ctx.invoked_subcommand == "badges":
        return

    if vault is None:
        detected = _auto_detect_vault(Path.cwd())
        if detected is None:
            raise click.ClickException("Vault not found. Pass --vault /path/to/vault or run from inside a vault.")
        vault = detected

    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="--vault / -v")

    vault = vault.resolve()
    try:
        config = load_config(vault, state_dir=state_dir).with_overrides(quiet_period=quiet_period)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["vault"] = vault
    ctx.obj["config"] = config


def _tracker(ctx: click.Context) -> LevelTracker:
    return LevelTracker(ctx.obj["vault"], config=ctx.obj["config"])


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output state as JSON")
@click.pass_context
def status(ctx: click.Context, output_json: bool) -> None:
    """Scan the vault and show its level.

    Examples:

        vaultlevel status

        vaultlevel -v ~/Notes status --json
    """
    from .commands.status_cmd import run_status

    run_status(_tracker(ctx), output_json=output_json)


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output state as JSON")
@click.pass_context
def show(ctx: click.Context, output_json: bool) -> None:
    """Show the last saved level without scanning."""
    from .commands.status_cmd import run_status

    run_status(_tracker(ctx), recompute=False, output_json=output_json)


@cli.command()
@click.option("--events", "show_events", is_flag=True, help="Print each change as it arrives")
@click.pass_context
def watch(ctx: click.Context, show_events: bool) -> None:
    """Watch the vault and update the level as notes change.

    Bursts of changes are collapsed into one recompute. Runs until
    interrupted (Ctrl+C).
    """
    from .commands.watch_cmd import run_watch

    run_watch(_tracker(ctx), show_events=show_events)


@cli.command()
@click.option("--last", "last_n", type=int, default=None, help="Show only the last N level-ups")
@click.pass_context
def history(ctx: click.Context, last_n: int | None) -> None:
    """List recorded level-ups."""
    from .commands.watch_cmd import run_history

    run_history(_tracker(ctx), last_n=last_n)


@cli.command()
def badges() -> None:
    """Show the level badge table."""
    from .commands.status_cmd import run_badges

    run_badges()


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
