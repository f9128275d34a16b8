"""Tracker configuration, with optional overrides from config.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

DEFAULT_STATE_DIR = ".vaultlevel"
CONFIG_FILENAME = "config.toml"


class ConfigError(ValueError):
    """Raised when a configuration file or value is invalid."""


@dataclass(frozen=True)
class TrackerConfig:
    extension: str = ".md"  # tracked document extension
    quiet_period: float = 0.5  # debounce window in seconds
    poll_interval: float = 0.1  # watch loop tick in seconds
    state_dir: str = DEFAULT_STATE_DIR  # relative to the vault root

    def state_path(self, vault_path: Path) -> Path:
        return vault_path / self.state_dir / "state.json"

    def history_path(self, vault_path: Path) -> Path:
        return vault_path / self.state_dir / "history.log"

    def with_overrides(self, **overrides: Any) -> TrackerConfig:
        """Return a copy with non-None overrides applied and validated."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return _validate(replace(self, **values))


def _validate(config: TrackerConfig) -> TrackerConfig:
    ext = str(config.extension).strip()
    if not ext:
        raise ConfigError("extension must not be empty")
    if not ext.startswith("."):
        ext = "." + ext

    try:
        quiet = float(config.quiet_period)
        poll = float(config.poll_interval)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid timing value: {e}") from e
    if quiet < 0:
        raise ConfigError("quiet_period must be non-negative")
    if poll <= 0:
        raise ConfigError("poll_interval must be positive")

    state_dir = str(config.state_dir).strip()
    if not state_dir:
        raise ConfigError("state_dir must not be empty")

    return TrackerConfig(
        extension=ext.lower(),
        quiet_period=quiet,
        poll_interval=poll,
        state_dir=state_dir,
    )


def load_config(vault_path: Path, state_dir: str = DEFAULT_STATE_DIR) -> TrackerConfig:
    """
    Load tracker configuration for a vault.

    Reads the ``[tracker]`` table of ``<vault>/<state_dir>/config.toml`` if it
    exists. Unknown keys are ignored.

    Raises:
        ConfigError: If the file is not valid TOML or a value is invalid.
    """
    path = vault_path / state_dir / CONFIG_FILENAME
    if not path.exists():
        return TrackerConfig(state_dir=state_dir)

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    table = data.get("tracker", {})
    if not isinstance(table, dict):
        raise ConfigError("[tracker] must be a table")

    known = {f.name for f in fields(TrackerConfig)}
    values = {k: v for k, v in table.items() if k in known}
    values.setdefault("state_dir", state_dir)

    return TrackerConfig().with_overrides(**values)
