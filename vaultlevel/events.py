"""
Change events and level-up history.

This module provides:
- ChangeEvent records for tracked document changes
- LevelUpRecord envelopes for level transitions
- Append-only level history in JSON Lines format
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any


class ChangeKind(str, Enum):
    """Types of document changes that trigger a recompute."""

    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class ChangeEvent:
    """A single change to a tracked document."""

    kind: ChangeKind
    path: Path
    rename_from: Path | None = None  # original path for renames


def format_change(event: ChangeEvent) -> str:
    """Format a change event for human-readable display."""
    icon = {
        ChangeKind.CREATED: "+",
        ChangeKind.MODIFIED: "~",
        ChangeKind.DELETED: "-",
        ChangeKind.RENAMED: ">",
    }.get(event.kind, "?")

    line = f"{icon} {event.path}"
    if event.rename_from:
        line += f" (from {event.rename_from})"
    return line


@dataclass
class LevelUpRecord:
    """A recorded level transition with the stats that produced it."""

    timestamp: str
    old_level: int
    new_level: int
    total_xp: float
    streak: int
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d = {
            "timestamp": self.timestamp,
            "old_level": self.old_level,
            "new_level": self.new_level,
            "total_xp": self.total_xp,
            "streak": self.streak,
        }
        if self.metadata:
            d["metadata"] = self.metadata
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "LevelUpRecord":
        """Create from dictionary."""
        return cls(
            timestamp=data["timestamp"],
            old_level=int(data["old_level"]),
            new_level=int(data["new_level"]),
            total_xp=data.get("total_xp", 0),
            streak=int(data.get("streak", 0)),
            metadata=data.get("metadata", {}),
        )


def log_level_up(
    history_path: Path,
    old_level: int,
    new_level: int,
    total_xp: float,
    streak: int,
    metadata: dict[str, Any] | None = None,
) -> LevelUpRecord:
    """
    Append a level-up record to the history log.

    Args:
        history_path: Path to the history log file
        old_level: Level before the recompute
        new_level: Level after the recompute
        total_xp: Lifetime XP at the time of the level-up
        streak: Streak at the time of the level-up
        metadata: Additional context (e.g. corpus stats)

    Returns:
        The written record
    """
    record = LevelUpRecord(
        timestamp=datetime.now(timezone.utc).isoformat(),
        old_level=old_level,
        new_level=new_level,
        total_xp=total_xp,
        streak=streak,
        metadata=metadata or {},
    )

    history_path.parent.mkdir(parents=True, exist_ok=True)
    with history_path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(record.to_dict()) + "\n")

    return record


def read_history(history_path: Path, last_n: int | None = None) -> list[LevelUpRecord]:
    """
    Read level-up records, oldest first.

    Malformed lines are skipped. If ``last_n`` is given, only the last N
    records are returned.
    """
    if not history_path.exists():
        return []

    records = []
    with history_path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(LevelUpRecord.from_dict(json.loads(line)))
            except (json.JSONDecodeError, KeyError, ValueError, TypeError):
                continue

    if last_n is not None:
        return records[-last_n:] if last_n > 0 else []
    return records
