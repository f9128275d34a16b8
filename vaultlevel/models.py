"""Data models for vault progression state."""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any


@dataclass
class DocumentSnapshot:
    """One tracked document as read from the vault during a scan."""

    path: Path
    content: str  # full file text, frontmatter included
    frontmatter: dict  # parsed YAML
    links: list[str] = field(default_factory=list)  # every outgoing link occurrence
    inline_tags: list[str] = field(default_factory=list)  # body #tags, without the '#'
    created: float | None = None  # epoch seconds
    modified: float | None = None  # epoch seconds


@dataclass(frozen=True)
class DocumentMetrics:
    """Per-document engagement metrics."""

    word_count: int
    link_count: int
    tags: frozenset[str]
    created: float | None = None
    modified: float | None = None


@dataclass
class VaultStats:
    """Corpus-level totals, recomputed from scratch on every pass."""

    total_notes: int = 0
    total_connections: int = 0
    total_tags: int = 0
    total_words: int = 0
    total_files: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalNotes": self.total_notes,
            "totalConnections": self.total_connections,
            "totalTags": self.total_tags,
            "totalWords": self.total_words,
            "totalFiles": self.total_files,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VaultStats":
        return cls(
            total_notes=int(data.get("totalNotes", 0)),
            total_connections=int(data.get("totalConnections", 0)),
            total_tags=int(data.get("totalTags", 0)),
            total_words=int(data.get("totalWords", 0)),
            total_files=int(data.get("totalFiles", 0)),
        )


@dataclass(frozen=True)
class Progression:
    """Result of the leveling curve for a given XP total."""

    level: int
    current_xp: float
    next_level_xp: int
    total_xp: float


@dataclass(frozen=True)
class Badge:
    """Presentation badge for a level range."""

    emoji: str
    title: str
    color: str


@dataclass(frozen=True)
class LevelUp:
    """Signal emitted when a recompute raises the persisted level."""

    old_level: int
    new_level: int


# Legacy day-string format written by older state files ("Mon Oct 19 2026")
LEGACY_DATE_FORMAT = "%a %b %d %Y"


def parse_activity_date(value: Any) -> date | None:
    """Parse a persisted last-activity day.

    Accepts ISO dates (``2026-10-19``) and the legacy day-string form.
    Returns None for empty or unparsable values.
    """
    if not value:
        return None
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.strptime(text, LEGACY_DATE_FORMAT).date()
    except ValueError:
        return None


@dataclass
class ProgressState:
    """Persisted progression state, one per vault."""

    level: int = 1
    current_xp: float = 0
    total_xp: float = 0
    next_level_xp: int = 100
    streak: int = 0
    last_activity_date: date | None = None
    stats: VaultStats = field(default_factory=VaultStats)
    last_updated: float = 0.0  # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape."""
        return {
            "level": self.level,
            "currentXP": self.current_xp,
            "totalXP": self.total_xp,
            "nextLevelXP": self.next_level_xp,
            "streak": self.streak,
            "lastActivityDate": (
                self.last_activity_date.isoformat() if self.last_activity_date else None
            ),
            "stats": self.stats.to_dict(),
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgressState":
        """Create from the persisted JSON shape.

        Raises:
            ValueError: If a field has the wrong type or violates its range.
        """
        if not isinstance(data, dict):
            raise ValueError("state must be a JSON object")

        stats = data.get("stats") or {}
        if not isinstance(stats, dict):
            raise ValueError("stats must be an object")

        state = cls(
            level=int(data.get("level", 1)),
            current_xp=_number(data.get("currentXP", 0)),
            total_xp=_number(data.get("totalXP", 0)),
            next_level_xp=int(data.get("nextLevelXP", 100)),
            streak=int(data.get("streak", 0)),
            last_activity_date=parse_activity_date(data.get("lastActivityDate")),
            stats=VaultStats.from_dict(stats),
            last_updated=_number(data.get("lastUpdated", 0)),
        )

        if state.level < 1 or state.next_level_xp <= 0 or state.streak < 0:
            raise ValueError("state values out of range")
        if state.current_xp < 0 or state.total_xp < 0:
            raise ValueError("state values out of range")

        return state


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return value
