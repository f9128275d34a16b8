"""XP formula, leveling curve, and level badges."""

import bisect
import math

from .models import Badge, Progression, VaultStats

NOTE_XP = 15
CONNECTION_XP = 8
TAG_XP = 5
WORDS_PER_CHUNK = 100
CHUNK_XP = 2

STREAK_BONUS_DAYS = 7
STREAK_BONUS_RATE = 0.05

BASE_THRESHOLD = 100
GROWTH = 1.25

# (minimum level, badge), sorted by level
BADGES: list[tuple[int, Badge]] = [
    (1, Badge("🌱", "Seedling", "#65a30d")),
    (5, Badge("🍃", "Budding", "#16a34a")),
    (10, Badge("🌿", "Flourishing", "#22c55e")),
    (15, Badge("📚", "Scholar", "#ef4444")),
    (20, Badge("🎓", "Graduate", "#f59e0b")),
    (30, Badge("🔮", "Sage", "#a855f7")),
    (40, Badge("⚡", "Master", "#84cc16")),
    (50, Badge("🌟", "Stellar", "#eab308")),
    (60, Badge("💎", "Diamond", "#0ea5e9")),
    (70, Badge("🔱", "Titan", "#f97316")),
    (80, Badge("⚛️", "Quantum", "#06b6d4")),
    (90, Badge("🌠", "Transcendent", "#ec4899")),
    (100, Badge("🌀", "Eternal", "#8b5cf6")),
]
_BADGE_LEVELS = [level for level, _ in BADGES]


def base_xp(stats: VaultStats) -> int:
    """XP earned from corpus totals before any bonus."""
    return (
        stats.total_notes * NOTE_XP
        + stats.total_connections * CONNECTION_XP
        + stats.total_tags * TAG_XP
        + (stats.total_words // WORDS_PER_CHUNK) * CHUNK_XP
    )


def has_streak_bonus(streak: int) -> bool:
    return streak >= STREAK_BONUS_DAYS


def total_xp(stats: VaultStats, streak: int) -> float:
    """Base XP plus the streak bonus, if earned."""
    base = base_xp(stats)
    if has_streak_bonus(streak):
        return base + base * STREAK_BONUS_RATE
    return base


def threshold_for(level: int) -> int:
    """XP needed to clear ``level`` and reach the next one."""
    return math.floor(BASE_THRESHOLD * GROWTH ** (level - 1))


def level_for_xp(xp: float) -> Progression:
    """Walk the leveling curve, spending XP on each threshold in turn.

    Terminates because thresholds grow geometrically.
    """
    level = 1
    threshold = threshold_for(level)
    remaining = xp

    while remaining >= threshold:
        remaining -= threshold
        level += 1
        threshold = threshold_for(level)

    return Progression(level=level, current_xp=remaining, next_level_xp=threshold, total_xp=xp)


def compute_progression(stats: VaultStats, streak: int) -> Progression:
    """Level, XP into level, next threshold and total XP for stats and streak."""
    return level_for_xp(total_xp(stats, streak))


def badge_for(level: int) -> Badge:
    """Badge for the highest level threshold not above ``level``."""
    index = bisect.bisect_right(_BADGE_LEVELS, level) - 1
    return BADGES[max(index, 0)][1]


def format_number(value: float) -> str:
    """Compact display form: 1.2K, 3.4M."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1000:
        return f"{value / 1000:.1f}K"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.1f}"
    return str(int(value))
