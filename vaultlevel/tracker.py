"""
Recompute pipeline for vault progression.

LevelTracker owns the persisted state of one vault. Every recompute scans
the whole vault and rebuilds stats, streak and level from scratch; nothing
is accumulated incrementally between passes.
"""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Callable

from .aggregate import aggregate, has_activity_on
from .config import TrackerConfig
from .events import ChangeEvent, log_level_up
from .metrics import extract_all
from .models import Badge, LevelUp, ProgressState
from .progression import badge_for, compute_progression, has_streak_bonus
from .scheduler import UpdateScheduler
from .store import StateStore
from .streak import StreakState, update_streak
from .vault.loader import scan_vault

logger = logging.getLogger(__name__)

LevelUpListener = Callable[[LevelUp], None]


class LevelTracker:
    """Loads, recomputes and persists the progress state of a vault."""

    def __init__(
        self,
        vault_path: Path,
        config: TrackerConfig | None = None,
        store: StateStore | None = None,
        now: Callable[[], datetime] = datetime.now,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the tracker and load persisted state.

        Args:
            vault_path: Root directory of the vault
            config: Tracker configuration (defaults if None)
            store: State store (defaults to the config's state path)
            now: Local wall clock, used for "today" and timestamps
            monotonic: Clock driving the debounce scheduler
        """
        self.vault_path = vault_path
        self.config = config or TrackerConfig()
        self.store = store or StateStore(self.config.state_path(vault_path))
        self.history_path = self.config.history_path(vault_path)
        self.now = now

        self._listeners: list[LevelUpListener] = []
        self._state = self.store.load()
        if not self.store.exists():
            self._save(self._state)

        self.scheduler = UpdateScheduler(
            self.recompute,
            quiet_period=self.config.quiet_period,
            clock=monotonic,
        )

    @property
    def current_state(self) -> ProgressState:
        """Last computed (or loaded) state."""
        return self._state

    def on_level_up(self, listener: LevelUpListener) -> None:
        """Register a callback for level-up signals."""
        self._listeners.append(listener)

    def badge_for(self, level: int | None = None) -> Badge:
        """Badge for ``level``, or for the current level."""
        return badge_for(self._state.level if level is None else level)

    def has_streak_bonus(self) -> bool:
        return has_streak_bonus(self._state.streak)

    def schedule_update(self, event: ChangeEvent | None = None) -> None:
        """Arm a debounced recompute for a change event."""
        self.scheduler.notify(event)

    def poll(self) -> bool:
        """Run a pending recompute if its quiet period has elapsed."""
        return self.scheduler.poll()

    def recompute(self) -> ProgressState:
        """Scan the vault, rebuild the state, persist it, and signal level-ups.

        ``last_updated`` is only restamped when something else in the state
        changed, so recomputing an untouched vault on the same day yields an
        identical state. A failed save is logged and the new state is still
        kept in memory.
        """
        now = self.now()
        today = now.date()

        scan = scan_vault(self.vault_path, self.config.extension)
        metrics = extract_all(scan.snapshots)
        stats = aggregate(metrics)

        active = has_activity_on(metrics, today)
        previous = self._state
        streak = update_streak(
            StreakState(previous.streak, previous.last_activity_date),
            active,
            today,
        )
        progression = compute_progression(stats, streak.streak)

        state = ProgressState(
            level=progression.level,
            current_xp=progression.current_xp,
            total_xp=progression.total_xp,
            next_level_xp=progression.next_level_xp,
            streak=streak.streak,
            last_activity_date=streak.last_activity_date,
            stats=stats,
            last_updated=previous.last_updated,
        )
        if state != previous:
            state.last_updated = now.timestamp() * 1000

        self._save(state)
        self._state = state

        logger.info(
            "Recomputed %s: level %d (%s/%d XP), %d notes, streak %d",
            self.vault_path,
            state.level,
            state.current_xp,
            state.next_level_xp,
            stats.total_notes,
            state.streak,
        )

        if state.level > previous.level:
            self._signal_level_up(previous.level, state)

        return state

    def _save(self, state: ProgressState) -> None:
        try:
            self.store.save(state)
        except OSError:
            logger.exception("Could not save state to %s", self.store.path)

    def _signal_level_up(self, old_level: int, state: ProgressState) -> None:
        logger.info("Level up: %d -> %d", old_level, state.level)
        try:
            log_level_up(
                self.history_path,
                old_level=old_level,
                new_level=state.level,
                total_xp=state.total_xp,
                streak=state.streak,
                metadata={"stats": state.stats.to_dict()},
            )
        except OSError:
            logger.exception("Could not write level history to %s", self.history_path)
        event = LevelUp(old_level=old_level, new_level=state.level)
        for listener in self._listeners:
            listener(event)
