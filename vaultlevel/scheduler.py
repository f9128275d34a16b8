"""Debounced scheduling of vault recomputes."""

import logging
import time
from typing import Callable

from .events import ChangeEvent

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD = 0.5


class UpdateScheduler:
    """
    Collapses bursts of change events into a single recompute.

    Each ``notify`` replaces any pending deadline with ``now + quiet_period``.
    ``poll`` runs the callback once the deadline has passed, so a burst of
    events produces exactly one call, after the last event has been quiet for
    the full period. All calls are expected on one thread.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        clock: Callable[[], float] = time.monotonic,
    ):
        if quiet_period < 0:
            raise ValueError("quiet_period must be non-negative")
        self.callback = callback
        self.quiet_period = quiet_period
        self.clock = clock

        self._deadline: float | None = None
        self._coalesced = 0
        self.last_event: ChangeEvent | None = None

    @property
    def pending(self) -> bool:
        """True if a recompute is armed and has not yet run."""
        return self._deadline is not None

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def notify(self, event: ChangeEvent | None = None) -> None:
        """Record an event and re-arm the quiet period."""
        self._deadline = self.clock() + self.quiet_period
        self._coalesced += 1
        self.last_event = event

    def cancel(self) -> None:
        """Drop any pending recompute."""
        self._deadline = None
        self._coalesced = 0

    def poll(self) -> bool:
        """Run the callback if the quiet period has elapsed.

        Returns True if the callback ran.
        """
        if self._deadline is None or self.clock() < self._deadline:
            return False

        coalesced = self._coalesced
        self._deadline = None
        self._coalesced = 0

        logger.debug("Quiet period elapsed, recomputing after %d event(s)", coalesced)
        self.callback()
        return True
