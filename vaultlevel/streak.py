"""Day-granularity activity streak tracking.

Transitions, evaluated in order:

1. No recorded activity day: activity today starts a streak of 1.
2. Already counted today: nothing changes, so repeated recomputes within
   one day are stable.
3. Activity today after a gap of 1 or 2 days continues the streak (one
   missed day is a grace day). Any other gap starts over at 1.
4. No activity today: nothing changes. A quiet day only breaks the streak
   once a later active day finds the gap too large.
"""

import logging
from dataclasses import dataclass
from datetime import date

logger = logging.getLogger(__name__)

# Largest gap in days that still continues a streak
GRACE_GAP_DAYS = 2


@dataclass(frozen=True)
class StreakState:
    streak: int = 0
    last_activity_date: date | None = None


def update_streak(state: StreakState, has_activity_today: bool, today: date) -> StreakState:
    """Advance the streak state machine by one evaluation."""
    last = state.last_activity_date

    if last is None:
        if has_activity_today:
            logger.debug("Starting new streak: 1")
            return StreakState(streak=1, last_activity_date=today)
        return state

    if last == today:
        return state

    if not has_activity_today:
        logger.debug("No activity today, streak remains %d", state.streak)
        return state

    gap = (today - last).days
    if 1 <= gap <= GRACE_GAP_DAYS:
        logger.debug("Streak continues after %d day(s): %d", gap, state.streak + 1)
        return StreakState(streak=state.streak + 1, last_activity_date=today)

    logger.debug("Gap of %d days, starting new streak: 1", gap)
    return StreakState(streak=1, last_activity_date=today)
