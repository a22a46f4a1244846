"""Daily engagement streak tracking.

A streak counts consecutive calendar days with at least one verdict. Days are
compared in local time, so two verdicts an hour apart across midnight land on
consecutive days while two verdicts 23 hours apart on the same date do not.
"""

import logging
from datetime import date, datetime, tzinfo

from ..models.stats import Streak

logger = logging.getLogger(__name__)


def local_day(value: datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar day of a timestamp in local time.

    Naive timestamps are taken as already local. Aware timestamps are
    converted to ``tz``, or to the system zone when ``tz`` is None.
    """
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()


def days_between(earlier: datetime, later: datetime, tz: tzinfo | None = None) -> int:
    """Count calendar-day boundaries between two timestamps."""
    return (local_day(later, tz) - local_day(earlier, tz)).days


def update_streak(streak: Streak, verdict_date: datetime, tz: tzinfo | None = None) -> Streak:
    """Fold a new verdict into a streak.

    Args:
        streak: Prior streak state
        verdict_date: When the verdict was recorded
        tz: Zone used for day boundaries of aware timestamps

    Returns:
        New streak state; the caller persists it

    A first verdict starts at current=1 and keeps any stored record, so
    longest is max(longest, 1) rather than a flat 1.
    """
    if streak.last_verdict_date is None:
        # First verdict ever
        return Streak(current=1, longest=max(streak.longest, 1), last_verdict_date=verdict_date)

    days_diff = days_between(streak.last_verdict_date, verdict_date, tz)

    if days_diff < 0:
        logger.warning(
            f"Ignoring out-of-order verdict at {verdict_date.isoformat()} "
            f"(last verdict {streak.last_verdict_date.isoformat()})"
        )
        return streak

    if days_diff == 0:
        return streak.model_copy(update={"last_verdict_date": verdict_date})

    if days_diff == 1:
        current = streak.current + 1
        return Streak(
            current=current,
            longest=max(streak.longest, current),
            last_verdict_date=verdict_date,
        )

    # Streak broken, record preserved
    logger.debug(f"Streak of {streak.current} broken after {days_diff} days")
    return Streak(current=1, longest=max(streak.longest, 1), last_verdict_date=verdict_date)
