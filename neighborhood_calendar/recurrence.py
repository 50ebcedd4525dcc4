"""Recurrence pattern increments.

Computes the instant following a given occurrence for each supported cadence.
Day-based patterns step by a fixed number of calendar days, keeping the
time-of-day in the instant's own timezone. Monthly steps return to the
series' anchor day-of-month, clamped to the last day of shorter months, so a
series starting Jan 31 runs Feb 29 (leap year), Mar 31, Apr 30.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from .models import RecurrencePattern

logger = logging.getLogger(__name__)

# Fixed-length steps; monthly is handled separately
PATTERN_STEPS: dict[RecurrencePattern, timedelta] = {
    RecurrencePattern.DAILY: timedelta(days=1),
    RecurrencePattern.WEEKLY: timedelta(weeks=1),
    RecurrencePattern.BI_WEEKLY: timedelta(weeks=2),
}

# Unknown or missing patterns recur weekly
FALLBACK_PATTERN = RecurrencePattern.WEEKLY


def resolve_pattern(pattern: Union[RecurrencePattern, str, None]) -> RecurrencePattern:
    """Map a stored pattern string to a RecurrencePattern.

    Unrecognized or missing values resolve to the weekly fallback.
    """
    if isinstance(pattern, RecurrencePattern):
        return pattern
    try:
        return RecurrencePattern(pattern)
    except ValueError:
        logger.debug("Unrecognized recurrence pattern %r, falling back to weekly", pattern)
        return FALLBACK_PATTERN


def next_occurrence(
    current: datetime,
    pattern: Union[RecurrencePattern, str, None],
    anchor_day: Optional[int] = None,
) -> datetime:
    """Compute the occurrence after ``current``.

    Args:
        current: Current occurrence instant
        pattern: Recurrence pattern (stored string or RecurrencePattern)
        anchor_day: Day-of-month monthly series return to; defaults to ``current.day``

    Returns:
        Next occurrence instant, same time-of-day as ``current``

    Raises:
        OverflowError: If the next occurrence would fall after ``datetime.max``
    """
    resolved = resolve_pattern(pattern)
    if resolved is RecurrencePattern.MONTHLY:
        try:
            # relativedelta clamps day= to the last valid day of the target month
            return current + relativedelta(months=1, day=anchor_day or current.day)
        except ValueError as e:
            # relativedelta reports year 10000 as a ValueError from replace()
            raise OverflowError(f"Monthly occurrence after {current.isoformat()} is out of range") from e
    return current + PATTERN_STEPS[resolved]


def skip_ahead(
    current: datetime,
    pattern: Union[RecurrencePattern, str, None],
    target: datetime,
    anchor_day: Optional[int] = None,
) -> datetime:
    """Jump ``current`` forward by whole steps to shortly before ``target``.

    Lands on an occurrence of the series that is strictly before ``target``
    (or returns ``current`` unchanged when it is already close), leaving the
    caller to finish with :func:`next_occurrence`. Keeps fast-forwarding cheap
    for old series queried against far-future windows.
    """
    if current >= target:
        return current

    resolved = resolve_pattern(pattern)
    if resolved is RecurrencePattern.MONTHLY:
        try:
            local_target = target.astimezone(current.tzinfo)
        except OverflowError:
            # Target sits at the edge of the datetime range; step from current instead
            return current
        months = (local_target.year - current.year) * 12 + (local_target.month - current.month) - 1
        if months <= 0:
            return current
        return current + relativedelta(months=months, day=anchor_day or current.day)

    # One step of slack absorbs DST shifts between wall-clock and elapsed time
    steps = (target - current) // PATTERN_STEPS[resolved] - 1
    if steps <= 0:
        return current
    return current + PATTERN_STEPS[resolved] * steps
