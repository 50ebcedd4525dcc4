"""Expansion of one base event into the occurrences inside a query window."""

import logging
from datetime import date, datetime
from typing import Optional, Union

from .datetime_utils import format_instance_date, parse_event_instant, window_bound
from .models import CalendarEvent, InstanceMetadata, RecurrencePattern
from .recurrence import next_occurrence, resolve_pattern, skip_ahead

logger = logging.getLogger(__name__)

# Hard ceiling on instances generated per base event per call
MAX_INSTANCES = 100


def instance_id(event_id: str, occurrence: datetime) -> str:
    """Build the deterministic ID of the occurrence of ``event_id`` at ``occurrence``."""
    return f"{event_id}_{format_instance_date(occurrence)}"


WindowBound = Union[date, datetime]


def check_window(window_start: WindowBound, window_end: WindowBound) -> tuple[datetime, datetime]:
    """Normalize window bounds to aware datetimes.

    Date bounds cover whole days, so ``(date(2024, 1, 1), date(2024, 4, 30))``
    includes everything on April 30.

    Raises:
        TypeError: If a bound is neither a date nor a datetime
        ValueError: If the window ends before it starts
    """
    start = window_bound(window_start)
    end = window_bound(window_end, end=True)
    if start > end:
        raise ValueError(f"Window start {start.isoformat()} is after window end {end.isoformat()}")
    return start, end


def generate_instances(
    event: CalendarEvent,
    window_start: WindowBound,
    window_end: WindowBound,
) -> list[CalendarEvent]:
    """Materialize the occurrences of ``event`` inside ``[window_start, window_end]``.

    Non-recurring events are returned unchanged when their time falls inside
    the window. Recurring events are fast-forwarded to the window, then
    emitted until the window end, the recurrence end date, or
    ``MAX_INSTANCES`` is reached, whichever comes first.

    Args:
        event: Base event
        window_start: Inclusive window start (naive values are read as UTC;
            dates start at 00:00 UTC)
        window_end: Inclusive window end (dates run to the end of the day)

    Returns:
        Instances in ascending time order

    Raises:
        MalformedEventError: If ``time`` (or ``recurrence_end_date`` of a
            recurring event) cannot be parsed
        TypeError: If a window bound is neither a date nor a datetime
        ValueError: If the window ends before it starts
    """
    start, end = check_window(window_start, window_end)
    event_time = parse_event_instant(event.time, event.id, "time")

    if not event.is_recurring:
        if start <= event_time <= end:
            return [event]
        return []

    recurrence_end: Optional[datetime] = None
    if event.recurrence_end_date is not None:
        recurrence_end = parse_event_instant(
            event.recurrence_end_date, event.id, "recurrence_end_date"
        )

    pattern = resolve_pattern(event.recurrence_pattern)
    anchor_day = event_time.day

    # Fast-forward to the first occurrence at or after the window start
    current: Optional[datetime] = skip_ahead(event_time, pattern, start, anchor_day)
    while current is not None and current < start:
        current = _advance(current, pattern, anchor_day)

    instances: list[CalendarEvent] = []
    while (
        current is not None
        and len(instances) < MAX_INSTANCES
        and current <= end
        and (recurrence_end is None or current <= recurrence_end)
    ):
        instances.append(_build_instance(event, current))
        current = _advance(current, pattern, anchor_day)

    if (
        current is not None
        and len(instances) >= MAX_INSTANCES
        and current <= end
        and (recurrence_end is None or current <= recurrence_end)
    ):
        logger.debug(
            "Recurring event %s truncated to %d instances before window end %s",
            event.id,
            MAX_INSTANCES,
            end.isoformat(),
        )

    logger.debug(
        "Expanded recurring event %s (%s): %d instances in window %s..%s",
        event.id,
        pattern.value,
        len(instances),
        start.isoformat(),
        end.isoformat(),
    )
    return instances


def _advance(current: datetime, pattern: RecurrencePattern, anchor_day: int) -> Optional[datetime]:
    """Step to the next occurrence, or None once the series runs past ``datetime.max``."""
    try:
        return next_occurrence(current, pattern, anchor_day)
    except OverflowError:
        logger.debug("Recurrence ran past the last representable date after %s", current.isoformat())
        return None


def _build_instance(event: CalendarEvent, occurrence: datetime) -> CalendarEvent:
    """Copy the base event to ``occurrence``, keeping every non-temporal field."""
    return event.model_copy(
        update={
            "id": instance_id(event.id, occurrence),
            "time": occurrence,
            "metadata": InstanceMetadata(
                is_recurring_instance=True,
                original_event_id=event.id,
                original_time=event.time,
            ),
        }
    )


# Short alias matching the engine's public contract
generate = generate_instances
