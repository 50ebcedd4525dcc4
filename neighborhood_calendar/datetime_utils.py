"""Instant parsing helpers for event rows.

Event rows carry instants either as ``datetime`` objects or as the ISO-8601
strings the data store returns. Naive values are read as UTC; aware values
keep their own tzinfo so wall-clock recurrence arithmetic happens in the
zone the event was stored with.
"""

import logging
from datetime import UTC, date, datetime, time
from typing import Any, Optional, Union

from dateutil.parser import isoparse

from .exceptions import MalformedEventError

logger = logging.getLogger(__name__)

# Format used for the date part of instance IDs
INSTANCE_DATE_FORMAT = "%Y-%m-%d"


def ensure_timezone_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware.

    Args:
        dt: Datetime to make timezone-aware

    Returns:
        Timezone-aware datetime (UTC if originally naive)
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def window_bound(value: Union[date, datetime], end: bool = False) -> datetime:
    """Normalize a query-window bound to a timezone-aware datetime.

    Calendar dates cover the whole day: a start date reads as 00:00 and an
    end date as the last microsecond of that day, both in UTC.

    Raises:
        TypeError: If the bound is neither a date nor a datetime
    """
    if isinstance(value, datetime):
        return ensure_timezone_aware(value)
    if isinstance(value, date):
        return datetime.combine(value, time.max if end else time.min, tzinfo=UTC)
    raise TypeError(f"Window bound must be a date or datetime, got {type(value).__name__}")


def parse_instant(value: Any) -> datetime:
    """Parse a stored instant into a timezone-aware datetime.

    Args:
        value: ``datetime`` or ISO-8601 string

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the value is empty, of an unsupported type, or not ISO-8601
    """
    if isinstance(value, datetime):
        return ensure_timezone_aware(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected datetime or ISO-8601 string, got {value!r}")
    try:
        parsed = isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid ISO-8601 instant: {value!r}") from e
    return ensure_timezone_aware(parsed)


def parse_event_instant(value: Any, event_id: Optional[str], field: str) -> datetime:
    """Parse one instant field of an event row.

    Raises:
        MalformedEventError: If the field cannot be parsed
    """
    try:
        return parse_instant(value)
    except ValueError as e:
        logger.debug("Unparsable %s on event %s: %r", field, event_id, value)
        raise MalformedEventError(
            f"Event {event_id!r} has an unparsable {field}: {value!r}",
            event_id=event_id,
            field=field,
        ) from e


def format_instance_date(dt: datetime) -> str:
    """Format the calendar date used in instance IDs (``YYYY-MM-DD``).

    The date is taken in the instant's own timezone.
    """
    return dt.strftime(INSTANCE_DATE_FORMAT)
