"""iCalendar export of single events, including their recurrence rule.

Renders a base event as a standalone VCALENDAR document that calendar apps
can import. The recurrence pattern becomes an RRULE, with the recurrence end
date as UNTIL, so the importing app expands the series itself.
"""

import logging
import re
import zoneinfo
from datetime import UTC, datetime, timedelta
from typing import Any, Optional

from icalendar import Calendar, Event as ICalEvent, vRecur

from .config_manager import CalendarConfig
from .datetime_utils import format_instance_date, parse_event_instant
from .models import CalendarEvent, RecurrencePattern
from .recurrence import resolve_pattern

logger = logging.getLogger(__name__)

# Exported events have no stored end; calendar apps get a one-hour slot
DEFAULT_EVENT_DURATION = timedelta(hours=1)

MAX_FILENAME_LENGTH = 50

# Pattern -> (FREQ, INTERVAL)
RRULE_FREQUENCIES: dict[RecurrencePattern, tuple[str, int]] = {
    RecurrencePattern.DAILY: ("DAILY", 1),
    RecurrencePattern.WEEKLY: ("WEEKLY", 1),
    RecurrencePattern.BI_WEEKLY: ("WEEKLY", 2),
    RecurrencePattern.MONTHLY: ("MONTHLY", 1),
}


def build_rrule(event: CalendarEvent) -> Optional[dict[str, Any]]:
    """Map an event's recurrence to RRULE components.

    Unrecognized patterns map to weekly, matching calendar expansion.

    Returns:
        Dict suitable for ``icalendar.vRecur``, or None when the event does not recur

    Raises:
        MalformedEventError: If ``recurrence_end_date`` cannot be parsed
    """
    if not event.is_recurring or not event.recurrence_pattern:
        return None

    freq, interval = RRULE_FREQUENCIES[resolve_pattern(event.recurrence_pattern)]
    rule: dict[str, Any] = {"FREQ": freq}
    if interval > 1:
        rule["INTERVAL"] = interval
    if event.recurrence_end_date is not None:
        until = parse_event_instant(event.recurrence_end_date, event.id, "recurrence_end_date")
        rule["UNTIL"] = until.astimezone(UTC)
    return rule


def rrule_line(event: CalendarEvent) -> str:
    """Render the event's recurrence as an ``RRULE:`` content line, or "" if none."""
    rule = build_rrule(event)
    if rule is None:
        return ""
    return "RRULE:" + vRecur(rule).to_ical().decode("utf-8")


def generate_ics_content(
    event: CalendarEvent,
    timezone: Optional[str] = None,
    now: Optional[datetime] = None,
    config: Optional[CalendarConfig] = None,
) -> str:
    """Render ``event`` as an iCalendar document.

    Args:
        event: Base event to export
        timezone: IANA timezone for DTSTART/DTEND; defaults to the configured zone
        now: DTSTAMP value; defaults to the current time
        config: Calendar configuration; defaults to CalendarConfig()

    Returns:
        ICS text

    Raises:
        MalformedEventError: If the event's instants cannot be parsed
        ValueError: If ``timezone`` is not a known IANA timezone
    """
    config = config or CalendarConfig()
    tz_name = timezone or config.default_timezone
    try:
        tz = zoneinfo.ZoneInfo(tz_name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {tz_name!r}") from e

    start = parse_event_instant(event.time, event.id, "time").astimezone(tz)
    payload = event.model_extra or {}

    cal = Calendar()
    cal.add("prodid", config.ics_prodid)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")

    vevent = ICalEvent()
    vevent.add("uid", f"{event.original_event_id}@{config.ics_uid_domain}")
    vevent.add("dtstamp", (now or datetime.now(UTC)).astimezone(UTC))
    vevent.add("dtstart", start)
    vevent.add("dtend", start + DEFAULT_EVENT_DURATION)
    vevent.add("summary", payload.get("title") or "")

    description = payload.get("description")
    if description:
        vevent.add("description", description)
    location = payload.get("location")
    if location:
        vevent.add("location", location)

    rule = build_rrule(event)
    if rule is not None:
        vevent.add("rrule", rule)

    vevent.add("status", "CONFIRMED")
    vevent.add("transp", "OPAQUE")
    cal.add_component(vevent)
    cal.add_missing_timezones()

    logger.debug("Generated ICS for event %s in %s (recurring=%s)", event.id, tz_name, rule is not None)
    return cal.to_ical().decode("utf-8")


def sanitize_filename(name: str) -> str:
    """Reduce ``name`` to ``[A-Za-z0-9_-]``, collapsing and trimming dashes."""
    cleaned = re.sub(r"[^a-zA-Z0-9\-_]", "-", name)
    cleaned = re.sub(r"-+", "-", cleaned)
    cleaned = cleaned.strip("-")
    return cleaned[:MAX_FILENAME_LENGTH]


def ics_filename(event: CalendarEvent) -> str:
    """Download filename for an exported event: ``<title>-<YYYY-MM-DD>.ics``.

    Raises:
        MalformedEventError: If the event's time cannot be parsed
    """
    start = parse_event_instant(event.time, event.id, "time")
    title = (event.model_extra or {}).get("title") or "event"
    return f"{sanitize_filename(str(title))}-{format_instance_date(start)}.ics"
