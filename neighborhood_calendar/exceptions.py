"""Exception hierarchy for the neighborhood_calendar recurrence engine.

The engine defines a single recoverable-by-caller error kind, raised when a
base event carries an instant that cannot be read. Reaching the per-event
instance cap is not an error and has no exception type.
"""

from typing import Optional


class CalendarEngineError(Exception):
    """Base exception for all neighborhood_calendar errors."""


class MalformedEventError(CalendarEngineError):
    """A base event's instant cannot be parsed.

    Raised when:
    - ``time`` is missing, NULL, numeric, empty, or not an ISO-8601 instant
    - ``recurrence_end_date`` is present on a recurring event but unparsable

    Never swallowed by the engine; the calendar view decides whether to render
    a partial calendar, show a message, or log and skip.
    """

    def __init__(self, message: str, event_id: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.event_id = event_id
        self.field = field
