"""Merging of base events into one time-ordered instance sequence for a window.

Runs the instance generator over every base event against the same window
and stable-sorts the combined result, so events sharing an instant keep the
order in which the data store supplied them.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Union

from .datetime_utils import parse_instant
from .instance_generator import WindowBound, check_window, generate_instances
from .models import CalendarEvent

logger = logging.getLogger(__name__)

EventInput = Union[CalendarEvent, Mapping[str, Any]]


class EventWindowMerger:
    """Materializes and orders the events visible in a calendar window."""

    def merge_window(
        self,
        events: Iterable[EventInput],
        window_start: WindowBound,
        window_end: WindowBound,
    ) -> list[CalendarEvent]:
        """Expand every base event and return all instances sorted by time.

        Args:
            events: Base events, as models or database rows
            window_start: Inclusive window start (date or datetime)
            window_end: Inclusive window end; a date covers the whole day

        Returns:
            Instances in ascending time order; ties keep input order

        Raises:
            MalformedEventError: If any event has an unparsable instant
            TypeError: If a window bound is neither a date nor a datetime
            ValueError: If the window ends before it starts
        """
        start, end = check_window(window_start, window_end)

        merged: list[CalendarEvent] = []
        base_count = 0
        for raw_event in events:
            event = self._coerce_event(raw_event)
            merged.extend(generate_instances(event, start, end))
            base_count += 1

        # sorted() is stable: equal instants stay in input order
        ordered = sorted(merged, key=self._sort_key)

        logger.debug(
            "Merged %d base events into %d instances for window %s..%s",
            base_count,
            len(ordered),
            start.isoformat(),
            end.isoformat(),
        )
        return ordered

    def _coerce_event(self, event: EventInput) -> CalendarEvent:
        """Validate a database row into a CalendarEvent; models pass through."""
        if isinstance(event, CalendarEvent):
            return event
        return CalendarEvent.model_validate(dict(event))

    def _sort_key(self, event: CalendarEvent) -> datetime:
        # Every time here was already parsed once by the generator
        return parse_instant(event.time)


def merge_window(
    events: Iterable[EventInput],
    window_start: WindowBound,
    window_end: WindowBound,
) -> list[CalendarEvent]:
    """Expand and merge ``events`` for ``[window_start, window_end]``.

    Module-level shortcut for :meth:`EventWindowMerger.merge_window`.
    """
    return EventWindowMerger().merge_window(events, window_start, window_end)
