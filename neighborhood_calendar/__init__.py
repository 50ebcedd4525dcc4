"""neighborhood_calendar - recurring-event materialization for community calendars.

Expands base event rows (one-off or daily/weekly/bi-weekly/monthly
recurrences) into the concrete occurrences visible in a calendar window and
merges them into one time-ordered list. Instances are derived on every call
and never stored.
"""

__version__ = "0.1.0"

from .calendar_window import calendar_window
from .config_manager import CalendarConfig, ConfigManager
from .exceptions import CalendarEngineError, MalformedEventError
from .ics_export import generate_ics_content, ics_filename
from .instance_generator import MAX_INSTANCES, generate, generate_instances
from .models import CalendarEvent, InstanceMetadata, RecurrencePattern
from .recurrence import next_occurrence
from .window_merger import EventWindowMerger, merge_window

__all__ = [
    "MAX_INSTANCES",
    "CalendarConfig",
    "CalendarEngineError",
    "CalendarEvent",
    "ConfigManager",
    "EventWindowMerger",
    "InstanceMetadata",
    "MalformedEventError",
    "RecurrencePattern",
    "calendar_window",
    "generate",
    "generate_instances",
    "generate_ics_content",
    "ics_filename",
    "merge_window",
    "next_occurrence",
]
