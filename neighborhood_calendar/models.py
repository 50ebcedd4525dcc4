"""Data models for base events and their materialized instances."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Raw instant as stored (datetime or ISO-8601 string). Left unvalidated and
# parsed lazily by the engine, so NULL, numeric or garbled values surface as
# MalformedEventError instead of being coerced by the model.
RawInstant = Any


class RecurrencePattern(str, Enum):
    """Recognized recurrence cadences."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"


class InstanceMetadata(BaseModel):
    """Back-reference from a materialized instance to its base event."""

    is_recurring_instance: bool = Field(default=True, description="Generated from a recurrence")
    original_event_id: str = Field(..., description="ID of the authoritative base event")
    original_time: RawInstant = Field(..., description="Start instant of the base event")

    @field_serializer("original_time")
    def serialize_original_time(self, value: RawInstant) -> Any:
        """Serialize datetime to ISO format."""
        return value.isoformat() if isinstance(value, datetime) else value


class CalendarEvent(BaseModel):
    """Calendar event row, either a base event or a materialized instance.

    Only the temporal and recurrence fields are interpreted. Everything else a
    row carries (title, description, location, host_id, ...) is kept as extra
    payload and copied verbatim into instances.
    """

    id: str = Field(..., description="Event ID")
    time: RawInstant = Field(..., description="Start instant of this occurrence")

    # Recurrence
    is_recurring: bool = Field(default=False, description="Recurring event flag")
    recurrence_pattern: Optional[str] = Field(
        default=None, description="daily, weekly, bi-weekly or monthly"
    )
    recurrence_end_date: Optional[RawInstant] = Field(
        default=None, description="No occurrence may fall after this instant"
    )

    # Set only on instances generated from a recurring base event
    metadata: Optional[InstanceMetadata] = Field(default=None, description="Instance back-reference")

    model_config = ConfigDict(extra="allow")

    @field_validator("is_recurring", mode="before")
    @classmethod
    def _null_is_not_recurring(cls, value: object) -> object:
        return False if value is None else value

    @property
    def is_recurring_instance(self) -> bool:
        """Check if this event was materialized from a recurrence."""
        return self.metadata is not None and self.metadata.is_recurring_instance

    @property
    def pattern(self) -> Optional[RecurrencePattern]:
        """Recognized recurrence pattern, or None for missing/unknown values."""
        try:
            return RecurrencePattern(self.recurrence_pattern)
        except ValueError:
            return None

    @property
    def original_event_id(self) -> str:
        """ID of the authoritative base event for edit/delete-series actions."""
        return self.metadata.original_event_id if self.metadata else self.id

    @field_serializer("time", "recurrence_end_date", when_used="unless-none")
    def serialize_datetime(self, value: RawInstant) -> Any:
        """Serialize datetime fields to ISO format."""
        return value.isoformat() if isinstance(value, datetime) else value
