"""Default query windows for calendar views."""

from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from .config_manager import CalendarConfig
from .datetime_utils import ensure_timezone_aware


def calendar_window(
    anchor: datetime,
    lookahead_months: Optional[int] = None,
    config: Optional[CalendarConfig] = None,
) -> tuple[datetime, datetime]:
    """Build the window a month view requests: the anchor's month plus look-ahead.

    Args:
        anchor: Any instant in the visible month (naive values are read as UTC)
        lookahead_months: Extra months after the visible one; defaults to the
            configured ``lookahead_months``
        config: Calendar configuration; defaults to CalendarConfig()

    Returns:
        ``(start, end)``: first instant of the anchor's month and last
        microsecond of the final look-ahead month, in the anchor's timezone

    Raises:
        ValueError: If ``lookahead_months`` is negative
    """
    if lookahead_months is None:
        lookahead_months = (config or CalendarConfig()).lookahead_months
    if lookahead_months < 0:
        raise ValueError(f"lookahead_months must be >= 0, got {lookahead_months}")

    start = ensure_timezone_aware(anchor).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    end = start + relativedelta(months=lookahead_months + 1) - timedelta(microseconds=1)
    return start, end
