"""Shared fixtures for neighborhood_calendar tests."""

import logging
from collections.abc import Generator
from typing import Any, Callable

import pytest

from neighborhood_calendar.models import CalendarEvent

CONFIG_ENV_KEYS = [
    "NEIGHBORHOOD_CALENDAR_LOOKAHEAD_MONTHS",
    "NEIGHBORHOOD_CALENDAR_DEFAULT_TIMEZONE",
    "NEIGHBORHOOD_CALENDAR_ICS_UID_DOMAIN",
    "NEIGHBORHOOD_CALENDAR_ICS_PRODID",
    "NEIGHBORHOOD_CALENDAR_DEBUG",
    "NEIGHBORHOOD_CALENDAR_LOG_LEVEL",
]


@pytest.fixture
def make_event() -> Callable[..., CalendarEvent]:
    """Factory for base events shaped like database rows.

    Defaults to a one-off event at 2024-01-01 10:00 UTC with a small payload;
    any keyword overrides or extends the row.
    """

    def _make(**overrides: Any) -> CalendarEvent:
        row: dict[str, Any] = {
            "id": "evt-1",
            "time": "2024-01-01T10:00:00Z",
            "is_recurring": False,
            "recurrence_pattern": None,
            "recurrence_end_date": None,
            "title": "Community Garden Workday",
            "description": "Bring gloves",
            "location": "Elm Street Garden",
            "host_id": "user-42",
            "neighborhood_id": "hood-7",
        }
        row.update(overrides)
        return CalendarEvent.model_validate(row)

    return _make


@pytest.fixture(autouse=True)
def clean_config_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, Any, None]:
    """Clear neighborhood_calendar environment variables around each test."""
    for key in CONFIG_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def restore_logging() -> Generator[None, Any, None]:
    """Restore root logger level and handlers after logging tests."""
    root = logging.getLogger()
    original_level = root.level
    original_handlers = list(root.handlers)
    yield
    root.setLevel(original_level)
    root.handlers = original_handlers


@pytest.fixture
def tmp_env_file(tmp_path: Any) -> Callable[[str], Any]:
    """Write a .env file into a temporary directory and return its path."""

    def _write(content: str) -> Any:
        path = tmp_path / ".env"
        path.write_text(content, encoding="utf-8")
        return path

    return _write

