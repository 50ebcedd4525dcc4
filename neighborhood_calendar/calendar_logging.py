"""
Central logging configuration for neighborhood_calendar.

The library itself only emits through module loggers; applications embedding
it call :func:`configure_calendar_logging` once at startup to get colorized
console output and per-module levels.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

# HH:MM:SS  LEVEL   logger.name: message, with only the level colorized
LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

CALENDAR_MODULES = [
    "neighborhood_calendar",
    "neighborhood_calendar.instance_generator",
    "neighborhood_calendar.window_merger",
    "neighborhood_calendar.recurrence",
    "neighborhood_calendar.ics_export",
    "neighborhood_calendar.config_manager",
]

# Third-party loggers kept quiet unless explicitly reset
NOISY_LOGGERS = ["icalendar", "asyncio"]


def configure_calendar_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure console logging and module levels for neighborhood_calendar.

    Args:
        debug_mode: Whether to enable debug logging for neighborhood_calendar modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        NEIGHBORHOOD_CALENDAR_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        NEIGHBORHOOD_CALENDAR_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("NEIGHBORHOOD_CALENDAR_DEBUG", "").lower() in ("1", "true", "yes", "on")
    env_log_level = os.getenv("NEIGHBORHOOD_CALENDAR_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if the host application has not installed one
    if not root_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(
            ColoredFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT, log_colors=LOG_COLORS)
        )
        root_logger.addHandler(handler)

    module_level = logging.DEBUG if final_debug else logging.INFO
    for module in CALENDAR_MODULES:
        logging.getLogger(module).setLevel(module_level)
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    if final_debug:
        root_logger.info("Debug logging enabled for neighborhood_calendar modules")
    else:
        root_logger.debug("Production logging configuration applied")


def reset_logging_to_debug() -> None:
    """Reset the root and suppressed loggers to DEBUG for troubleshooting."""
    logging.getLogger().setLevel(logging.DEBUG)
    for logger_name in NOISY_LOGGERS + CALENDAR_MODULES:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)
    logging.getLogger().info("All loggers reset to DEBUG level for troubleshooting")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in ["neighborhood_calendar", *NOISY_LOGGERS]:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
