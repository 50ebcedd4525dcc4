"""Configuration management for neighborhood_calendar."""

from __future__ import annotations

import logging
import os
import zoneinfo
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ENV_PREFIX = "NEIGHBORHOOD_CALENDAR_"

DEFAULT_LOOKAHEAD_MONTHS = 3
DEFAULT_TIMEZONE = "UTC"
DEFAULT_ICS_UID_DOMAIN = "neighborhoodos.com"
DEFAULT_ICS_PRODID = "-//NeighborhoodOS//Calendar Event//EN"


@dataclass(frozen=True)
class CalendarConfig:
    """Settings for calendar windows and ICS export, with explicit defaults."""

    lookahead_months: int = DEFAULT_LOOKAHEAD_MONTHS
    default_timezone: str = DEFAULT_TIMEZONE
    ics_uid_domain: str = DEFAULT_ICS_UID_DOMAIN
    ics_prodid: str = DEFAULT_ICS_PRODID

    @classmethod
    def from_settings(cls, settings: Any) -> CalendarConfig:
        """Extract calendar configuration from a settings object or dict.

        Args:
            settings: Object with attributes or dict with keys named like the fields

        Returns:
            CalendarConfig with values from settings or defaults
        """
        return cls(
            lookahead_months=int(
                get_config_value(settings, "lookahead_months", DEFAULT_LOOKAHEAD_MONTHS)
            ),
            default_timezone=get_config_value(settings, "default_timezone", DEFAULT_TIMEZONE),
            ics_uid_domain=get_config_value(settings, "ics_uid_domain", DEFAULT_ICS_UID_DOMAIN),
            ics_prodid=get_config_value(settings, "ics_prodid", DEFAULT_ICS_PRODID),
        )


class ConfigManager:
    """Manages configuration from environment variables and .env files."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Load .env file and set environment variables.

        Only sets variables that are not already in the environment.

        Returns:
            List of environment variable keys that were loaded from .env file
        """
        if not self.env_file_path.exists():
            logger.debug("No .env file found at %s", self.env_file_path)
            return []

        set_keys = []
        content = self.env_file_path.read_text(encoding="utf-8")

        for raw_line in content.splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, val = line.split("=", 1)
            key = key.strip()
            val = val.strip().strip('"').strip("'")

            if key and key not in os.environ:
                os.environ[key] = val
                set_keys.append(key)

        if set_keys:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(set_keys))
        return set_keys

    def build_config_from_env(self) -> dict[str, Any]:
        """Build configuration dictionary from environment variables.

        Recognizes:
        - NEIGHBORHOOD_CALENDAR_LOOKAHEAD_MONTHS -> 'lookahead_months' (non-negative int)
        - NEIGHBORHOOD_CALENDAR_DEFAULT_TIMEZONE -> 'default_timezone' (IANA name)
        - NEIGHBORHOOD_CALENDAR_ICS_UID_DOMAIN -> 'ics_uid_domain'
        - NEIGHBORHOOD_CALENDAR_ICS_PRODID -> 'ics_prodid'

        Invalid values are logged and ignored.

        Returns:
            Configuration dictionary accepted by CalendarConfig.from_settings
        """
        cfg: dict[str, Any] = {}

        lookahead = os.environ.get(f"{ENV_PREFIX}LOOKAHEAD_MONTHS")
        if lookahead:
            try:
                months = int(lookahead)
                if months < 0:
                    raise ValueError(months)
                cfg["lookahead_months"] = months
            except ValueError:
                logger.warning("Invalid %sLOOKAHEAD_MONTHS=%r; ignoring", ENV_PREFIX, lookahead)

        default_tz = os.environ.get(f"{ENV_PREFIX}DEFAULT_TIMEZONE")
        if default_tz:
            if is_valid_timezone(default_tz):
                cfg["default_timezone"] = default_tz
            else:
                logger.warning("Invalid %sDEFAULT_TIMEZONE=%r; ignoring", ENV_PREFIX, default_tz)

        uid_domain = os.environ.get(f"{ENV_PREFIX}ICS_UID_DOMAIN")
        if uid_domain:
            cfg["ics_uid_domain"] = uid_domain

        prodid = os.environ.get(f"{ENV_PREFIX}ICS_PRODID")
        if prodid:
            cfg["ics_prodid"] = prodid

        return cfg

    def load_full_config(self, base: CalendarConfig | None = None) -> CalendarConfig:
        """Load .env file and build configuration from environment.

        Args:
            base: Config whose values are kept where the environment is silent

        Returns:
            CalendarConfig
        """
        self.load_env_file()
        return replace(base or CalendarConfig(), **self.build_config_from_env())


def is_valid_timezone(name: str) -> bool:
    """Check that ``name`` is a known IANA timezone."""
    try:
        zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        return False
    return True


def get_config_value(config: Any, key: str, default: Any = None) -> Any:
    """Get configuration value supporting both dict and dataclass-like objects.

    Args:
        config: Configuration object (dict or object with attributes)
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    if isinstance(config, dict):
        return config.get(key, default)
    return getattr(config, key, default)
