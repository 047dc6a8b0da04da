"""
Config Core - Display Configuration.

Typed access to the key/value display settings stored by the Store.
Values are persisted as text; this module owns the defaults, the parsing
and the validation of admin updates.
"""

import logging
import re
from typing import Any

from core.store import Store
from utils.db import DEFAULT_DISPLAY_CONFIG

logger = logging.getLogger(__name__)

DISPLAY_VIEWS = ("dashboard", "calendar-photos", "chores", "photos", "messages")

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _validate_positive_int(value: Any) -> str:
    if isinstance(value, bool):
        raise ValueError("must be a positive integer")
    number = int(value)
    if number <= 0:
        raise ValueError("must be a positive integer")
    return str(number)


def _validate_brightness(value: Any) -> str:
    if isinstance(value, bool):
        raise ValueError("must be an integer between 0 and 100")
    number = int(value)
    if not 0 <= number <= 100:
        raise ValueError("must be an integer between 0 and 100")
    return str(number)


def _validate_bool(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return "1"
    if text in _FALSE_VALUES:
        return "0"
    raise ValueError("must be a boolean")


def _validate_time(value: Any) -> str:
    if not isinstance(value, str) or not _TIME_PATTERN.match(value):
        raise ValueError("must be a time in HH:MM format")
    return value


def _validate_view(value: Any) -> str:
    if value not in DISPLAY_VIEWS:
        raise ValueError(f"must be one of: {', '.join(DISPLAY_VIEWS)}")
    return value


_VALIDATORS = {
    "current_view": _validate_view,
    "photo_rotation_interval": _validate_positive_int,
    "calendar_refresh_interval": _validate_positive_int,
    "display_brightness": _validate_brightness,
    "sleep_schedule_enabled": _validate_bool,
    "sleep_start_time": _validate_time,
    "wake_time": _validate_time,
}


def validate_display_updates(payload: dict[str, Any]) -> tuple[dict[str, str], list[str]]:
    """
    Validates display config updates.

    Returns:
        Tuple of (text values ready to store, error messages)
    """
    valid = {}
    errors = []
    for key, value in payload.items():
        validator = _VALIDATORS.get(key)
        if validator is None:
            errors.append(f"Unknown config key: {key}")
            continue
        try:
            valid[key] = validator(value)
        except (TypeError, ValueError) as e:
            errors.append(f"{key} {e}")
    return valid, errors


class ConfigService:
    """Display configuration with default fallback."""

    def __init__(self, store: Store):
        self.store = store

    def get(self, key: str) -> str | None:
        value = self.store.get_config(key)
        if value is None:
            return DEFAULT_DISPLAY_CONFIG.get(key)
        return value

    def set(self, key: str, value: Any) -> None:
        self.store.set_config(key, value)

    def get_int(self, key: str) -> int | None:
        value = self.get(key)
        try:
            return int(value)
        except (TypeError, ValueError):
            default = DEFAULT_DISPLAY_CONFIG.get(key)
            logger.warning(f"Config {key}={value!r} is not an integer, using default {default}")
            return int(default) if default is not None else None

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        text = str(value).strip().lower() if value is not None else ""
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        default = DEFAULT_DISPLAY_CONFIG.get(key, "0")
        logger.warning(f"Config {key}={value!r} is not a boolean, using default {default}")
        return default in _TRUE_VALUES

    def get_all(self) -> dict[str, str]:
        """Raw text values, defaults filled in for missing keys."""
        values = dict(DEFAULT_DISPLAY_CONFIG)
        values.update(self.store.list_config())
        return values

    def get_display_config(self) -> dict[str, Any]:
        """
        Returns the display settings as one structured object.

        This is the shape display clients consume on connect and reconnect.
        """
        return {
            "currentView": self.get("current_view"),
            "photoRotationInterval": self.get_int("photo_rotation_interval"),
            "calendarRefreshInterval": self.get_int("calendar_refresh_interval"),
            "displayBrightness": self.get_int("display_brightness"),
            "sleepSchedule": {
                "enabled": self.get_bool("sleep_schedule_enabled"),
                "start": self.get("sleep_start_time"),
                "wake": self.get("wake_time"),
            },
        }

    def update_display_config(self, payload: dict[str, Any]) -> tuple[bool, list[str]]:
        """
        Updates display settings; nothing is written if any value is invalid.

        Returns:
            Tuple of (success, list of error messages)
        """
        if not isinstance(payload, dict):
            return False, ["Invalid payload format"]
        if not payload:
            return False, ["No config values provided"]

        valid, errors = validate_display_updates(payload)
        if errors:
            return False, errors

        self.store.set_config_many(valid)
        logger.info(f"Display config updated: {sorted(valid)}")
        return True, []
