"""
Settings Service - Web Layer Service for Display Configuration.

Thin wrapper over core.config_core for web-specific concerns.
"""

from typing import Any

from flask import current_app

from core.config_core import ConfigService


def _settings() -> ConfigService:
    return current_app.extensions["family_pane"]["settings"]


def get_display_config() -> dict[str, Any]:
    """
    Get the structured display configuration.

    Delegates to core.config_core.
    """
    return _settings().get_display_config()


def update_display_config(payload: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Update display settings.

    Args:
        payload: Storage keys and their new values

    Returns:
        Tuple of (success, error messages)
    """
    return _settings().update_display_config(payload)


def get_app_setting(key: str, default: Any = None) -> Any:
    """Process-level setting from config.py, as passed to create_app."""
    return current_app.extensions["family_pane"]["config"].get(key, default)
