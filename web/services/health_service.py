"""
Health Service - Web Layer Service for System Health.

Exposes health and host information to the web interface.
"""

from core import system_core


def get_health(version: str) -> dict:
    """
    Get the liveness payload.

    Returns:
        Dictionary with status, timestamp and version.
    """
    return system_core.get_health(version)


def get_system_info() -> dict:
    return system_core.get_system_info()
