"""
System Core - Health and Host Information.
"""

import datetime
import logging
import platform
import time
from typing import Any

import psutil

logger = logging.getLogger(__name__)


def get_health(version: str) -> dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "version": version,
    }


def get_process_uptime() -> float:
    """Seconds since this process started."""
    try:
        started = psutil.Process().create_time()
    except psutil.Error as e:
        logger.error(f"Failed to read process start time: {e}")
        return 0.0
    return max(0.0, time.time() - started)


def get_system_info() -> dict[str, Any]:
    """
    Collects host and runtime information for the admin interface.

    Returns:
        Dictionary with platform, arch, pythonVersion, uptime (seconds) and
        memory usage.
    """
    info = {
        "platform": platform.system().lower(),
        "arch": platform.machine(),
        "pythonVersion": platform.python_version(),
        "uptime": round(get_process_uptime(), 3),
    }
    try:
        info["memoryPercent"] = psutil.virtual_memory().percent
        info["cpuCount"] = psutil.cpu_count()
    except Exception as e:
        logger.error(f"Failed to collect system vitals: {e}")
    return info
