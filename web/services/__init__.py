"""
Family Pane Services Package.

This package contains service layer modules that resolve the core objects
injected into the Flask app, separating them from routes for better
testability.

ARCHITECTURE RULE:
- Services may ONLY import from core/* modules (and flask for app context)
- Services MUST NOT import directly from utils/
"""

from web.services import (
    auth_service,
    chores_service,
    events_service,
    health_service,
    settings_service,
)

__all__ = [
    "auth_service",
    "chores_service",
    "events_service",
    "health_service",
    "settings_service",
]
