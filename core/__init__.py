"""
Family Pane Core Package.

This package contains the core business logic of the application,
separated from the web layer. All storage access is coordinated through
core.store; chores, display configuration and the real-time channel each
have their own core module.

ARCHITECTURE RULES:
- core/ modules may only import from:
  - Python standard library
  - utils/ (SQLite query functions)
  - third-party libraries that are not web frameworks

- core/ modules MUST NOT import from:
  - web/ (no Flask dependencies)
  - flask, werkzeug, or any web-specific packages

- Only core/store.py calls the mutation functions in utils/db.
"""

__all__ = [
    "chores_core",
    "config_core",
    "errors",
    "events_core",
    "store",
    "system_core",
]
