"""
Family Pane Web Blueprints Package.

This package contains Flask Blueprints for modular route organization.
"""

__all__ = ["auth", "chores", "display_config", "events"]
