"""
Chores Service - Web Layer Service for Chores and Family Members.

Thin wrapper resolving the ChoreService injected into the current app.
"""

from typing import Any

from flask import current_app

from core.chores_core import ChoreService


def _chores() -> ChoreService:
    return current_app.extensions["family_pane"]["chores"]


# --- Chores ---


def list_chores(status: str = None, assigned_to: Any = None) -> list:
    """List chores, optionally filtered by status and assignee."""
    return _chores().list_chores(status, assigned_to)


def get_chore(chore_id: int) -> dict:
    return _chores().get_chore(chore_id)


def add_chore(fields: dict) -> int:
    """Create a chore and return its id."""
    return _chores().add_chore(fields)


def update_chore(chore_id: int, fields: dict) -> int:
    return _chores().update_chore(chore_id, fields)


def complete_chore(chore_id: int, member_id: Any) -> dict:
    """Complete a chore and return the updated row."""
    return _chores().complete_chore(chore_id, member_id)


def delete_chore(chore_id: int) -> None:
    _chores().delete_chore(chore_id)


def list_completions(member_id: Any = None, chore_id: Any = None) -> list:
    return _chores().list_completions(member_id, chore_id)


def leaderboard() -> list:
    """Points earned per family member."""
    return _chores().leaderboard()


# --- Family Members ---


def list_members() -> list:
    return _chores().list_members()


def add_member(name: Any, color: Any = None, role: Any = None, avatar_url: Any = None) -> int:
    return _chores().add_member(name, color, role, avatar_url)
