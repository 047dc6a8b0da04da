"""
Chores Core - Chore Domain Service.

Enforces the invariants over chores and family members on top of the
Store: field validation, assignment validity, not-found signalling and the
re-completion policy. This is the only module that calls the Store's
chore and member mutations.
"""

import logging
from typing import Any

from core.errors import (
    FeatureNotImplementedError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from core.store import Store
from utils.db import UPDATABLE_COLUMNS

logger = logging.getLogger(__name__)

CHORE_STATUSES = ("pending", "in-progress", "completed")
MEMBER_ROLES = ("admin", "member")
DEFAULT_MEMBER_COLOR = "#2196F3"

# Fields accepted when creating a chore. New chores always start pending.
CREATE_FIELDS = tuple(column for column in UPDATABLE_COLUMNS if column != "status")


def coerce_id(value: Any, field: str) -> int:
    """Parses an integer identifier from JSON or query-string input."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field} must be an integer")


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value.strip()


def _optional_text(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def _normalize_points(value: Any) -> int:
    points = coerce_id(value, "points")
    if points < 0:
        raise ValidationError("points must not be negative")
    return points


def _normalize_chore_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Validates each present chore field and returns the cleaned values."""
    cleaned = {}
    for key, value in fields.items():
        if key == "title":
            cleaned[key] = _require_text(value, "title")
        elif key in ("priority", "category"):
            cleaned[key] = _require_text(value, key)
        elif key in ("description", "due_date"):
            cleaned[key] = _optional_text(value, key)
        elif key == "status":
            if value not in CHORE_STATUSES:
                raise ValidationError(
                    f"status must be one of: {', '.join(CHORE_STATUSES)}"
                )
            cleaned[key] = value
        elif key == "points":
            cleaned[key] = _normalize_points(value)
        elif key == "assigned_to":
            cleaned[key] = None if value is None else coerce_id(value, "assigned_to")
    return cleaned


class ChoreService:
    """Chore and family member operations with domain validation."""

    def __init__(self, store: Store, allow_recomplete: bool = False):
        self.store = store
        self.allow_recomplete = allow_recomplete

    # --- Family Members ---

    def list_members(self) -> list[dict[str, Any]]:
        return self.store.list_members()

    def add_member(
        self, name: Any, color: Any = None, role: Any = None, avatar_url: Any = None
    ) -> int:
        name = _require_text(name, "name")
        color = DEFAULT_MEMBER_COLOR if color is None else _require_text(color, "color")
        role = "member" if role is None else role
        if role not in MEMBER_ROLES:
            raise ValidationError(f"role must be one of: {', '.join(MEMBER_ROLES)}")
        avatar_url = _optional_text(avatar_url, "avatar_url")

        member_id = self.store.add_member(name, color, role, avatar_url)
        logger.info(f"Added family member {member_id} ({name})")
        return member_id

    def _require_member(self, member_id: int) -> None:
        if not self.store.member_exists(member_id):
            raise InvalidReferenceError(
                f"Family member with ID {member_id} does not exist"
            )

    # --- Chores ---

    def list_chores(self, status: Any = None, assigned_to: Any = None) -> list[dict[str, Any]]:
        if status and status not in CHORE_STATUSES:
            raise ValidationError(f"status must be one of: {', '.join(CHORE_STATUSES)}")
        if assigned_to not in (None, ""):
            assigned_to = coerce_id(assigned_to, "assignedTo")
        else:
            assigned_to = None
        return self.store.list_chores(status or None, assigned_to)

    def get_chore(self, chore_id: int) -> dict[str, Any]:
        chore = self.store.get_chore(chore_id)
        if chore is None:
            raise NotFoundError("Chore not found")
        return chore

    def add_chore(self, fields: dict[str, Any]) -> int:
        if not isinstance(fields, dict):
            raise ValidationError("Chore must be a JSON object")

        ignored = sorted(key for key in fields if key not in CREATE_FIELDS)
        if ignored:
            logger.debug(f"Ignoring unknown chore fields on create: {ignored}")

        if fields.get("title") in (None, ""):
            raise ValidationError("Title is required for chores")

        cleaned = _normalize_chore_fields(
            {key: value for key, value in fields.items() if key in CREATE_FIELDS}
        )
        if cleaned.get("assigned_to") is not None:
            self._require_member(cleaned["assigned_to"])

        chore_id = self.store.add_chore(cleaned)
        logger.info(f"Created chore {chore_id} ({cleaned['title']})")
        return chore_id

    def update_chore(self, chore_id: int, fields: dict[str, Any]) -> int:
        """
        Applies a partial update restricted to UPDATABLE_COLUMNS.

        Raises NotFoundError when no chore has the given id, whatever the
        fields, before any field validation.
        """
        if self.store.get_chore(chore_id) is None:
            raise NotFoundError("Chore not found")

        if not isinstance(fields, dict) or not fields:
            raise ValidationError("No fields to update")

        unknown = sorted(key for key in fields if key not in UPDATABLE_COLUMNS)
        if unknown:
            raise ValidationError(f"Invalid chore fields: {', '.join(unknown)}")

        cleaned = _normalize_chore_fields(fields)
        if cleaned.get("assigned_to") is not None:
            self._require_member(cleaned["assigned_to"])

        changes = self.store.update_chore(chore_id, cleaned)
        if changes == 0:
            raise NotFoundError("Chore not found")
        logger.info(f"Updated chore {chore_id}: {sorted(cleaned)}")
        return changes

    def complete_chore(self, chore_id: int, member_id: Any) -> dict[str, Any]:
        """
        Completes a chore on behalf of a member.

        A second completion of an already completed chore raises
        ConflictError unless allow_recomplete is set, in which case another
        ledger entry is appended.

        Returns: the completed chore row.
        """
        if member_id is None or member_id == "":
            raise ValidationError("memberId is required")
        member_id = coerce_id(member_id, "memberId")

        if self.store.get_chore(chore_id) is None:
            raise NotFoundError("Chore not found")
        self._require_member(member_id)

        self.store.complete_chore(
            chore_id, member_id, allow_recomplete=self.allow_recomplete
        )
        logger.info(f"Chore {chore_id} completed by member {member_id}")
        return self.store.get_chore(chore_id)

    def delete_chore(self, chore_id: int) -> None:
        raise FeatureNotImplementedError("Deleting chores is not implemented")

    # --- Completion Ledger ---

    def list_completions(self, member_id: Any = None, chore_id: Any = None) -> list[dict[str, Any]]:
        if member_id not in (None, ""):
            member_id = coerce_id(member_id, "memberId")
        else:
            member_id = None
        if chore_id not in (None, ""):
            chore_id = coerce_id(chore_id, "choreId")
        else:
            chore_id = None
        return self.store.list_completions(member_id, chore_id)

    def leaderboard(self) -> list[dict[str, Any]]:
        return self.store.member_points()
