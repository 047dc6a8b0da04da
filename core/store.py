"""
Store Core - Persistent Store.

Owns the single process-wide SQLite connection, serializes access to it,
runs multi-statement operations as transactions and translates raw
sqlite3 errors into the taxonomy in core.errors.

The Store is created once by the entry point and injected into the
services and the web app; tests create as many in-memory stores as they
need.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any

from core.errors import (
    ChoreError,
    ConflictError,
    ConstraintViolation,
    InvalidReferenceError,
    NotFoundError,
    StoreClosedError,
    ValidationError,
)
from utils import db

logger = logging.getLogger(__name__)


def _translate_integrity_error(exc: sqlite3.IntegrityError, message: str) -> ChoreError:
    text = str(exc)
    if "UNIQUE" in text:
        return ConstraintViolation(message)
    if "FOREIGN KEY" in text:
        return InvalidReferenceError(message)
    return ValidationError(f"{message}: {text}")


class Store:
    """SQLite-backed storage for members, chores, completions and config."""

    def __init__(self, db_path: str = db.MEMORY_PATH):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()
        self._closed = False

    # --- Lifecycle ---

    def initialize(self) -> int:
        """
        Opens the database, creates missing tables and seeds defaults.

        Safe to call repeatedly: config defaults are insert-if-absent and
        members are only seeded while the member table is empty.

        Returns: number of members seeded by this call.
        """
        with self._lock:
            if self._closed:
                raise StoreClosedError("Store has been closed")
            if self._conn is None:
                self._conn = db.open_connection(self.db_path)
                logger.info(f"Connected to SQLite database: {self.db_path}")

            db.init_schema(self._conn)
            try:
                with db.transaction(self._conn):
                    seeded = db.seed_defaults(self._conn)
            except sqlite3.IntegrityError as e:
                raise _translate_integrity_error(
                    e, "Default family members were seeded concurrently"
                ) from e

        if seeded:
            logger.info(f"Seeded {seeded} default family members")
        return seeded

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("Database connection closed")
            self._closed = True

    @contextmanager
    def _connection(self):
        with self._lock:
            if self._conn is None:
                if self._closed:
                    raise StoreClosedError("Store has been closed")
                raise StoreClosedError("Store has not been initialized")
            yield self._conn

    # --- Configuration ---

    def get_config(self, key: str) -> str | None:
        with self._connection() as conn:
            return db.fetch_config_value(conn, key)

    def set_config(self, key: str, value: Any) -> None:
        with self._connection() as conn:
            db.upsert_config(conn, key, str(value))

    def set_config_many(self, values: dict[str, Any]) -> None:
        """Upserts several keys in one transaction."""
        with self._connection() as conn:
            with db.transaction(conn):
                for key, value in values.items():
                    db.upsert_config(conn, key, str(value))

    def list_config(self) -> dict[str, str]:
        with self._connection() as conn:
            return db.fetch_all_config(conn)

    # --- Family Members ---

    def list_members(self) -> list[dict[str, Any]]:
        with self._connection() as conn:
            return db.fetch_members(conn)

    def get_member(self, member_id: int) -> dict[str, Any] | None:
        with self._connection() as conn:
            return db.fetch_member(conn, member_id)

    def member_exists(self, member_id: int) -> bool:
        with self._connection() as conn:
            return db.member_exists(conn, member_id)

    def add_member(
        self,
        name: str,
        color: str = "#2196F3",
        role: str = "member",
        avatar_url: str = None,
    ) -> int:
        with self._connection() as conn:
            try:
                return db.insert_member(conn, name, color, role, avatar_url)
            except sqlite3.IntegrityError as e:
                raise _translate_integrity_error(
                    e, f"Family member '{name}' already exists"
                ) from e

    # --- Chores ---

    def list_chores(
        self, status: str = None, assigned_to: int = None
    ) -> list[dict[str, Any]]:
        with self._connection() as conn:
            return db.fetch_chores(conn, status, assigned_to)

    def get_chore(self, chore_id: int) -> dict[str, Any] | None:
        with self._connection() as conn:
            return db.fetch_chore(conn, chore_id)

    def add_chore(self, fields: dict[str, Any]) -> int:
        title = fields.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title is required for chores")

        assigned_to = fields.get("assigned_to")
        with self._connection() as conn:
            if assigned_to is not None and not db.member_exists(conn, assigned_to):
                raise InvalidReferenceError(
                    f"Family member with ID {assigned_to} does not exist"
                )
            try:
                return db.insert_chore(conn, fields)
            except sqlite3.IntegrityError as e:
                raise _translate_integrity_error(e, "Chore could not be created") from e

    def update_chore(self, chore_id: int, fields: dict[str, Any]) -> int:
        """Returns rows affected; 0 means the chore does not exist."""
        with self._connection() as conn:
            try:
                return db.update_chore(conn, chore_id, fields)
            except ValueError as e:
                raise ValidationError(str(e)) from e
            except sqlite3.IntegrityError as e:
                raise _translate_integrity_error(
                    e, f"Chore {chore_id} could not be updated"
                ) from e

    def complete_chore(
        self, chore_id: int, member_id: int, allow_recomplete: bool = False
    ) -> bool:
        """
        Marks a chore completed and appends a completion record.

        Reading the points, updating the chore and inserting the record run
        as one transaction: either both writes become visible or neither.
        """
        with self._connection() as conn:
            try:
                with db.transaction(conn):
                    current = db.fetch_points_and_status(conn, chore_id)
                    if current is None:
                        raise NotFoundError(f"Chore {chore_id} not found")
                    points, status = current
                    if status == "completed" and not allow_recomplete:
                        raise ConflictError(f"Chore {chore_id} is already completed")

                    db.mark_completed(conn, chore_id)
                    db.insert_completion(conn, chore_id, member_id, points)
            except sqlite3.IntegrityError as e:
                raise _translate_integrity_error(
                    e, f"Family member with ID {member_id} does not exist"
                ) from e
        return True

    # --- Completion Ledger ---

    def list_completions(
        self, member_id: int = None, chore_id: int = None
    ) -> list[dict[str, Any]]:
        with self._connection() as conn:
            return db.fetch_completions(conn, member_id, chore_id)

    def count_completions(self, chore_id: int) -> int:
        with self._connection() as conn:
            return db.count_completions(conn, [chore_id])

    def member_points(self) -> list[dict[str, Any]]:
        with self._connection() as conn:
            return db.fetch_member_points(conn)
