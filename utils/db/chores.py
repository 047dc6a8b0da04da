"""
Chore and Completion Operations.

This module handles chore queries, partial updates and the completion
ledger. None of these functions commit; callers own the transaction.
"""

import sqlite3
from collections.abc import Iterable
from typing import Any

# Columns a partial update may touch. Anything else is rejected before SQL is built.
UPDATABLE_COLUMNS = (
    "status",
    "title",
    "description",
    "assigned_to",
    "priority",
    "due_date",
    "category",
    "points",
)

_CHORE_SELECT = """
    SELECT c.*, fm.name AS assigned_name, fm.color AS assigned_color
    FROM chores c
    LEFT JOIN family_members fm ON c.assigned_to = fm.id
"""


def fetch_chores(
    conn: sqlite3.Connection, status: str = None, assigned_to: int = None
) -> list[dict[str, Any]]:
    """
    Fetches chores enriched with the assignee's name and color.

    Ordering: due_date ascending with undated chores last, then priority
    descending. Priority is compared as plain text (lexicographic), so
    'normal' sorts relative to other values by spelling, not severity.
    """
    where = []
    params = []

    if status:
        where.append("c.status = ?")
        params.append(status)

    if assigned_to is not None:
        where.append("c.assigned_to = ?")
        params.append(assigned_to)

    query = _CHORE_SELECT
    if where:
        query += " WHERE " + " AND ".join(where)
    query += " ORDER BY c.due_date IS NULL, c.due_date ASC, c.priority DESC, c.id ASC"

    rows = conn.execute(query, params).fetchall()
    return [dict(row) for row in rows]


def fetch_chore(conn: sqlite3.Connection, chore_id: int) -> dict[str, Any] | None:
    row = conn.execute(_CHORE_SELECT + " WHERE c.id = ?", (chore_id,)).fetchone()
    return dict(row) if row else None


def insert_chore(conn: sqlite3.Connection, row: dict[str, Any]) -> int:
    cur = conn.execute(
        """
        INSERT INTO chores (
            title,
            description,
            assigned_to,
            status,
            due_date,
            priority,
            category,
            points
        ) VALUES (?, ?, ?, 'pending', ?, ?, ?, ?);
        """,
        (
            row.get("title"),
            row.get("description"),
            row.get("assigned_to"),
            row.get("due_date"),
            row.get("priority") or "normal",
            row.get("category") or "general",
            row.get("points", 1),
        ),
    )
    return cur.lastrowid


def update_chore(conn: sqlite3.Connection, chore_id: int, updates: dict[str, Any]) -> int:
    """
    Applies a partial update and refreshes updated_at.

    Raises ValueError for columns outside UPDATABLE_COLUMNS.
    Returns: number of rows updated (0 when the chore does not exist).
    """
    unknown = [key for key in updates if key not in UPDATABLE_COLUMNS]
    if unknown:
        raise ValueError(f"Invalid chore fields: {', '.join(sorted(unknown))}")

    assignments = [f"{key} = ?" for key in updates]
    assignments.append("updated_at = CURRENT_TIMESTAMP")
    params = list(updates.values()) + [chore_id]

    cur = conn.execute(
        f"UPDATE chores SET {', '.join(assignments)} WHERE id = ?;",
        params,
    )
    return cur.rowcount


def fetch_points_and_status(
    conn: sqlite3.Connection, chore_id: int
) -> tuple[int, str] | None:
    row = conn.execute(
        "SELECT points, status FROM chores WHERE id = ?", (chore_id,)
    ).fetchone()
    if row is None:
        return None
    return row["points"], row["status"]


def mark_completed(conn: sqlite3.Connection, chore_id: int) -> int:
    cur = conn.execute(
        """
        UPDATE chores
        SET status = 'completed',
            completed_at = CURRENT_TIMESTAMP,
            updated_at = CURRENT_TIMESTAMP
        WHERE id = ?;
        """,
        (chore_id,),
    )
    return cur.rowcount


def insert_completion(
    conn: sqlite3.Connection, chore_id: int, member_id: int, points_earned: int
) -> int:
    cur = conn.execute(
        "INSERT INTO chore_completions (chore_id, member_id, points_earned) VALUES (?, ?, ?)",
        (chore_id, member_id, points_earned),
    )
    return cur.lastrowid


def fetch_completions(
    conn: sqlite3.Connection, member_id: int = None, chore_id: int = None
) -> list[dict[str, Any]]:
    """Completion history, newest first."""
    where = []
    params = []

    if member_id is not None:
        where.append("cc.member_id = ?")
        params.append(member_id)

    if chore_id is not None:
        where.append("cc.chore_id = ?")
        params.append(chore_id)

    query = """
        SELECT cc.*, c.title AS chore_title, fm.name AS member_name
        FROM chore_completions cc
        LEFT JOIN chores c ON cc.chore_id = c.id
        LEFT JOIN family_members fm ON cc.member_id = fm.id
    """
    if where:
        query += " WHERE " + " AND ".join(where)
    query += " ORDER BY cc.completed_at DESC, cc.id DESC"

    rows = conn.execute(query, params).fetchall()
    return [dict(row) for row in rows]


def count_completions(conn: sqlite3.Connection, chore_ids: Iterable[int]) -> int:
    ids = list(chore_ids)
    if not ids:
        return 0
    placeholders = ",".join("?" for _ in ids)
    row = conn.execute(
        f"SELECT COUNT(*) FROM chore_completions WHERE chore_id IN ({placeholders})",
        ids,
    ).fetchone()
    return row[0] if row else 0


def fetch_member_points(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    """Per-member point totals, members without completions included."""
    rows = conn.execute(
        """
        SELECT
            fm.id AS member_id,
            fm.name AS name,
            fm.color AS color,
            COALESCE(SUM(cc.points_earned), 0) AS total_points,
            COUNT(cc.id) AS completions
        FROM family_members fm
        LEFT JOIN chore_completions cc ON cc.member_id = fm.id
        GROUP BY fm.id
        ORDER BY total_points DESC, fm.name ASC
        """
    ).fetchall()
    return [dict(row) for row in rows]
