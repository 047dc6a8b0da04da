"""
Family Member Operations.

This module handles family member queries and inserts.
"""

import sqlite3
from typing import Any


def fetch_members(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    """Returns all family members ordered by name."""
    rows = conn.execute("SELECT * FROM family_members ORDER BY name").fetchall()
    return [dict(row) for row in rows]


def fetch_member(conn: sqlite3.Connection, member_id: int) -> dict[str, Any] | None:
    row = conn.execute(
        "SELECT * FROM family_members WHERE id = ?", (member_id,)
    ).fetchone()
    return dict(row) if row else None


def member_exists(conn: sqlite3.Connection, member_id: int) -> bool:
    row = conn.execute(
        "SELECT 1 FROM family_members WHERE id = ?", (member_id,)
    ).fetchone()
    return row is not None


def insert_member(
    conn: sqlite3.Connection,
    name: str,
    color: str = "#2196F3",
    role: str = "member",
    avatar_url: str = None,
) -> int:
    """
    Inserts a family member.

    Raises sqlite3.IntegrityError when the name is already taken.
    Returns: new member id.
    """
    cur = conn.execute(
        "INSERT INTO family_members (name, color, role, avatar_url) VALUES (?, ?, ?, ?)",
        (name, color, role, avatar_url),
    )
    return cur.lastrowid
