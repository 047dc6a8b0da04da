"""
Display Configuration Operations.

Key/value settings; every value is stored as text.
"""

import sqlite3


def fetch_config_value(conn: sqlite3.Connection, key: str) -> str | None:
    row = conn.execute(
        "SELECT value FROM display_config WHERE key = ?", (key,)
    ).fetchone()
    return row["value"] if row else None


def fetch_all_config(conn: sqlite3.Connection) -> dict[str, str]:
    rows = conn.execute("SELECT key, value FROM display_config ORDER BY key").fetchall()
    return {row["key"]: row["value"] for row in rows}


def upsert_config(conn: sqlite3.Connection, key: str, value: str) -> None:
    conn.execute(
        """
        INSERT INTO display_config (key, value, updated_at)
        VALUES (?, ?, CURRENT_TIMESTAMP)
        ON CONFLICT(key) DO UPDATE SET
            value = excluded.value,
            updated_at = CURRENT_TIMESTAMP;
        """,
        (key, str(value)),
    )
