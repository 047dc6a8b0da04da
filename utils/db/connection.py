"""
Database Connection and Schema Management.

This module handles SQLite connection creation, schema initialization
and first-run seed data.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path

MEMORY_PATH = ":memory:"

DEFAULT_DISPLAY_CONFIG = {
    "current_view": "dashboard",
    "photo_rotation_interval": "30000",
    "calendar_refresh_interval": "300000",
    "display_brightness": "80",
    "sleep_schedule_enabled": "0",
    "sleep_start_time": "22:00",
    "wake_time": "07:00",
}

DEFAULT_FAMILY_MEMBERS = [
    ("Mom", "#E91E63", "admin"),
    ("Dad", "#3F51B5", "admin"),
    ("Child 1", "#4CAF50", "member"),
    ("Child 2", "#FF9800", "member"),
]


def open_connection(db_path: str) -> sqlite3.Connection:
    """Opens a connection in autocommit mode; transactions are explicit."""
    if db_path != MEMORY_PATH:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, check_same_thread=False, isolation_level=None)
    if db_path != MEMORY_PATH:
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def transaction(conn: sqlite3.Connection, immediate: bool = True):
    """Context manager wrapping the block in BEGIN/COMMIT.

    Any exception rolls the transaction back and is re-raised.

    Usage:
        with transaction(conn):
            conn.execute("UPDATE ...")
            conn.execute("INSERT ...")
    """
    conn.execute("BEGIN IMMEDIATE;" if immediate else "BEGIN;")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK;")
        raise
    else:
        conn.execute("COMMIT;")


def init_schema(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS family_members (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            color TEXT DEFAULT '#2196F3',
            avatar_url TEXT,
            role TEXT DEFAULT 'member',
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        );
        """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS chores (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT,
            assigned_to INTEGER,
            status TEXT DEFAULT 'pending',
            priority TEXT DEFAULT 'normal',
            due_date TEXT,
            completed_at TEXT,
            points INTEGER DEFAULT 1,
            category TEXT DEFAULT 'general',
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(assigned_to) REFERENCES family_members(id)
        );
        """)
    conn.execute("CREATE INDEX IF NOT EXISTS idx_chores_status ON chores(status);")
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_chores_assigned_to ON chores(assigned_to);"
    )

    # Completion ledger: append-only, points copied at completion time
    conn.execute("""
        CREATE TABLE IF NOT EXISTS chore_completions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            chore_id INTEGER NOT NULL,
            member_id INTEGER NOT NULL,
            completed_at TEXT DEFAULT CURRENT_TIMESTAMP,
            points_earned INTEGER DEFAULT 0,
            FOREIGN KEY(chore_id) REFERENCES chores(id),
            FOREIGN KEY(member_id) REFERENCES family_members(id)
        );
        """)
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_completions_member ON chore_completions(member_id);"
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_completions_chore ON chore_completions(chore_id);"
    )

    conn.execute("""
        CREATE TABLE IF NOT EXISTS display_config (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        );
        """)

    _ensure_column_on_table(conn, "family_members", "avatar_url", "TEXT")


def seed_defaults(conn: sqlite3.Connection) -> int:
    """
    Inserts default config keys (never overwriting) and, on an empty member
    table only, the default household.

    Must run inside a write transaction. A concurrent double seed is stopped
    by the UNIQUE constraint on family_members.name.

    Returns: number of members seeded.
    """
    conn.executemany(
        "INSERT OR IGNORE INTO display_config (key, value) VALUES (?, ?)",
        list(DEFAULT_DISPLAY_CONFIG.items()),
    )

    row = conn.execute("SELECT COUNT(*) FROM family_members").fetchone()
    if row[0] != 0:
        return 0

    conn.executemany(
        "INSERT INTO family_members (name, color, role) VALUES (?, ?, ?)",
        DEFAULT_FAMILY_MEMBERS,
    )
    return len(DEFAULT_FAMILY_MEMBERS)


def _ensure_column_on_table(
    conn: sqlite3.Connection, table: str, column: str, coltype: str
) -> None:
    cur = conn.execute(f"PRAGMA table_info({table});")
    cols = {row[1] for row in cur.fetchall()}
    if column not in cols:
        conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {coltype};")
