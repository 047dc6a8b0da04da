"""
Family Pane Database Module.

This package provides modular SQLite access. Functions take an open
connection and never commit on their own; core.store owns the connection
and its transactions.

Usage:
    from utils.db import open_connection, fetch_chores
    # or
    from utils.db.chores import fetch_chores
"""

# Chore and Completion Operations
from utils.db.chores import (
    UPDATABLE_COLUMNS,
    count_completions,
    fetch_chore,
    fetch_chores,
    fetch_completions,
    fetch_member_points,
    fetch_points_and_status,
    insert_chore,
    insert_completion,
    mark_completed,
    update_chore,
)

# Connection and Schema
from utils.db.connection import (
    DEFAULT_DISPLAY_CONFIG,
    DEFAULT_FAMILY_MEMBERS,
    MEMORY_PATH,
    init_schema,
    open_connection,
    seed_defaults,
    transaction,
)

# Display Configuration Operations
from utils.db.display_config import (
    fetch_all_config,
    fetch_config_value,
    upsert_config,
)

# Family Member Operations
from utils.db.members import (
    fetch_member,
    fetch_members,
    insert_member,
    member_exists,
)

__all__ = [
    # Connection
    "DEFAULT_DISPLAY_CONFIG",
    "DEFAULT_FAMILY_MEMBERS",
    "MEMORY_PATH",
    "init_schema",
    "open_connection",
    "seed_defaults",
    "transaction",
    # Members
    "fetch_member",
    "fetch_members",
    "insert_member",
    "member_exists",
    # Chores
    "UPDATABLE_COLUMNS",
    "count_completions",
    "fetch_chore",
    "fetch_chores",
    "fetch_completions",
    "fetch_member_points",
    "fetch_points_and_status",
    "insert_chore",
    "insert_completion",
    "mark_completed",
    "update_chore",
    # Display config
    "fetch_all_config",
    "fetch_config_value",
    "upsert_config",
]
