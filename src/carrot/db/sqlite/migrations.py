"""In-place upgrades for databases created by older releases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from carrot.db.sqlite.schema import SCHEMA_VERSION, TRACKABLE_COLUMN_MIGRATIONS

if TYPE_CHECKING:
    from sqlite3 import Connection

logger = logging.getLogger(__name__)


def table_columns(conn: Connection, table: str) -> set[str]:
    """Return the live column names of *table* (empty if it does not exist)."""
    cursor = conn.execute(f"PRAGMA table_info({table})")  # noqa: S608
    return {row[1] for row in cursor.fetchall()}


def migrate(conn: Connection) -> list[str]:
    """Add any trackable columns missing from an older database.

    Safe to run on every startup: columns that already exist are skipped
    and existing rows keep their data, picking up the column defaults.

    Args:
        conn: Open connection whose tables have already been created.

    Returns:
        Names of the columns that were added, in order.
    """
    existing = table_columns(conn, "trackables")
    added: list[str] = []
    for column, statement in TRACKABLE_COLUMN_MIGRATIONS:
        if column in existing:
            continue
        conn.execute(statement)
        added.append(column)
        logger.info(f"Migrated trackables: added column '{column}'")
    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    return added
