"""SQLite implementation of the tracker store protocol."""

from carrot.db.sqlite.connection import Database
from carrot.db.sqlite.migrations import migrate, table_columns
from carrot.db.sqlite.tracker_store import SQLiteTrackerStore

__all__ = [
    "Database",
    "SQLiteTrackerStore",
    "migrate",
    "table_columns",
]
