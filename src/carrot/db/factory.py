"""Factory functions for creating tracker stores backed by different engines."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from carrot.db.memory_store import InMemoryTrackerStore
    from carrot.db.sqlite.tracker_store import SQLiteTrackerStore


def create_sqlite_store(db_path: Optional[Union[Path, str]] = None) -> SQLiteTrackerStore:
    """Create a tracker store backed by SQLite.

    Args:
        db_path: Optional path to SQLite database file.
                 If None, uses the default path from AppConfig.
                 Use ":memory:" for in-memory testing.

    Returns:
        SQLiteTrackerStore wired to a freshly opened and migrated database.

    Raises:
        StorageIOError: If the database cannot be opened or migrated.
    """
    from carrot.db.sqlite.connection import Database
    from carrot.db.sqlite.tracker_store import SQLiteTrackerStore

    return SQLiteTrackerStore(Database(db_path))


def create_memory_store() -> InMemoryTrackerStore:
    """Create a dict-backed tracker store; construction cannot fail."""
    from carrot.db.memory_store import InMemoryTrackerStore

    return InMemoryTrackerStore()
