"""Database layer: Protocol interface + SQLite and in-memory implementations.

Usage:
    # Protocol type (for type hints in business logic)
    from carrot.db.protocols import TrackerStore

    # Implementations (for composition roots)
    from carrot.db.sqlite import SQLiteTrackerStore
    from carrot.db.memory_store import InMemoryTrackerStore

    # Factory (convenience)
    from carrot.db.factory import create_sqlite_store
"""

from carrot.db.errors import (
    ErrorKind,
    InvalidDataError,
    NotFoundError,
    StorageError,
    StorageIOError,
)
from carrot.db.factory import create_memory_store, create_sqlite_store
from carrot.db.memory_store import InMemoryTrackerStore
from carrot.db.protocols import TrackerStore
from carrot.db.sqlite import Database, SQLiteTrackerStore
from carrot.db.sqlite.schema import SCHEMA_SQL, SCHEMA_VERSION

__all__ = [
    # Errors
    "ErrorKind",
    "InvalidDataError",
    "NotFoundError",
    "StorageError",
    "StorageIOError",
    # Protocol
    "TrackerStore",
    # Implementations
    "Database",
    "InMemoryTrackerStore",
    "SQLiteTrackerStore",
    "SCHEMA_SQL",
    "SCHEMA_VERSION",
    # Factory
    "create_memory_store",
    "create_sqlite_store",
]
