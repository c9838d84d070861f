"""SQLite database connection management."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Generator, Optional, Union

from carrot.db.errors import InvalidDataError, StorageIOError
from carrot.db.sqlite.migrations import migrate
from carrot.db.sqlite.schema import SCHEMA_SQL

if TYPE_CHECKING:
    from sqlite3 import Connection

logger = logging.getLogger(__name__)


class Database:
    """
    SQLite database connection manager.

    Opens the database once and keeps the connection for the lifetime of
    the object.  Handles schema initialization, migrations and transactions.

    Attributes:
        db_path: Path to the SQLite database file or ":memory:" for in-memory
    """

    def __init__(self, db_path: Optional[Union[Path, str]] = None):
        """
        Initialize the database.

        Args:
            db_path: Path to database file or ":memory:" for in-memory database.
                     If None, uses the default path from AppConfig.

        Raises:
            StorageIOError: If the file cannot be opened, created or migrated.
        """
        if db_path is None:
            from carrot.core.config import get_settings
            db_path = get_settings().database_path

        # Convert to string for sqlite3
        self.db_path = str(db_path) if isinstance(db_path, Path) else db_path
        self._is_memory = self.db_path == ":memory:"
        self._conn: Optional[Connection] = None
        self.migrated_columns: list[str] = []

        try:
            if not self._is_memory:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
        except (sqlite3.Error, OSError) as e:
            raise StorageIOError(f"Cannot open database at {self.db_path}: {e}") from e

        try:
            self._init_schema()
        except StorageIOError:
            self.close()
            raise
        logger.info(f"Opened database at {self.db_path}")

    def _init_schema(self) -> None:
        """Create tables if they don't exist, then upgrade older layouts."""
        with self.connect() as conn:
            conn.executescript(SCHEMA_SQL)
            self.migrated_columns = migrate(conn)

    @contextmanager
    def connect(self) -> Generator[Connection, None, None]:
        """
        Get the database connection as a context manager.

        Handles transaction commit/rollback automatically: everything run
        inside one ``with`` block commits together or not at all.
        Returns dict-like Row objects for query results.

        Example:
            with db.connect() as conn:
                cursor = conn.execute("SELECT * FROM trackables")
                rows = cursor.fetchall()

        Raises:
            StorageIOError: If the connection is closed or SQLite fails.
            InvalidDataError: If a bound integer does not fit in 64 bits.
        """
        if self._conn is None:
            raise StorageIOError(f"Database {self.db_path} is closed")
        conn = self._conn
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageIOError(str(e)) from e
        except OverflowError as e:
            conn.rollback()
            raise InvalidDataError(str(e)) from e
        except Exception:
            conn.rollback()
            raise

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
