"""SQLite-backed store for trackables and their daily counts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from pydantic import ValidationError

from carrot.db.errors import InvalidDataError, NotFoundError, require_int64
from carrot.models.tracker import Count, Trackable

if TYPE_CHECKING:
    from sqlite3 import Connection, Row

    from carrot.db.sqlite.connection import Database

logger = logging.getLogger(__name__)

_COUNT_COLUMNS = "id, date, trackable_id, count"

# Upserts keyed on UNIQUE(date, trackable_id); the VALUES count is used
# only when the row does not exist yet.
_INCREMENT_SQL = """
    INSERT INTO counts (date, trackable_id, count) VALUES (?, ?, 1)
    ON CONFLICT(date, trackable_id) DO UPDATE SET count = count + 1
"""
_DECREMENT_SQL = """
    INSERT INTO counts (date, trackable_id, count) VALUES (?, ?, 0)
    ON CONFLICT(date, trackable_id) DO UPDATE SET count = MAX(count - 1, 0)
"""
_SET_SQL = """
    INSERT INTO counts (date, trackable_id, count) VALUES (?, ?, ?)
    ON CONFLICT(date, trackable_id) DO UPDATE SET count = excluded.count
"""


class SQLiteTrackerStore:
    """SQLite implementation of the ``TrackerStore`` protocol.

    All statements are parameterized.  Each public method runs in its own
    transaction via ``Database.connect``.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _row_to_trackable(row: Row) -> Trackable:
        """Convert a database row to a ``Trackable``."""
        try:
            return Trackable(
                id=row["id"],
                name=row["name"],
                color=row["color"],
                order=row["sort_order"],
            )
        except ValidationError as e:
            raise InvalidDataError(f"Malformed trackable row {row['id']}: {e}") from e

    @staticmethod
    def _row_to_count(row: Row) -> Count:
        """Convert a database row to a ``Count``."""
        try:
            return Count(
                id=row["id"],
                date=row["date"],
                trackable_id=row["trackable_id"],
                count=row["count"],
            )
        except ValidationError as e:
            raise InvalidDataError(f"Malformed count row {row['id']}: {e}") from e

    @staticmethod
    def _require_trackable(conn: Connection, trackable_id: int) -> None:
        require_int64("trackable id", trackable_id)
        cursor = conn.execute("SELECT 1 FROM trackables WHERE id = ?", (trackable_id,))
        if cursor.fetchone() is None:
            raise NotFoundError(f"Trackable {trackable_id} not found")

    def _upsert_count(self, sql: str, params: tuple, trackable_id: int, date: str) -> Count:
        with self.db.connect() as conn:
            self._require_trackable(conn, trackable_id)
            conn.execute(sql, params)
            cursor = conn.execute(
                f"SELECT {_COUNT_COLUMNS} FROM counts WHERE trackable_id = ? AND date = ?",
                (trackable_id, date),
            )
            # Rolls back an increment that overflowed into a REAL value.
            count = self._row_to_count(cursor.fetchone())
        logger.debug(f"Count {trackable_id}@{date} -> {count.count}")
        return count

    # -- trackables ----------------------------------------------------------

    def get_all_trackables(self) -> list[Trackable]:
        """Return all trackables sorted by (sort_order, id)."""
        with self.db.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, color, sort_order FROM trackables ORDER BY sort_order, id"
            )
            rows = cursor.fetchall()
        return [self._row_to_trackable(r) for r in rows]

    def create_trackable(self, name: str, color: str, order: int) -> Trackable:
        """Insert a trackable and return it with its new id."""
        try:
            draft = Trackable(name=name, color=color, order=order)
        except ValidationError as e:
            raise InvalidDataError(f"Invalid trackable {name!r}: {e}") from e
        with self.db.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO trackables (name, color, sort_order) VALUES (?, ?, ?)",
                (draft.name, draft.color, draft.order),
            )
            trackable_id = cursor.lastrowid
        return draft.model_copy(update={"id": trackable_id})

    def update_trackable(self, trackable: Trackable) -> None:
        """Overwrite name, color and order of an existing trackable."""
        with self.db.connect() as conn:
            cursor = conn.execute(
                "UPDATE trackables SET name = ?, color = ?, sort_order = ? WHERE id = ?",
                (trackable.name, trackable.color, trackable.order, trackable.id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Trackable {trackable.id} not found")

    def update_trackable_orders(self, updates: Sequence[tuple[int, int]]) -> None:
        """Apply all ``(id, order)`` pairs in one transaction.

        A missing id rolls back the pairs already applied.
        """
        for trackable_id, order in updates:
            require_int64("trackable id", trackable_id)
            require_int64("order", order)
        with self.db.connect() as conn:
            for trackable_id, order in updates:
                cursor = conn.execute(
                    "UPDATE trackables SET sort_order = ? WHERE id = ?",
                    (order, trackable_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(f"Trackable {trackable_id} not found")

    def delete_trackable(self, trackable_id: int) -> None:
        """Delete a trackable and its counts.

        Counts are removed explicitly as well as through the foreign key
        cascade, which only fires when ``PRAGMA foreign_keys`` is on.
        """
        require_int64("trackable id", trackable_id)
        with self.db.connect() as conn:
            conn.execute("DELETE FROM counts WHERE trackable_id = ?", (trackable_id,))
            cursor = conn.execute("DELETE FROM trackables WHERE id = ?", (trackable_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(f"Trackable {trackable_id} not found")

    # -- counts --------------------------------------------------------------

    def get_count(self, trackable_id: int, date: str) -> Optional[Count]:
        """Retrieve the count for a trackable on a day."""
        require_int64("trackable id", trackable_id)
        with self.db.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COUNT_COLUMNS} FROM counts WHERE trackable_id = ? AND date = ?",
                (trackable_id, date),
            )
            row = cursor.fetchone()
        return self._row_to_count(row) if row else None

    def get_all_counts(self, trackable_id: int) -> list[Count]:
        """Return the trackable's counts, most recent date first."""
        require_int64("trackable id", trackable_id)
        with self.db.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COUNT_COLUMNS} FROM counts WHERE trackable_id = ? ORDER BY date DESC",
                (trackable_id,),
            )
            rows = cursor.fetchall()
        return [self._row_to_count(r) for r in rows]

    def get_counts_for_date(self, date: str) -> list[Count]:
        """Return the day's counts ordered by trackable id."""
        with self.db.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COUNT_COLUMNS} FROM counts WHERE date = ? ORDER BY trackable_id",
                (date,),
            )
            rows = cursor.fetchall()
        return [self._row_to_count(r) for r in rows]

    def increment_count(self, trackable_id: int, date: str) -> Count:
        return self._upsert_count(_INCREMENT_SQL, (date, trackable_id), trackable_id, date)

    def decrement_count(self, trackable_id: int, date: str) -> Count:
        return self._upsert_count(_DECREMENT_SQL, (date, trackable_id), trackable_id, date)

    def set_count(self, trackable_id: int, date: str, count: int) -> Count:
        require_int64("count", count)
        return self._upsert_count(_SET_SQL, (date, trackable_id, count), trackable_id, date)

    def close(self) -> None:
        """Close the underlying database connection."""
        self.db.close()
