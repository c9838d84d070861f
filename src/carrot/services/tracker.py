"""Tracker service: the single entry point the UI layer calls.

Owns the active store for the lifetime of the process, picks SQLite with
an in-memory fallback, and turns every ``StorageError`` into an empty or
negative result so no storage exception ever reaches a view.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING, Callable, Optional, Sequence, TypeVar, Union

from carrot.db.errors import ErrorKind, StorageError
from carrot.db.factory import create_memory_store, create_sqlite_store
from carrot.models.tracker import COLOR_PALETTE, DATE_FORMAT, UNORDERED, Count, Trackable

if TYPE_CHECKING:
    from carrot.db.protocols import TrackerStore
    from carrot.models.config import AppConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TrackerService:
    """Facade over a ``TrackerStore``.

    Construct one per process and hand it to every UI collaborator.

    Attributes:
        last_error: Kind of the most recent storage failure, or ``None`` if
            the last call succeeded.
    """

    def __init__(
        self,
        store: Optional[TrackerStore] = None,
        *,
        config: Optional[AppConfig] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            store: Store to use as-is.  If None, opens the SQLite database
                   at ``config.database_path`` and falls back to an
                   in-memory store when that fails.
            config: Settings used to locate the database.
                    If None, uses the process settings.
        """
        self.last_error: Optional[ErrorKind] = None
        self._store: TrackerStore = store if store is not None else self._open_store(config)

    @staticmethod
    def _open_store(config: Optional[AppConfig]) -> TrackerStore:
        if config is None:
            from carrot.core.config import get_settings
            config = get_settings()
        try:
            store = create_sqlite_store(config.database_path)
        except Exception as e:
            logger.warning(f"SQLite store unavailable ({e}); falling back to in-memory store")
            return create_memory_store()
        logger.info(f"Using SQLite store at {config.database_path}")
        return store

    def _guard(self, operation: str, call: Callable[[], T], fallback: T) -> T:
        """Run a store call, mapping ``StorageError`` to *fallback*."""
        try:
            result = call()
        except StorageError as e:
            self.last_error = e.kind
            logger.error(f"Failed to {operation}: {e}")
            return fallback
        self.last_error = None
        return result

    def _attempt(self, operation: str, call: Callable[[], None]) -> bool:
        """Run a store mutation that returns nothing; report success."""
        def run() -> bool:
            call()
            return True

        return self._guard(operation, run, False)

    # -- trackables ----------------------------------------------------------

    def get_all_trackables(self) -> list[Trackable]:
        """Get all trackables in display order."""
        return self._guard("get trackables", self._store.get_all_trackables, [])

    def create_trackable(
        self,
        name: str,
        color: Optional[str] = None,
        order: Optional[int] = None,
    ) -> Optional[Trackable]:
        """Create a trackable.

        Without a color, the next palette color is picked from the number
        of existing trackables, wrapping after the last palette entry.
        Without an order, the trackable is appended (order ``-1``).

        Returns:
            The stored trackable, or ``None`` if it could not be created.
        """
        if color is None:
            existing = len(self.get_all_trackables())
            color = COLOR_PALETTE[existing % len(COLOR_PALETTE)]
        if order is None:
            order = UNORDERED
        return self._guard(
            "create trackable",
            lambda: self._store.create_trackable(name, color, order),
            None,
        )

    def update_trackable(self, trackable: Trackable) -> bool:
        """Overwrite a trackable's name, color and order."""
        return self._attempt("update trackable", lambda: self._store.update_trackable(trackable))

    def update_trackable_orders(self, updates: Sequence[tuple[int, int]]) -> bool:
        """Apply a batch of ``(id, order)`` pairs; nothing changes on failure."""
        return self._attempt(
            "update trackable orders",
            lambda: self._store.update_trackable_orders(list(updates)),
        )

    def reorder_trackables(self, ordered_ids: Sequence[int]) -> bool:
        """Persist a new display order, giving each id its list position."""
        return self.update_trackable_orders(
            [(trackable_id, index) for index, trackable_id in enumerate(ordered_ids)]
        )

    def delete_trackable(self, trackable_id: int) -> bool:
        """Delete a trackable and all of its counts."""
        return self._attempt("delete trackable", lambda: self._store.delete_trackable(trackable_id))

    # -- counts --------------------------------------------------------------

    def get_count(self, trackable_id: int, date: str) -> Optional[Count]:
        """Get the count for a trackable on a specific date."""
        return self._guard("get count", lambda: self._store.get_count(trackable_id, date), None)

    def get_all_counts(self, trackable_id: int) -> list[Count]:
        """Get all counts for a trackable, most recent first."""
        return self._guard("get counts", lambda: self._store.get_all_counts(trackable_id), [])

    def get_counts_for_date(self, date: str) -> list[Count]:
        """Get every trackable's count on a specific date."""
        return self._guard(
            "get counts for date", lambda: self._store.get_counts_for_date(date), []
        )

    def increment_count(self, trackable_id: int, date: str) -> Optional[Count]:
        return self._guard(
            "increment count", lambda: self._store.increment_count(trackable_id, date), None
        )

    def decrement_count(self, trackable_id: int, date: str) -> Optional[Count]:
        return self._guard(
            "decrement count", lambda: self._store.decrement_count(trackable_id, date), None
        )

    def set_count(self, trackable_id: int, date: str, count: int) -> Optional[Count]:
        """Set the count for a trackable on a date (not clamped)."""
        return self._guard(
            "set count", lambda: self._store.set_count(trackable_id, date, count), None
        )

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def date_string(moment: Union[datetime, date]) -> str:
        """Format a point in time as a ``YYYY-MM-DD`` key in local time.

        Aware datetimes are converted to the local timezone first; naive
        datetimes and plain dates are taken as already local.
        """
        if isinstance(moment, datetime) and moment.tzinfo is not None:
            moment = moment.astimezone()
        return moment.strftime(DATE_FORMAT)

    def today_string(self) -> str:
        """Get today's date as a string in YYYY-MM-DD format."""
        return self.date_string(datetime.now())

    def close(self) -> None:
        """Release the underlying store."""
        self._guard("close store", self._store.close, None)
