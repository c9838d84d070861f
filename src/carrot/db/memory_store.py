"""Dictionary-backed tracker store.

Used when the SQLite database cannot be opened, and as a dependency-free
store for tests.  Behaves exactly like ``SQLiteTrackerStore``.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from pydantic import ValidationError

from carrot.db.errors import InvalidDataError, NotFoundError, require_int64
from carrot.models.tracker import Count, Trackable

logger = logging.getLogger(__name__)


class InMemoryTrackerStore:
    """In-memory implementation of the ``TrackerStore`` protocol.

    Holds two id-keyed dicts and hands out ids from counters starting at 1.
    Reads scan and sort on every call.
    """

    def __init__(self) -> None:
        self._trackables: dict[int, Trackable] = {}
        self._counts: dict[int, Count] = {}
        self._next_trackable_id = 1
        self._next_count_id = 1

    # -- helpers -------------------------------------------------------------

    def _require_trackable(self, trackable_id: int) -> Trackable:
        require_int64("trackable id", trackable_id)
        trackable = self._trackables.get(trackable_id)
        if trackable is None:
            raise NotFoundError(f"Trackable {trackable_id} not found")
        return trackable

    def _find_count(self, trackable_id: int, date: str) -> Optional[Count]:
        for count in self._counts.values():
            if count.trackable_id == trackable_id and count.date == date:
                return count
        return None

    def _write_count(self, trackable_id: int, date: str, value: int) -> Count:
        """Overwrite the existing row for the day or insert a new one."""
        require_int64("count", value)
        existing = self._find_count(trackable_id, date)
        if existing is not None:
            updated = existing.model_copy(update={"count": value})
        else:
            updated = Count(
                id=self._next_count_id,
                date=date,
                trackable_id=trackable_id,
                count=value,
            )
            self._next_count_id += 1
        self._counts[updated.id] = updated
        logger.debug(f"Count {trackable_id}@{date} -> {value}")
        return updated

    # -- trackables ----------------------------------------------------------

    def get_all_trackables(self) -> list[Trackable]:
        """Return all trackables sorted by (order, id)."""
        return sorted(self._trackables.values(), key=lambda t: (t.order, t.id))

    def create_trackable(self, name: str, color: str, order: int) -> Trackable:
        """Store a new trackable under the next free id."""
        try:
            trackable = Trackable(id=self._next_trackable_id, name=name, color=color, order=order)
        except ValidationError as e:
            raise InvalidDataError(f"Invalid trackable {name!r}: {e}") from e
        self._next_trackable_id += 1
        self._trackables[trackable.id] = trackable
        return trackable

    def update_trackable(self, trackable: Trackable) -> None:
        """Replace the stored trackable with the same id."""
        self._require_trackable(trackable.id)
        self._trackables[trackable.id] = trackable

    def update_trackable_orders(self, updates: Sequence[tuple[int, int]]) -> None:
        """Apply ``(id, order)`` pairs only once every id is known to exist."""
        for trackable_id, order in updates:
            require_int64("trackable id", trackable_id)
            require_int64("order", order)
        for trackable_id, _ in updates:
            self._require_trackable(trackable_id)
        for trackable_id, order in updates:
            current = self._trackables[trackable_id]
            self._trackables[trackable_id] = current.model_copy(update={"order": order})

    def delete_trackable(self, trackable_id: int) -> None:
        """Remove a trackable and all of its counts."""
        self._require_trackable(trackable_id)
        del self._trackables[trackable_id]
        orphaned = [c.id for c in self._counts.values() if c.trackable_id == trackable_id]
        for count_id in orphaned:
            del self._counts[count_id]

    # -- counts --------------------------------------------------------------

    def get_count(self, trackable_id: int, date: str) -> Optional[Count]:
        """Return the count for the day, if one was ever logged."""
        require_int64("trackable id", trackable_id)
        return self._find_count(trackable_id, date)

    def get_all_counts(self, trackable_id: int) -> list[Count]:
        """Return the trackable's counts, most recent date first."""
        require_int64("trackable id", trackable_id)
        counts = [c for c in self._counts.values() if c.trackable_id == trackable_id]
        return sorted(counts, key=lambda c: c.date, reverse=True)

    def get_counts_for_date(self, date: str) -> list[Count]:
        """Return the day's counts ordered by trackable id."""
        counts = [c for c in self._counts.values() if c.date == date]
        return sorted(counts, key=lambda c: c.trackable_id)

    def increment_count(self, trackable_id: int, date: str) -> Count:
        self._require_trackable(trackable_id)
        existing = self._find_count(trackable_id, date)
        return self._write_count(trackable_id, date, existing.count + 1 if existing else 1)

    def decrement_count(self, trackable_id: int, date: str) -> Count:
        self._require_trackable(trackable_id)
        existing = self._find_count(trackable_id, date)
        return self._write_count(trackable_id, date, max(0, existing.count - 1) if existing else 0)

    def set_count(self, trackable_id: int, date: str, count: int) -> Count:
        require_int64("count", count)
        self._require_trackable(trackable_id)
        return self._write_count(trackable_id, date, count)

    def close(self) -> None:
        """Nothing to release."""
