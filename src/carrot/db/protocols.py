"""Repository protocol definitions for Carrot.

Defines the structural typing protocol (PEP 544) for trackable and count
persistence.  The service layer depends on this Protocol, never on a
concrete implementation, so the SQLite and in-memory stores can be
swapped without touching any consumers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from carrot.models.tracker import Count, Trackable


@runtime_checkable
class TrackerStore(Protocol):
    """Interface for trackable and daily count persistence.

    Every method may raise ``StorageIOError`` when the underlying storage
    fails.  Mutations that target a missing trackable raise
    ``NotFoundError``.

    Implementations: ``SQLiteTrackerStore``, ``InMemoryTrackerStore``.
    """

    # -- trackables ----------------------------------------------------------

    def get_all_trackables(self) -> list[Trackable]:
        """Return every trackable.

        Results are ordered by ``order`` ascending, ties broken by ``id``.

        Returns:
            List of trackables.
        """
        ...

    def create_trackable(self, name: str, color: str, order: int) -> Trackable:
        """Persist a new trackable.

        Args:
            name: Display name.
            color: ``#RRGGBB`` color.
            order: Sort key (``-1`` = append position).

        Returns:
            The stored trackable with its fresh ``id``.
        """
        ...

    def update_trackable(self, trackable: Trackable) -> None:
        """Overwrite name, color and order of an existing trackable.

        Args:
            trackable: Trackable with updated values (matched by ``id``).

        Raises:
            NotFoundError: No trackable has that id.
        """
        ...

    def update_trackable_orders(self, updates: Sequence[tuple[int, int]]) -> None:
        """Apply a batch of ``(id, order)`` pairs, all or nothing.

        Args:
            updates: Pairs of trackable id and new sort key.

        Raises:
            NotFoundError: Any id is missing; no order is changed.
        """
        ...

    def delete_trackable(self, trackable_id: int) -> None:
        """Delete a trackable and every count recorded for it.

        Args:
            trackable_id: Trackable to delete.

        Raises:
            NotFoundError: No trackable has that id.
        """
        ...

    # -- counts --------------------------------------------------------------

    def get_count(self, trackable_id: int, date: str) -> Optional[Count]:
        """Return the count for a trackable on a day, or ``None``.

        Never creates a row.
        """
        ...

    def get_all_counts(self, trackable_id: int) -> list[Count]:
        """Return every count of a trackable, most recent date first."""
        ...

    def get_counts_for_date(self, date: str) -> list[Count]:
        """Return every count recorded on *date*, ordered by trackable id."""
        ...

    def increment_count(self, trackable_id: int, date: str) -> Count:
        """Add one to the day's count, creating it at 1 when absent."""
        ...

    def decrement_count(self, trackable_id: int, date: str) -> Count:
        """Subtract one from the day's count, clamped at 0.

        A missing row is created with ``count = 0``.
        """
        ...

    def set_count(self, trackable_id: int, date: str, count: int) -> Count:
        """Overwrite the day's count, creating the row when absent.

        The value is stored as given; negative values are not clamped.
        """
        ...

    def close(self) -> None:
        """Release any resources held by the store."""
        ...
