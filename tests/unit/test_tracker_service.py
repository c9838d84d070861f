"""Unit tests for TrackerService, the UI-facing facade."""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from carrot.db.errors import ErrorKind
from carrot.db.sqlite.connection import Database
from carrot.db.sqlite.tracker_store import SQLiteTrackerStore
from carrot.models.config import AppConfig
from carrot.models.tracker import COLOR_PALETTE, UNORDERED, Trackable
from carrot.services.tracker import TrackerService

DAY = "2024-01-15"


@pytest.fixture
def sqlite_service(db: Database) -> TrackerService:
    """Service over an in-memory SQLite store."""
    return TrackerService(SQLiteTrackerStore(db))


class TestConstruction:
    """Store selection and fallback."""

    def test_opens_sqlite_at_configured_path(self, tmp_path) -> None:
        """Test that the database file is created under the data dir."""
        config = AppConfig(data_dir=tmp_path / "support")
        service = TrackerService(config=config)
        created = service.create_trackable("Water")
        service.close()

        assert (tmp_path / "support" / "carrot.db").exists()
        reopened = TrackerService(config=config)
        assert reopened.get_all_trackables() == [created]
        reopened.close()

    def test_uses_process_settings_by_default(self, tmp_path) -> None:
        """Test the default construction path reads CARROT_ settings."""
        service = TrackerService()
        service.create_trackable("Water")
        service.close()
        assert (tmp_path / "data" / "carrot.db").exists()

    def test_falls_back_to_memory(self, tmp_path, caplog) -> None:
        """Test silent fallback when the database cannot be opened."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        config = AppConfig(db_path=blocker / "carrot.db")

        with caplog.at_level(logging.WARNING, logger="carrot.services.tracker"):
            service = TrackerService(config=config)

        assert "falling back to in-memory" in caplog.text
        created = service.create_trackable("Water")
        assert created is not None
        assert service.get_all_trackables() == [created]
        assert service.increment_count(created.id, DAY).count == 1


class TestTrackableOperations:
    """Trackable operations through the facade."""

    def test_color_cycling(self, service: TrackerService) -> None:
        """Test that twelve trackables cycle through the palette and wrap."""
        created = [service.create_trackable(f"Habit {i}") for i in range(12)]
        expected = [COLOR_PALETTE[i % 10] for i in range(12)]
        assert [t.color for t in created] == expected
        assert created[10].color == COLOR_PALETTE[0]
        assert created[11].color == COLOR_PALETTE[1]
        assert all(t.order == UNORDERED for t in created)

    def test_create_with_explicit_fields(self, service: TrackerService) -> None:
        """Test the full create form keeps the given color and order."""
        created = service.create_trackable("Water", "#007AFF", 3)
        assert service.get_all_trackables() == [
            Trackable(id=created.id, name="Water", color="#007AFF", order=3)
        ]

    def test_create_with_color_only_appends(self, service: TrackerService) -> None:
        """Test that an explicit color without an order appends."""
        assert service.create_trackable("Water", "#007AFF").order == UNORDERED

    def test_create_with_order_only_keeps_order(self, service: TrackerService) -> None:
        """Test that a palette color does not discard an explicit order."""
        service.create_trackable("Water")
        created = service.create_trackable("Tea", order=3)
        assert created.color == COLOR_PALETTE[1]
        assert created.order == 3
        assert service.get_all_trackables()[-1] == created

    def test_create_invalid_color(self, service: TrackerService) -> None:
        """Test that a bad color yields None and INVALID_DATA."""
        assert service.create_trackable("Water", "not-a-color") is None
        assert service.last_error is ErrorKind.INVALID_DATA
        assert service.get_all_trackables() == []
        assert service.last_error is None

    def test_update(self, service: TrackerService) -> None:
        """Test a successful update."""
        created = service.create_trackable("Water")
        assert service.update_trackable(created.model_copy(update={"name": "Tea"})) is True
        assert service.get_all_trackables()[0].name == "Tea"

    def test_update_missing(self, service: TrackerService) -> None:
        """Test that updating an unknown trackable returns False."""
        assert service.update_trackable(Trackable(id=77, name="Ghost")) is False
        assert service.last_error is ErrorKind.NOT_FOUND

    def test_update_orders(self, service: TrackerService) -> None:
        """Test batch order updates."""
        a = service.create_trackable("A")
        b = service.create_trackable("B")
        assert service.update_trackable_orders([(a.id, 1), (b.id, 0)]) is True
        assert [t.name for t in service.get_all_trackables()] == ["B", "A"]

    def test_update_orders_missing(self, service: TrackerService) -> None:
        """Test that a batch with an unknown id returns False and changes nothing."""
        a = service.create_trackable("A")
        b = service.create_trackable("B")
        assert service.update_trackable_orders([(b.id, 0), (999, 1)]) is False
        assert service.last_error is ErrorKind.NOT_FOUND
        assert [t.order for t in service.get_all_trackables()] == [-1, -1]
        assert [t.id for t in service.get_all_trackables()] == [a.id, b.id]

    def test_reorder_trackables(self, service: TrackerService) -> None:
        """Test that list position becomes the stored order."""
        a, b, c = (service.create_trackable(n) for n in "ABC")
        assert service.reorder_trackables([c.id, a.id, b.id]) is True
        assert [(t.name, t.order) for t in service.get_all_trackables()] == [
            ("C", 0),
            ("A", 1),
            ("B", 2),
        ]

    def test_delete(self, service: TrackerService) -> None:
        """Test deleting a trackable and its counts."""
        created = service.create_trackable("Water")
        service.increment_count(created.id, DAY)
        assert service.delete_trackable(created.id) is True
        assert service.get_all_trackables() == []
        assert service.get_all_counts(created.id) == []

    def test_delete_missing(self, service: TrackerService) -> None:
        """Test that deleting an unknown trackable returns False."""
        assert service.delete_trackable(5) is False
        assert service.last_error is ErrorKind.NOT_FOUND


class TestCountOperations:
    """Count operations through the facade."""

    def test_increment_decrement_set(self, service: TrackerService) -> None:
        """Test the count mutations end to end."""
        t = service.create_trackable("Water")
        assert service.increment_count(t.id, DAY).count == 1
        assert service.increment_count(t.id, DAY).count == 2
        assert service.decrement_count(t.id, DAY).count == 1
        assert service.set_count(t.id, DAY, 7).count == 7
        assert service.get_count(t.id, DAY).count == 7
        assert len(service.get_all_counts(t.id)) == 1

    def test_counts_for_date(self, service: TrackerService) -> None:
        """Test reading all counts of a day."""
        a = service.create_trackable("A")
        b = service.create_trackable("B")
        service.increment_count(a.id, DAY)
        service.set_count(b.id, DAY, 3)
        assert [c.count for c in service.get_counts_for_date(DAY)] == [1, 3]

    def test_get_missing_count(self, service: TrackerService) -> None:
        """Test that an absent count is None without an error."""
        t = service.create_trackable("Water")
        assert service.get_count(t.id, DAY) is None
        assert service.last_error is None

    @pytest.mark.parametrize("mutation", ["increment_count", "decrement_count", "set_count"])
    def test_mutation_on_missing_trackable(self, service: TrackerService, mutation: str) -> None:
        """Test that count mutations on an unknown trackable return None."""
        args = (404, DAY, 2) if mutation == "set_count" else (404, DAY)
        assert getattr(service, mutation)(*args) is None
        assert service.last_error is ErrorKind.NOT_FOUND


class TestErrorSwallowing:
    """Storage failures never escape the facade."""

    def test_closed_store(self, caplog) -> None:
        """Test every operation on a closed store returns its empty value."""
        database = Database(":memory:")
        service = TrackerService(SQLiteTrackerStore(database))
        created = service.create_trackable("Water")
        database.close()

        with caplog.at_level(logging.ERROR, logger="carrot.services.tracker"):
            assert service.get_all_trackables() == []
            assert service.last_error is ErrorKind.STORAGE_IO
            assert service.create_trackable("Tea", "#007AFF", 0) is None
            assert service.update_trackable(created) is False
            assert service.update_trackable_orders([(created.id, 0)]) is False
            assert service.delete_trackable(created.id) is False
            assert service.get_count(created.id, DAY) is None
            assert service.get_all_counts(created.id) == []
            assert service.get_counts_for_date(DAY) == []
            assert service.increment_count(created.id, DAY) is None
            assert service.decrement_count(created.id, DAY) is None
            assert service.set_count(created.id, DAY, 1) is None

        assert "Failed to get trackables" in caplog.text

    def test_corrupt_row_reported_as_invalid_data(self, db: Database, sqlite_service) -> None:
        """Test that a malformed stored color surfaces as INVALID_DATA."""
        with db.connect() as conn:
            conn.execute("INSERT INTO trackables (name, color) VALUES ('Broken', 'purple')")
        assert sqlite_service.get_all_trackables() == []
        assert sqlite_service.last_error is ErrorKind.INVALID_DATA

    @pytest.mark.parametrize(
        "operation, args",
        [
            ("get_count", (2**63, DAY)),
            ("get_all_counts", (2**63,)),
            ("increment_count", (2**63, DAY)),
            ("delete_trackable", (2**63,)),
            ("update_trackable_orders", ([(2**63, 0)],)),
        ],
    )
    def test_out_of_range_id_reported_as_invalid_data(
        self, service: TrackerService, operation: str, args: tuple
    ) -> None:
        """Test that ids too large for SQLite never raise through the facade."""
        result = getattr(service, operation)(*args)
        assert result in (None, False, [])
        assert service.last_error is ErrorKind.INVALID_DATA

    def test_out_of_range_count_reported_as_invalid_data(self, service: TrackerService) -> None:
        """Test that a count too large for SQLite yields None and writes nothing."""
        t = service.create_trackable("Water")
        assert service.set_count(t.id, DAY, 2**63) is None
        assert service.last_error is ErrorKind.INVALID_DATA
        assert service.get_all_counts(t.id) == []


class TestDateHelpers:
    """Date key formatting."""

    def test_date_string_from_date(self) -> None:
        """Test formatting a plain date."""
        assert TrackerService.date_string(date(2024, 3, 7)) == "2024-03-07"

    def test_date_string_from_naive_datetime(self) -> None:
        """Test formatting a naive (local) datetime."""
        assert TrackerService.date_string(datetime(2024, 12, 31, 23, 59)) == "2024-12-31"

    def test_date_string_from_aware_datetime(self) -> None:
        """Test that aware datetimes are converted to local time first."""
        moment = datetime(2024, 1, 15, 23, 30, tzinfo=timezone(timedelta(hours=-10)))
        expected = moment.astimezone().strftime("%Y-%m-%d")
        assert TrackerService.date_string(moment) == expected

    def test_today_string(self, service: TrackerService) -> None:
        """Test today's key matches the local date."""
        assert service.today_string() == date.today().isoformat()


def test_corrupt_database_falls_back(tmp_path) -> None:
    """Test that a corrupt database file also triggers the in-memory fallback."""
    path = tmp_path / "carrot.db"
    path.write_bytes(b"garbage" * 500)
    service = TrackerService(config=AppConfig(db_path=path))
    created = service.create_trackable("Water")
    assert service.get_all_trackables() == [created]
