"""Test configuration and fixtures for pytest."""

from datetime import date

import pytest

from carrot.core.config import reset_settings
from carrot.db.memory_store import InMemoryTrackerStore
from carrot.db.sqlite.connection import Database
from carrot.db.sqlite.tracker_store import SQLiteTrackerStore
from carrot.services.tracker import TrackerService


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Point the settings at a temp dir so no test touches the real data dir."""
    monkeypatch.setenv("CARROT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("CARROT_DB_PATH", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    yield database
    database.close()


@pytest.fixture(params=["sqlite", "memory"])
def store(request):
    """Each tracker store implementation, so contract tests run against both."""
    if request.param == "sqlite":
        database = Database(":memory:")
        yield SQLiteTrackerStore(database)
        database.close()
    else:
        yield InMemoryTrackerStore()


@pytest.fixture
def service(store) -> TrackerService:
    """Tracker service over each store implementation."""
    return TrackerService(store)


@pytest.fixture
def today() -> date:
    """Fixed reference day for history tests."""
    return date(2024, 3, 15)
