"""Pydantic models for data representation."""

from carrot.models.config import DATABASE_FILENAME, AppConfig, default_data_dir
from carrot.models.tracker import (
    COLOR_PALETTE,
    DATE_FORMAT,
    DEFAULT_COLOR,
    HISTORY_WINDOW_DAYS,
    UNORDERED,
    ChartPoint,
    Count,
    HistoryEntry,
    HistoryStats,
    Trackable,
)

__all__ = [
    # Entities
    "Trackable",
    "Count",
    # History views
    "HistoryEntry",
    "ChartPoint",
    "HistoryStats",
    # Config
    "AppConfig",
    "default_data_dir",
    "DATABASE_FILENAME",
    # Constants
    "COLOR_PALETTE",
    "DATE_FORMAT",
    "DEFAULT_COLOR",
    "HISTORY_WINDOW_DAYS",
    "UNORDERED",
]
