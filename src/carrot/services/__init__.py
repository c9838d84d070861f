"""Services: the tracker facade and history/CSV helpers built on it."""

from carrot.services.history import (
    all_trackables_csv,
    build_history,
    chart_points,
    escape_csv_name,
    history_stats,
    trackable_csv,
    trailing_window,
)
from carrot.services.tracker import TrackerService

__all__ = [
    "TrackerService",
    "all_trackables_csv",
    "build_history",
    "chart_points",
    "escape_csv_name",
    "history_stats",
    "trackable_csv",
    "trailing_window",
]
