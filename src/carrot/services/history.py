"""History and CSV export built from the tracker service's read operations.

Turns sparse count rows into dense per-day sequences (days with nothing
logged read as 0) and serializes them for the export sheet.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING, Optional

from carrot.models.tracker import (
    DATE_FORMAT,
    HISTORY_WINDOW_DAYS,
    ChartPoint,
    HistoryEntry,
    HistoryStats,
)

if TYPE_CHECKING:
    from carrot.services.tracker import TrackerService


def trailing_window(today: Optional[date] = None, days: int = HISTORY_WINDOW_DAYS) -> tuple[date, date]:
    """Return ``(start, end)`` covering *days* days ending at *today*."""
    end = today or date.today()
    return end - timedelta(days=days - 1), end


def _counts_by_date(service: TrackerService, trackable_id: int) -> dict[str, int]:
    return {c.date: c.count for c in service.get_all_counts(trackable_id)}


def build_history(
    service: TrackerService,
    trackable_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    *,
    today: Optional[date] = None,
) -> list[HistoryEntry]:
    """Build one entry per calendar day in ``[start, end]``, newest first.

    Args:
        service: Tracker service to read counts from.
        trackable_id: Trackable whose history to build.
        start: First day (inclusive). Defaults to 29 days before *end*.
        end: Last day (inclusive). Defaults to *today*.
        today: Reference day for the defaults. Defaults to the local date.

    Returns:
        Entries in descending date order; empty when ``start > end``.
    """
    if end is None:
        end = today or date.today()
    if start is None:
        start, _ = trailing_window(end)
    counts = _counts_by_date(service, trackable_id)

    entries: list[HistoryEntry] = []
    day = end
    while day >= start:
        key = day.strftime(DATE_FORMAT)
        entries.append(
            HistoryEntry(
                date=day,
                date_string=key,
                day=day.day,
                month=day.strftime("%b"),
                day_of_week=day.strftime("%A"),
                count=counts.get(key, 0),
            )
        )
        day -= timedelta(days=1)
    return entries


def chart_points(entries: list[HistoryEntry]) -> list[ChartPoint]:
    """Map history entries to chart points sorted oldest first."""
    ordered = sorted(entries, key=lambda e: e.date)
    return [
        ChartPoint(date=e.date, value=float(e.count), label=f"{e.date.month}/{e.date.day}")
        for e in ordered
    ]


def history_stats(entries: list[HistoryEntry]) -> HistoryStats:
    """Total, per-day average and best day over the entries."""
    if not entries:
        return HistoryStats()
    total = sum(e.count for e in entries)
    return HistoryStats(
        total=total,
        average=total / len(entries),
        maximum=max(e.count for e in entries),
    )


def escape_csv_name(name: str) -> str:
    """Quote a column name that contains a comma."""
    return f'"{name}"' if "," in name else name


def trackable_csv(entries: list[HistoryEntry]) -> str:
    """Serialize one trackable's history as ``Date,Count`` rows, in entry order."""
    lines = ["Date,Count"]
    lines.extend(f"{e.date_string},{e.count}" for e in entries)
    return "\n".join(lines)


def all_trackables_csv(service: TrackerService, *, today: Optional[date] = None) -> str:
    """Serialize every trackable's last 30 days side by side, newest first.

    Returns:
        CSV text with a ``Date,<name>,...`` header, or an empty string when
        there are no trackables.
    """
    trackables = service.get_all_trackables()
    if not trackables:
        return ""

    header = ",".join(["Date"] + [escape_csv_name(t.name) for t in trackables])
    columns = [_counts_by_date(service, t.id) for t in trackables]

    lines = [header]
    day = today or date.today()
    for offset in range(HISTORY_WINDOW_DAYS):
        key = (day - timedelta(days=offset)).strftime(DATE_FORMAT)
        row = [key] + [str(counts.get(key, 0)) for counts in columns]
        lines.append(",".join(row))
    return "\n".join(lines)
