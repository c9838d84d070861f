"""Tracker domain models for trackables, daily counts and history views.

These models represent the core habit-tracking concepts:
- Trackable: a named, user-ordered, colored habit or goal
- Count: the tally for one trackable on one calendar day
- HistoryEntry / ChartPoint / HistoryStats: derived, read-only history views
"""

from __future__ import annotations

import datetime as dt
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_COLOR = "#FF9500"

# Cycled by the service when a trackable is created without an explicit color.
COLOR_PALETTE: tuple[str, ...] = (
    "#FF9500",  # orange
    "#FF3B30",  # red
    "#FFCC00",  # yellow
    "#34C759",  # green
    "#00C7BE",  # mint
    "#30B0C7",  # teal
    "#007AFF",  # blue
    "#5856D6",  # indigo
    "#AF52DE",  # purple
    "#FF2D55",  # pink
)

UNORDERED = -1

HISTORY_WINDOW_DAYS = 30

DATE_FORMAT = "%Y-%m-%d"

# SQLite INTEGER range; ids, orders and counts outside it cannot be stored.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_HEX_COLOR = re.compile(r"^#?[0-9A-Fa-f]{6}$")


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------


class Trackable(BaseModel):
    """A habit or goal the user taps to log occurrences.

    ``id == 0`` means the trackable has not been persisted yet.  ``order``
    is the user's sort key; ``-1`` places it after every explicitly
    ordered trackable (ties are broken by ``id``).
    """

    id: int = Field(
        default=0, ge=INT64_MIN, le=INT64_MAX, description="Storage identifier (0 = not persisted)"
    )
    name: str = Field(description="Display name, trimmed by callers")
    color: str = Field(default=DEFAULT_COLOR, description="RGB hex color, e.g. '#FF9500'")
    order: int = Field(
        default=UNORDERED, ge=INT64_MIN, le=INT64_MAX, description="Sort key (-1 = append position)"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("color")
    @classmethod
    def _normalise_color(cls, value: str) -> str:
        value = value.strip()
        if not _HEX_COLOR.match(value):
            raise ValueError(f"color must be a 6-digit hex value, got {value!r}")
        return value if value.startswith("#") else f"#{value}"


class Count(BaseModel):
    """Occurrence tally for one trackable on one calendar day.

    ``date`` is an opaque ``YYYY-MM-DD`` key computed by the caller in
    local time.  At most one row exists per ``(trackable_id, date)``.
    """

    id: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX, description="Storage identifier")
    date: str = Field(description="Calendar day key, YYYY-MM-DD")
    trackable_id: int = Field(ge=INT64_MIN, le=INT64_MAX, description="Owning trackable")
    count: int = Field(
        default=0, ge=INT64_MIN, le=INT64_MAX, description="Occurrences logged on that day"
    )

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Derived history views
# ---------------------------------------------------------------------------


class HistoryEntry(BaseModel):
    """One day of a trackable's history, zero-filled when nothing was logged."""

    date: dt.date
    date_string: str
    day: int
    month: str = Field(description="Abbreviated month name, e.g. 'Jan'")
    day_of_week: str = Field(description="Full weekday name, e.g. 'Monday'")
    count: int = 0

    model_config = ConfigDict(frozen=True)


class ChartPoint(BaseModel):
    """A plotted history value, labelled ``M/D``."""

    date: dt.date
    value: float
    label: str

    model_config = ConfigDict(frozen=True)


class HistoryStats(BaseModel):
    """Summary numbers shown above a history list."""

    total: int = 0
    average: float = 0.0
    maximum: int = 0

    model_config = ConfigDict(frozen=True)
