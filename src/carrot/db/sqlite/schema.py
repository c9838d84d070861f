"""SQLite database schema definitions."""

from carrot.models.tracker import DEFAULT_COLOR, UNORDERED

# Schema SQL for creating all tables
# This schema is idempotent - can be run multiple times safely
SCHEMA_SQL = f"""
-- trackables: User-defined habits and goals
CREATE TABLE IF NOT EXISTS trackables (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    color TEXT NOT NULL DEFAULT '{DEFAULT_COLOR}',
    sort_order INTEGER NOT NULL DEFAULT {UNORDERED}
);

-- counts: One tally per trackable per calendar day (YYYY-MM-DD)
CREATE TABLE IF NOT EXISTS counts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    trackable_id INTEGER NOT NULL,
    count INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (trackable_id) REFERENCES trackables(id) ON DELETE CASCADE,
    UNIQUE(date, trackable_id)
);

CREATE INDEX IF NOT EXISTS idx_counts_trackable ON counts(trackable_id);
"""

# Columns added to trackables after the first release.
# Databases created before then only have (id, name).
TRACKABLE_COLUMN_MIGRATIONS: list[tuple[str, str]] = [
    (
        "color",
        f"ALTER TABLE trackables ADD COLUMN color TEXT NOT NULL DEFAULT '{DEFAULT_COLOR}'",
    ),
    (
        "sort_order",
        f"ALTER TABLE trackables ADD COLUMN sort_order INTEGER NOT NULL DEFAULT {UNORDERED}",
    ),
]

# Version for future migrations
SCHEMA_VERSION = 2
