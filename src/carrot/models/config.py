"""Configuration models for Carrot."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATABASE_FILENAME = "carrot.db"


def default_data_dir() -> Path:
    """Return the per-platform application-support directory for Carrot.

    Returns:
        ``~/Library/Application Support/Carrot`` on macOS, ``%APPDATA%/Carrot``
        on Windows, and ``$XDG_DATA_HOME/carrot`` (or ``~/.local/share/carrot``)
        elsewhere.
    """
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "Carrot"
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "Carrot"
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else home / ".local" / "share"
    return base / "carrot"


class AppConfig(BaseSettings):
    """Main application configuration.

    Loads configuration from environment variables with CARROT_ prefix.

    Attributes:
        data_dir: Directory for the database file
        db_path: Path to SQLite database (defaults to data_dir/carrot.db)
    """

    data_dir: Path = Field(default_factory=default_data_dir, description="Data directory")
    db_path: Optional[Path] = Field(default=None, description="Database path")

    model_config = SettingsConfigDict(
        env_prefix="CARROT_",
        extra="ignore",
    )

    @property
    def database_path(self) -> Path:
        """Get the database path, defaulting to data_dir/carrot.db."""
        return self.db_path or (self.data_dir / DATABASE_FILENAME)

    def ensure_data_dir(self) -> Path:
        """Ensure data directory exists and return its path."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir
