"""Core utilities and configuration."""

from carrot.core.config import get_settings, load_app_config, reset_settings

__all__ = [
    "get_settings",
    "load_app_config",
    "reset_settings",
]
