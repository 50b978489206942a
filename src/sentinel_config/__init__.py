"""Shared configuration package for Sentinel Auth."""

from .logging_config import configure_logging
from .settings import (
    Settings,
    clear_settings_cache,
    find_env_file,
    get_config_dir,
    get_settings,
)

__all__ = [
    "Settings",
    "clear_settings_cache",
    "configure_logging",
    "find_env_file",
    "get_config_dir",
    "get_settings",
]
