"""Filesystem locations used by StrategySuite."""

from pathlib import Path

import platformdirs

APP_NAME = "strategysuite"

# Name of the project config file looked up in the working directory
CONFIG_FILE_NAME = "strategysuite.toml"

# Legacy browser-cache key, reused as the local cache file name
LEGACY_CACHE_FILE_NAME = "strategysuite_projects_v1.json"


def get_data_dir() -> Path:
    """Get the per-user data directory."""
    return platformdirs.user_data_path(APP_NAME)


def get_default_database_path() -> Path:
    """Get the default SQLite document store location."""
    return get_data_dir() / "projects.db"


def get_default_legacy_cache_path() -> Path:
    """Get the default location of the legacy project cache."""
    return get_data_dir() / LEGACY_CACHE_FILE_NAME
