"""Identity service configuration package."""

from .settings import (
    Settings,
    TableNames,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "Settings",
    "TableNames",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
