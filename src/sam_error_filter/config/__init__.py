"""
Configuration management for the SAM error read filter.

Configuration hierarchy:
1. Default values (built-in)
2. config/default.toml (project defaults)
3. config/local.toml (user overrides, gitignored)
4. Environment variables (SAMERR_* prefix)
5. Command-line arguments

Example:
    >>> from sam_error_filter.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(settings.filter.on_type_mismatch)
"""

from sam_error_filter.config.settings import (
    FilterSettings,
    LoggingSettings,
    ReportSettings,
    Settings,
    get_settings,
    load_settings,
    reload_settings,
)

__all__ = [
    "FilterSettings",
    "LoggingSettings",
    "ReportSettings",
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
]
