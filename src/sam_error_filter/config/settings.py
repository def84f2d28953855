"""
Configuration settings for the SAM error read filter.

This module handles loading and validating configuration from TOML files
and environment variables.

Configuration hierarchy (later overrides earlier):
1. Default values (built-in)
2. config/default.toml
3. config/local.toml (gitignored)
4. File named by SAMERR_CONFIG_PATH
5. Environment variables (SAMERR_* prefix)
6. Command-line arguments

Example:
    >>> from sam_error_filter.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(f"Mismatch policy: {settings.filter.on_type_mismatch}")
    >>> print(f"Reports go to: {settings.report.output_dir}")
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "SAMERR_"


class FilterSettings(BaseModel):
    """Read filter evaluation settings."""

    model_config = ConfigDict(extra="ignore")

    on_type_mismatch: Literal["abort", "reset_group"] = Field(
        default="abort",
        description="Handling of a stratifier value of the wrong type",
    )
    warn_unknown_suffixes: bool = Field(
        default=False,
        description="Warn about criteria on suffixes the collector never produces",
    )


class ReportSettings(BaseModel):
    """Exclusion report settings."""

    model_config = ConfigDict(extra="ignore")

    output_dir: str = Field(
        default="reports",
        description="Directory for per-filter exclusion reports",
    )
    prefix: str = Field(
        default="sam_error",
        description="Report file name prefix",
    )
    extension: str = Field(
        default="error_filtered_reads",
        description="Report file name extension",
    )


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="console", description="Output format")
    include_timestamp: bool = Field(default=True)


class Settings(BaseModel):
    """Main settings container."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="sam-error-filter")

    filter: FilterSettings = Field(default_factory=FilterSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def report_dir(self) -> Path:
        """Get report output directory."""
        return Path(self.report.output_dir)


def _find_config_files() -> list[Path]:
    """Find configuration files in standard locations.

    Returns:
        List of config file paths (in order of priority)
    """
    files = []

    cwd = Path.cwd()
    for name in ["config/default.toml", "config/local.toml"]:
        path = cwd / name
        if path.exists():
            files.append(path)

    env_config = os.environ.get(f"{ENV_PREFIX}CONFIG_PATH")
    if env_config:
        path = Path(env_config)
        if path.exists():
            files.append(path)

    return files


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML content
    """
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _coerce_env_value(value: str, original: Any) -> Any:
    if isinstance(original, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(original, int):
        return int(value)
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    The first underscore-separated word after the prefix names a section,
    the rest names the field within it.
    Example: SAMERR_FILTER_ON_TYPE_MISMATCH -> filter.on_type_mismatch

    Args:
        config: Configuration dictionary

    Returns:
        Modified configuration
    """
    defaults = Settings().model_dump()

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key == f"{ENV_PREFIX}CONFIG_PATH":
            continue

        config_key = key[len(ENV_PREFIX) :].lower()
        section, _, field_name = config_key.partition("_")

        section_defaults = defaults.get(section)
        if isinstance(section_defaults, dict) and field_name in section_defaults:
            target = config.setdefault(section, {})
            target[field_name] = _coerce_env_value(value, section_defaults[field_name])
        elif config_key in defaults and not isinstance(defaults[config_key], dict):
            config[config_key] = value

    return config


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from configuration files.

    Args:
        config_path: Optional explicit config file path

    Returns:
        Settings instance
    """
    config: dict[str, Any] = {}

    if config_path:
        files = [Path(config_path)]
    else:
        files = _find_config_files()

    for path in files:
        file_config = _load_toml(path)
        config = _merge_dicts(config, file_config)

    config = _apply_env_overrides(config)

    return Settings(**config)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance (cached after first call)
    """
    return load_settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache).

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
