"""
SAM Error Read Filter

A rule-based engine that decides, per sequencing observation, whether the
observation is excluded from error-metric aggregation.

Features:
- Tab-separated rule files with boolean and integer criteria
- Per-stratifier evaluation with an explicit reset/process/query cycle
- Per-read exclusion tallies and exportable reports

Example:
    >>> from sam_error_filter import ReadFilter
    >>>
    >>> read_filter = ReadFilter.from_file("filters/low_quality.txt")
    >>> excluded = read_filter.evaluate("read_0001", {"base_quality": 12})

For more information, run:
    $ sam-error-filter --help
"""

__version__ = "1.0.0"

from sam_error_filter.config.settings import Settings, get_settings
from sam_error_filter.driver import FilterRunner, Observation
from sam_error_filter.filter import (
    Comparator,
    Criterion,
    FilterFileError,
    MismatchPolicy,
    ReadFilter,
    ValueKind,
    load_filter,
    load_filters,
)
from sam_error_filter.models import ExclusionReport, FilterExclusion

__all__ = [
    "Comparator",
    "Criterion",
    "ExclusionReport",
    "FilterExclusion",
    "FilterFileError",
    "FilterRunner",
    "MismatchPolicy",
    "Observation",
    "ReadFilter",
    "Settings",
    "ValueKind",
    "__version__",
    "get_settings",
    "load_filter",
    "load_filters",
]
