"""
Pydantic models for read filter reporting.

Example:
    >>> from sam_error_filter.models import ExclusionReport, FilterExclusion
    >>>
    >>> report = ExclusionReport(
    ...     observations_seen=1000,
    ...     observations_excluded=25,
    ...     filters=[FilterExclusion.from_filter(read_filter)],
    ... )
"""

from sam_error_filter.models.report import (
    DEFAULT_EXTENSION,
    ExclusionReport,
    FilteredReadCount,
    FilterExclusion,
    export_report,
)

__all__ = [
    "DEFAULT_EXTENSION",
    "ExclusionReport",
    "FilterExclusion",
    "FilteredReadCount",
    "export_report",
]
