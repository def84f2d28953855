"""
Rule-based read filter engine.

This module decides, per observation, whether a read (or a per-base
measurement derived from it) is excluded from error-metric aggregation:

- Parse rule files into named filters
- Evaluate boolean and integer criteria per stratifier suffix
- Tally excluded reads for reporting

Example:
    >>> from sam_error_filter.filter import ReadFilter
    >>>
    >>> read_filter = ReadFilter.from_file("filters/low_quality.txt")
    >>> read_filter.reset()
    >>> read_filter.process_value("base_quality", 12)
    >>> read_filter.process_value("is_mismatch", True)
    >>> if read_filter.is_satisfied():
    ...     read_filter.add_read_by_id("read_0001")
"""

from sam_error_filter.filter.comparator import Comparator
from sam_error_filter.filter.criterion import Criterion, StratumValue, ValueKind
from sam_error_filter.filter.engine import (
    FilterState,
    MismatchPolicy,
    ReadFilter,
    load_filter,
    load_filters,
)
from sam_error_filter.filter.parser import (
    FilterFileError,
    ParsedRules,
    parse_filter_file,
    parse_filter_lines,
)
from sam_error_filter.filter.stratifiers import KNOWN_SUFFIXES, is_known_suffix

__all__ = [
    "KNOWN_SUFFIXES",
    "Comparator",
    "Criterion",
    "FilterFileError",
    "FilterState",
    "MismatchPolicy",
    "ParsedRules",
    "ReadFilter",
    "StratumValue",
    "ValueKind",
    "is_known_suffix",
    "load_filter",
    "load_filters",
    "parse_filter_file",
    "parse_filter_lines",
]
