"""
Test fixtures for the SAM error read filter.

This module provides:
- Sample rule files: well-formed, empty, malformed and mixed-type
"""

from tests.fixtures.rules import (
    EMPTY,
    MIXED_GROUP,
    NAME_ONLY,
    QUALITY_AND_MISMATCH,
    THRESHOLD_AND_FLAG,
    WITH_MALFORMED_LINES,
)

__all__ = [
    "EMPTY",
    "MIXED_GROUP",
    "NAME_ONLY",
    "QUALITY_AND_MISMATCH",
    "THRESHOLD_AND_FLAG",
    "WITH_MALFORMED_LINES",
]
