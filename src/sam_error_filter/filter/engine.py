"""
Read Filter Engine.

Decides, one observation at a time, whether an observation should be
excluded from error-metric aggregation. A filter is driven through a small
cycle for every observation:

    reset() -> process_value(suffix, value)* -> is_satisfied() -> add_read_by_id()

The tally of excluded reads accumulates for the whole run and is not
touched by reset().
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

import structlog

from sam_error_filter.filter.criterion import Criterion, ValueKind
from sam_error_filter.filter.parser import parse_filter_file, parse_filter_lines

logger = structlog.get_logger(__name__)


class FilterState(str, Enum):
    """Position of a filter in its per-observation cycle."""

    RESET = "reset"
    EVALUATING = "evaluating"
    QUERIED = "queried"


class MismatchPolicy(str, Enum):
    """What happens to a suffix group when a value of the wrong type arrives.

    ABORT stops evaluating the group and leaves every criterion as it was.
    RESET_GROUP stops evaluating and marks the whole group unsatisfied.
    """

    ABORT = "abort"
    RESET_GROUP = "reset_group"


class ReadFilter:
    """A named set of criteria grouped by stratifier suffix.

    The filter is satisfied when every criterion in every group is
    satisfied. A filter with no criteria is always satisfied.

    Usage:
        read_filter = ReadFilter.from_file("low_quality.txt")

        for read_id, values in observations:
            read_filter.reset()
            for suffix, value in values.items():
                read_filter.process_value(suffix, value)
            if read_filter.is_satisfied():
                read_filter.add_read_by_id(read_id)

        report(read_filter.get_name(), read_filter.get_filtered_reads())

    Instances are not thread-safe. Give each worker its own clone() and
    combine the tallies with merge_tally() afterwards.
    """

    def __init__(
        self,
        name: str,
        criteria: Mapping[str, list[Criterion]] | None = None,
        *,
        mismatch_policy: MismatchPolicy | str = MismatchPolicy.ABORT,
        log: Any = None,
    ):
        """Initialize filter.

        Args:
            name: Filter name, used to name its report
            criteria: Criteria keyed by stratifier suffix, in declaration order
            mismatch_policy: Handling of wrongly typed values
            log: Logger collaborator (defaults to this module's logger)
        """
        self.name = name
        self.criteria: dict[str, list[Criterion]] = {
            suffix: list(group) for suffix, group in (criteria or {}).items()
        }
        self.mismatch_policy = MismatchPolicy(mismatch_policy)
        self.log = log if log is not None else logger
        self._filtered_reads: Counter[str] = Counter()
        self._state = FilterState.RESET

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        source: str = "<lines>",
        *,
        mismatch_policy: MismatchPolicy | str = MismatchPolicy.ABORT,
        warn_unknown_suffixes: bool = False,
        log: Any = None,
    ) -> ReadFilter | None:
        """Build a filter from rule-file lines.

        Returns:
            ReadFilter, or None if the lines contain no filter name
        """
        rules = parse_filter_lines(
            lines, source, log=log, warn_unknown_suffixes=warn_unknown_suffixes
        )
        if rules is None:
            return None
        return cls(rules.name, rules.criteria, mismatch_policy=mismatch_policy, log=log)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        mismatch_policy: MismatchPolicy | str = MismatchPolicy.ABORT,
        warn_unknown_suffixes: bool = False,
        log: Any = None,
    ) -> ReadFilter | None:
        """Parse a filter from a rule file.

        Args:
            path: Rule file path
            mismatch_policy: Handling of wrongly typed values
            warn_unknown_suffixes: Warn about suffixes the collector never feeds
            log: Logger collaborator

        Returns:
            ReadFilter, or None if the file contains no filter name

        Raises:
            FilterFileError: If the file cannot be read
        """
        rules = parse_filter_file(
            path, log=log, warn_unknown_suffixes=warn_unknown_suffixes
        )
        if rules is None:
            return None

        read_filter = cls(rules.name, rules.criteria, mismatch_policy=mismatch_policy, log=log)
        read_filter.log.debug(
            "filter_loaded",
            name=read_filter.name,
            path=str(path),
            criteria=read_filter.criteria_count,
            skipped=rules.skipped_lines,
        )
        return read_filter

    # ------------------------------------------------------------------
    # Per-observation cycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> FilterState:
        return self._state

    def reset(self) -> None:
        """Clear every criterion. Call before each new observation."""
        for group in self.criteria.values():
            for criterion in group:
                criterion.reset()
        self._state = FilterState.RESET

    def process_value(self, suffix: str, value: Any) -> None:
        """Evaluate the criteria registered for ``suffix`` against a value.

        None means the stratifier does not apply to this observation and is
        ignored. Criteria are evaluated in declaration order; the first one
        whose type does not match the value ends the call.

        Args:
            suffix: Stratifier suffix
            value: Stratifier value for the current observation
        """
        if value is None:
            return

        if self._state is FilterState.QUERIED:
            self.log.warning("stale_filter_state", filter=self.name, suffix=suffix)
        self._state = FilterState.EVALUATING

        group = self.criteria.get(suffix)
        if not group:
            return

        kind = ValueKind.of(value)
        for criterion in group:
            if criterion.kind is not kind:
                self.log.warning(
                    "invalid_stratum_type",
                    filter=self.name,
                    suffix=suffix,
                    expected=criterion.kind.value,
                    received=type(value).__name__,
                )
                if self.mismatch_policy is MismatchPolicy.RESET_GROUP:
                    for member in group:
                        member.reset()
                return
            criterion.evaluate(value)

    def is_satisfied(self) -> bool:
        """Whether every criterion holds for the current observation."""
        self._state = FilterState.QUERIED
        return all(
            criterion.is_satisfied()
            for group in self.criteria.values()
            for criterion in group
        )

    def evaluate(self, read_id: str, values: Mapping[str, Any]) -> bool:
        """Run one full cycle for an observation.

        Args:
            read_id: Identifier recorded in the tally when satisfied
            values: Stratifier values keyed by suffix

        Returns:
            True if the observation is excluded by this filter
        """
        self.reset()
        for suffix, value in values.items():
            self.process_value(suffix, value)
        satisfied = self.is_satisfied()
        if satisfied:
            self.add_read_by_id(read_id)
        return satisfied

    # ------------------------------------------------------------------
    # Exclusion tally
    # ------------------------------------------------------------------

    def add_read_by_id(self, read_id: str) -> None:
        """Count one more excluded observation for ``read_id``."""
        self._filtered_reads[read_id] += 1

    def get_filtered_reads(self) -> Mapping[str, int]:
        """Read-only view of excluded read counts."""
        return MappingProxyType(self._filtered_reads)

    @property
    def filtered_reads(self) -> Mapping[str, int]:
        return self.get_filtered_reads()

    def merge_tally(self, other: ReadFilter) -> ReadFilter:
        """Add another filter's tally to this one.

        Args:
            other: Filter built from the same rules (usually a worker clone)

        Returns:
            self

        Raises:
            ValueError: If the filters have different names
        """
        if other.name != self.name:
            raise ValueError(
                f"Cannot merge tally of filter {other.name!r} into {self.name!r}"
            )
        self._filtered_reads.update(other._filtered_reads)
        return self

    def clone(self) -> ReadFilter:
        """Copy the rules into a new filter with fresh state and empty tally."""
        return ReadFilter(
            self.name,
            {suffix: [c.copy() for c in group] for suffix, group in self.criteria.items()},
            mismatch_policy=self.mismatch_policy,
            log=self.log,
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_name(self) -> str:
        return self.name

    @property
    def suffixes(self) -> list[str]:
        return list(self.criteria)

    @property
    def criteria_count(self) -> int:
        return sum(len(group) for group in self.criteria.values())

    def __len__(self) -> int:
        return self.criteria_count

    def __repr__(self) -> str:
        return (
            f"ReadFilter(name={self.name!r}, criteria={self.criteria_count}, "
            f"filtered_reads={len(self._filtered_reads)})"
        )


def load_filter(path: str | Path, **kwargs: Any) -> ReadFilter | None:
    """Load one rule file. See ReadFilter.from_file."""
    return ReadFilter.from_file(path, **kwargs)


def load_filters(paths: Iterable[str | Path], **kwargs: Any) -> list[ReadFilter]:
    """Load several rule files, dropping those that define no filter.

    Args:
        paths: Rule file paths
        **kwargs: Passed to ReadFilter.from_file

    Returns:
        Loaded filters in path order

    Raises:
        FilterFileError: If any file cannot be read
    """
    filters = []
    for path in paths:
        read_filter = ReadFilter.from_file(path, **kwargs)
        if read_filter is None:
            continue
        filters.append(read_filter)
    return filters
