"""
Observation loop for read filters.

The metric collector computes stratifier values for every observation and
asks the filters whether to drop it. FilterRunner runs that loop over
precomputed values: each filter is reset, fed every value, queried, and
tallies the read when satisfied.

Example:
    >>> from sam_error_filter.driver import FilterRunner, read_observations
    >>>
    >>> runner = FilterRunner(filters)
    >>> kept = list(runner.run(read_observations("strata.tsv")))
    >>> report = runner.report()
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from sam_error_filter.filter.criterion import INT_LITERAL
from sam_error_filter.filter.engine import ReadFilter
from sam_error_filter.models.report import ExclusionReport, FilterExclusion

logger = structlog.get_logger(__name__)

READ_ID_COLUMN = "read_id"


@dataclass
class Observation:
    """Stratifier values computed for one read or base."""

    read_id: str
    values: Mapping[str, Any] = field(default_factory=dict)


def parse_stratum_value(text: str) -> Any:
    """Convert a table cell into a stratifier value.

    Empty cells mean the stratifier does not apply (None). "true"/"false"
    in any case become booleans and integer literals become ints. Anything
    else is kept as text, which no criterion accepts.
    """
    text = text.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if INT_LITERAL.fullmatch(text):
        return int(text)
    return text


def read_observations(path: Path | str) -> Iterator[Observation]:
    """Read observations from a tab-separated table.

    The table has a ``read_id`` column and one column per stratifier
    suffix. Each row is one observation.

    Args:
        path: Table path

    Yields:
        Observation per row

    Raises:
        ValueError: If the table has no read_id column
    """
    import pandas as pd

    df = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)
    if READ_ID_COLUMN not in df.columns:
        raise ValueError(f"Observation table {path} has no '{READ_ID_COLUMN}' column")

    suffixes = [c for c in df.columns if c != READ_ID_COLUMN]
    for record in df.to_dict(orient="records"):
        yield Observation(
            read_id=record[READ_ID_COLUMN],
            values={suffix: parse_stratum_value(record[suffix]) for suffix in suffixes},
        )


class FilterRunner:
    """Apply a set of read filters to a stream of observations.

    Attributes:
        filters: Filters applied to every observation
        observations_seen: Observations passed to observe()
        observations_excluded: Observations at least one filter excluded
    """

    def __init__(self, filters: Iterable[ReadFilter], log: Any = None):
        """Initialize runner.

        Args:
            filters: Filters to apply
            log: Logger collaborator (defaults to this module's logger)
        """
        self.filters = list(filters)
        self.log = log if log is not None else logger
        self.observations_seen = 0
        self.observations_excluded = 0

    def observe(self, observation: Observation) -> bool:
        """Run every filter over one observation.

        All filters see every observation so that each one keeps a
        complete tally.

        Returns:
            True if the observation should be excluded
        """
        self.observations_seen += 1
        excluded = False
        for read_filter in self.filters:
            if read_filter.evaluate(observation.read_id, observation.values):
                excluded = True

        if excluded:
            self.observations_excluded += 1
        return excluded

    def run(self, observations: Iterable[Observation]) -> Iterator[Observation]:
        """Filter a stream of observations.

        Yields:
            Observations that no filter excluded
        """
        for observation in observations:
            if not self.observe(observation):
                yield observation

        self.log.info(
            "filter_run_complete",
            filters=len(self.filters),
            seen=self.observations_seen,
            excluded=self.observations_excluded,
        )

    def report(self) -> ExclusionReport:
        """Snapshot the current tallies."""
        return ExclusionReport(
            observations_seen=self.observations_seen,
            observations_excluded=self.observations_excluded,
            filters=[FilterExclusion.from_filter(f) for f in self.filters],
        )
