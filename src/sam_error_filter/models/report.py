"""
Exclusion report models.

These models hold what a run of read filters excluded, ready to be printed
or written out as one tab-separated file per filter.

Example:
    >>> from sam_error_filter.models import FilterExclusion
    >>>
    >>> exclusion = FilterExclusion.from_filter(read_filter)
    >>> print(f"{exclusion.filter_name}: {exclusion.distinct_reads} reads")
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict, Field, computed_field

if TYPE_CHECKING:
    import pandas as pd

    from ..filter.engine import ReadFilter

logger = structlog.get_logger(__name__)

DEFAULT_EXTENSION = "error_filtered_reads"

_UNSAFE_NAME_CHARS = re.compile(r"[\\/\x00]")


class FilteredReadCount(BaseModel):
    """Number of excluded observations for one read."""

    model_config = ConfigDict(frozen=True)

    read_id: str = Field(..., description="Read identifier")
    count: int = Field(..., ge=1, description="Excluded observations of this read")


class FilterExclusion(BaseModel):
    """Reads excluded by a single filter.

    Attributes:
        filter_name: Name declared in the rule file
        reads: Excluded reads with their counts, sorted by read id
    """

    model_config = ConfigDict(extra="ignore")

    filter_name: str = Field(..., description="Filter name")
    reads: list[FilteredReadCount] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def distinct_reads(self) -> int:
        """Number of different reads excluded."""
        return len(self.reads)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_exclusions(self) -> int:
        """Number of excluded observations over all reads."""
        return sum(r.count for r in self.reads)

    @classmethod
    def from_filter(cls, read_filter: ReadFilter) -> FilterExclusion:
        """Snapshot a filter's tally."""
        tally = read_filter.get_filtered_reads()
        return cls(
            filter_name=read_filter.get_name(),
            reads=[
                FilteredReadCount(read_id=read_id, count=tally[read_id])
                for read_id in sorted(tally)
            ],
        )

    def output_name(self, prefix: str, extension: str = DEFAULT_EXTENSION) -> str:
        """File name of this filter's report: ``<prefix>.<name>.<extension>``.

        Path separators in the filter name are replaced with underscores so
        the file always lands in the output directory.
        """
        name = _UNSAFE_NAME_CHARS.sub("_", self.filter_name)
        return f"{prefix}.{name}.{extension}"

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a DataFrame with read_id and count columns."""
        import pandas as pd

        return pd.DataFrame(
            [r.model_dump() for r in self.reads],
            columns=["read_id", "count"],
        )


class ExclusionReport(BaseModel):
    """Summary of a filtering run over many observations."""

    model_config = ConfigDict(extra="ignore")

    observations_seen: int = Field(default=0, ge=0)
    observations_excluded: int = Field(default=0, ge=0)
    filters: list[FilterExclusion] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def exclusion_rate(self) -> float:
        """Fraction of observations excluded by at least one filter."""
        if self.observations_seen == 0:
            return 0.0
        return self.observations_excluded / self.observations_seen

    def get(self, filter_name: str) -> FilterExclusion | None:
        """Find the entry for a filter by name."""
        for exclusion in self.filters:
            if exclusion.filter_name == filter_name:
                return exclusion
        return None

    def to_dataframe(self) -> pd.DataFrame:
        """One summary row per filter."""
        import pandas as pd

        return pd.DataFrame(
            [
                {
                    "filter_name": f.filter_name,
                    "distinct_reads": f.distinct_reads,
                    "total_exclusions": f.total_exclusions,
                }
                for f in self.filters
            ],
            columns=["filter_name", "distinct_reads", "total_exclusions"],
        )


def export_report(
    report: ExclusionReport,
    output_dir: Path | str,
    prefix: str,
    extension: str = DEFAULT_EXTENSION,
) -> list[Path]:
    """Write one tab-separated file per filter.

    Args:
        report: Report to export
        output_dir: Directory for the files (created if missing)
        prefix: File name prefix
        extension: File name extension

    Returns:
        Paths of the written files
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for exclusion in report.filters:
        path = output_dir / exclusion.output_name(prefix, extension)
        exclusion.to_dataframe().to_csv(path, sep="\t", index=False)
        written.append(path)
        logger.info(
            "exclusion_report_written",
            filter=exclusion.filter_name,
            path=str(path),
            reads=exclusion.distinct_reads,
        )

    return written
