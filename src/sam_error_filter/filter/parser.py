"""
Rule file parser.

A rule file names one filter and lists its criteria:

    # comment
    <filter-name>
    <suffix>\\t<type>\\t<comparator>\\t<value>
    ...

Blank lines and lines starting with ``#`` are ignored everywhere. Malformed
criterion lines are logged and skipped; only I/O failures abort parsing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from sam_error_filter.filter.comparator import Comparator
from sam_error_filter.filter.criterion import Criterion, ValueKind
from sam_error_filter.filter.stratifiers import is_known_suffix

logger = structlog.get_logger(__name__)

FIELD_SEPARATOR = "\t"
FIELDS_PER_LINE = 4


class FilterFileError(OSError):
    """A rule file could not be opened, read or closed."""


@dataclass
class ParsedRules:
    """Name and criteria read from a rule file."""

    name: str
    criteria: dict[str, list[Criterion]] = field(default_factory=dict)
    skipped_lines: int = 0


def _is_ignored(line: str) -> bool:
    return not line.strip() or line.startswith("#")


def _split_fields(line: str) -> list[str]:
    # Empty fields count, including trailing ones
    return [f.strip() for f in line.split(FIELD_SEPARATOR)]


def parse_criterion(
    fields: list[str],
) -> tuple[str, Criterion]:
    """Build a criterion from the four fields of a rule line.

    Args:
        fields: suffix, type, comparator symbol, value

    Returns:
        Tuple of (suffix, Criterion)

    Raises:
        LookupError: If the type is not "boolean" or "int"
        ValueError: If the value or comparator is invalid
    """
    suffix, type_name, symbol, text = fields
    try:
        kind = ValueKind(type_name)
    except ValueError:
        raise LookupError(f"Invalid criterion type: {type_name!r}") from None
    threshold = kind.parse(text)
    comparator = Comparator.from_symbol(symbol)
    return suffix, Criterion(kind, comparator, threshold)


def parse_filter_lines(
    lines: Iterable[str],
    source: str = "<lines>",
    *,
    log: Any = None,
    warn_unknown_suffixes: bool = False,
) -> ParsedRules | None:
    """Parse rule-file lines.

    Args:
        lines: Lines of the rule file, with or without line terminators
        source: Where the lines came from, for log messages
        log: Logger collaborator (defaults to this module's logger)
        warn_unknown_suffixes: Log unknown suffixes as warnings instead of
            debug messages

    Returns:
        ParsedRules, or None if the lines contain no filter name
    """
    log = log if log is not None else logger
    rules: ParsedRules | None = None

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if _is_ignored(line):
            continue

        if rules is None:
            rules = ParsedRules(name=line.strip())
            continue

        fields = _split_fields(line)
        if len(fields) != FIELDS_PER_LINE:
            log.warning(
                "invalid_filter_line",
                source=source,
                line_number=line_number,
                fields=len(fields),
            )
            rules.skipped_lines += 1
            continue

        try:
            suffix, criterion = parse_criterion(fields)
        except LookupError:
            log.warning(
                "invalid_criterion_type",
                source=source,
                line_number=line_number,
                line=line,
            )
            rules.skipped_lines += 1
            continue
        except ValueError as e:
            log.warning(
                "invalid_criterion_value",
                source=source,
                line_number=line_number,
                line=line,
                error=str(e),
            )
            rules.skipped_lines += 1
            continue

        if not is_known_suffix(suffix):
            report = log.warning if warn_unknown_suffixes else log.debug
            report("unknown_stratifier_suffix", source=source, suffix=suffix)

        rules.criteria.setdefault(suffix, []).append(criterion)

    if rules is None:
        log.warning("empty_filter_file", source=source)
    return rules


def parse_filter_file(
    path: str | Path,
    *,
    log: Any = None,
    warn_unknown_suffixes: bool = False,
) -> ParsedRules | None:
    """Parse a rule file from disk.

    Args:
        path: Rule file path (UTF-8 text)
        log: Logger collaborator
        warn_unknown_suffixes: See parse_filter_lines

    Returns:
        ParsedRules, or None if the file contains no filter name

    Raises:
        FilterFileError: If the file cannot be opened, read or closed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return parse_filter_lines(
                f,
                source=str(path),
                log=log,
                warn_unknown_suffixes=warn_unknown_suffixes,
            )
    except (OSError, UnicodeDecodeError) as e:
        raise FilterFileError(f"Failed to read filter file {path}: {e}") from e
