"""
Logging utilities for the SAM error read filter.

Filter warnings (skipped rule lines, mistyped stratifier values) are
structlog events. They are rendered for the console or as JSON lines, always
on stderr so that tables and summaries printed on stdout stay clean.

Example:
    >>> from sam_error_filter.utils import setup_logging, get_logger
    >>>
    >>> setup_logging(level="INFO", format="json")
    >>> logger = get_logger(__name__)
    >>> logger.warning("invalid_filter_line", source="rules.txt", line_number=4)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from ..config.settings import LoggingSettings


def _renderer(format: str) -> Any:
    if format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=False,
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    *,
    include_timestamp: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging.

    Reconfigures the root handler on every call, so the CLI can switch level
    or format after import time.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format ("console" or "json")
        include_timestamp: Prefix records with an ISO timestamp
        stream: Output stream (defaults to stderr)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=getattr(logging, level.upper()),
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.append(_renderer(format))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_settings(settings: LoggingSettings, *, level: str | None = None) -> None:
    """Configure logging from the [logging] section.

    Args:
        settings: Logging settings
        level: Level overriding the configured one (--verbose)
    """
    setup_logging(
        level=level or settings.level,
        format=settings.format,
        include_timestamp=settings.include_timestamp,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, usually for ``__name__``."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_context(**kwargs: Any) -> None:
    """Attach context to every event logged until clear_context().

    Example:
        >>> bind_context(observations="strata.tsv")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
