"""
Utility functions for the SAM error read filter.

Logging:
- setup_logging(): Configure structured logging with structlog
- get_logger(name): Get a logger instance
"""

from sam_error_filter.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)

__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "setup_logging_from_settings",
]
