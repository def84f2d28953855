"""
Pytest configuration and shared fixtures for the SAM error read filter.

This module provides:
- Rule file writers backed by a temporary directory
- A capturing logger to assert on structured log events
- Isolation of structlog configuration and cached settings

Example usage in tests:
    def test_something(write_rules, capturing_log):
        path = write_rules(QUALITY_AND_MISMATCH)
        read_filter = ReadFilter.from_file(path, log=capturing_log.logger)
        assert capturing_log.events("warning") == []
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from structlog.testing import CapturingLogger, LogCapture

from sam_error_filter.config.settings import get_settings
from sam_error_filter.filter import ReadFilter
from tests.fixtures.rules import QUALITY_AND_MISMATCH, THRESHOLD_AND_FLAG


class CapturedLog:
    """A structlog logger that records every call."""

    def __init__(self) -> None:
        self.capture = LogCapture()
        self.logger = structlog.wrap_logger(
            CapturingLogger(),
            processors=[self.capture],
            wrapper_class=structlog.BoundLogger,
        )

    def events(self, level: str | None = None) -> list[str]:
        """Event names logged, optionally only at one level."""
        return [
            entry["event"]
            for entry in self.capture.entries
            if level is None or entry["log_level"] == level
        ]

    def calls(self, event: str) -> list[dict]:
        """Keyword context of every call with the given event name."""
        return [entry for entry in self.capture.entries if entry["event"] == event]


# ============================================================================
# ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset structlog and cached settings around every test."""
    for key in [k for k in os.environ if k.startswith("SAMERR_")]:
        monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# ============================================================================
# LOGGING FIXTURES
# ============================================================================


@pytest.fixture
def capturing_log() -> CapturedLog:
    """Provide a logger collaborator that records calls."""
    return CapturedLog()


# ============================================================================
# RULE FILE FIXTURES
# ============================================================================


@pytest.fixture
def write_rules(tmp_path: Path) -> Callable[..., Path]:
    """Provide a function writing rule text to a temporary file.

    Returns:
        Function taking (text, name="rules.txt") and returning the path
    """

    def _write(text: str, name: str = "rules.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def quality_filter(write_rules: Callable[..., Path], capturing_log: CapturedLog) -> ReadFilter:
    """Provide the low_quality_mismatch filter.

    base_quality < 20 and is_mismatch == true
    """
    read_filter = ReadFilter.from_file(write_rules(QUALITY_AND_MISMATCH), log=capturing_log.logger)
    assert read_filter is not None
    return read_filter


@pytest.fixture
def threshold_filter(write_rules: Callable[..., Path], capturing_log: CapturedLog) -> ReadFilter:
    """Provide a filter with A > 5 (int) and B == true (boolean)."""
    read_filter = ReadFilter.from_file(write_rules(THRESHOLD_AND_FLAG), log=capturing_log.logger)
    assert read_filter is not None
    return read_filter
