"""
Relational operators used by filter criteria.
"""

from __future__ import annotations

import operator
from enum import Enum
from typing import Any


class Comparator(Enum):
    """Comparison operators for filter criteria."""

    EQUAL = "=="
    NOT_EQUAL = "!="
    SMALLER = "<"
    SMALLER_OR_EQUAL = "<="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="

    @property
    def symbol(self) -> str:
        """Canonical textual form of the operator."""
        return self.value

    @classmethod
    def from_symbol(cls, token: str) -> Comparator:
        """Convert a rule-file token to a comparator.

        Args:
            token: One of "=", "==", "!=", "<", "<=", ">", ">="

        Returns:
            Matching Comparator

        Raises:
            ValueError: If the token is not a known operator
        """
        try:
            return _SYMBOLS[token]
        except (KeyError, TypeError):
            raise ValueError(f"Cannot convert {token!r} to a comparator") from None

    def apply(self, candidate: Any, threshold: Any) -> bool:
        """Compare a candidate value against a threshold.

        Args:
            candidate: Value observed for the current record
            threshold: Value declared in the rule

        Returns:
            Result of ``candidate <op> threshold``
        """
        return bool(_OPERATIONS[self](candidate, threshold))


_SYMBOLS: dict[str, Comparator] = {
    "=": Comparator.EQUAL,
    "==": Comparator.EQUAL,
    "!=": Comparator.NOT_EQUAL,
    "<": Comparator.SMALLER,
    "<=": Comparator.SMALLER_OR_EQUAL,
    ">": Comparator.GREATER,
    ">=": Comparator.GREATER_OR_EQUAL,
}

_OPERATIONS = {
    Comparator.EQUAL: operator.eq,
    Comparator.NOT_EQUAL: operator.ne,
    Comparator.SMALLER: operator.lt,
    Comparator.SMALLER_OR_EQUAL: operator.le,
    Comparator.GREATER: operator.gt,
    Comparator.GREATER_OR_EQUAL: operator.ge,
}
