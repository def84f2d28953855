"""
Filter criteria.

A criterion pairs a comparator with a threshold from one of two value
domains (boolean or integer) and remembers whether the last value it saw
satisfied it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import Any

from sam_error_filter.filter.comparator import Comparator

StratumValue = bool | int

INT_LITERAL = re.compile(r"[+-]?[0-9]+")

# Rule-file int thresholds are 32-bit signed
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class ValueKind(str, Enum):
    """Value domains a criterion can be declared over.

    The enum values are the type names used in rule files.
    """

    BOOLEAN = "boolean"
    INT = "int"

    @classmethod
    def of(cls, value: Any) -> ValueKind | None:
        """Classify a value into its domain.

        ``bool`` is checked first since it subclasses ``int``.

        Returns:
            The value's ValueKind, or None if it belongs to neither domain
        """
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, Integral):
            return cls.INT
        return None

    def parse(self, text: str) -> StratumValue:
        """Parse a rule-file value for this domain.

        Args:
            text: Trimmed value field

        Returns:
            Parsed threshold

        Raises:
            ValueError: If the text is not a valid literal of this domain
        """
        if self is ValueKind.BOOLEAN:
            lowered = text.lower()
            if lowered not in ("true", "false"):
                raise ValueError(f"Invalid boolean value: {text!r}")
            return lowered == "true"
        if not INT_LITERAL.fullmatch(text):
            raise ValueError(f"Invalid int value: {text!r}")
        value = int(text)
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"Int value out of range: {text!r}")
        return value

    def render(self, value: StratumValue) -> str:
        """Render a threshold the way a rule file spells it."""
        if self is ValueKind.BOOLEAN:
            return "true" if value else "false"
        return str(value)


@dataclass(eq=False)
class Criterion:
    """A single filter criterion.

    Attributes:
        kind: Value domain of the threshold and of accepted candidates
        comparator: Relational operator
        threshold: Declared value to compare against
        satisfied: Result of the last evaluation since the last reset
    """

    kind: ValueKind
    comparator: Comparator
    threshold: StratumValue
    satisfied: bool = False

    def __post_init__(self) -> None:
        if ValueKind.of(self.threshold) is not self.kind:
            raise TypeError(
                f"Threshold {self.threshold!r} is not a {self.kind.value} value"
            )

    @classmethod
    def boolean(cls, comparator: Comparator, threshold: bool) -> Criterion:
        """Create a boolean criterion."""
        return cls(ValueKind.BOOLEAN, comparator, threshold)

    @classmethod
    def numeric(cls, comparator: Comparator, threshold: int) -> Criterion:
        """Create an integer criterion."""
        return cls(ValueKind.INT, comparator, threshold)

    def accepts(self, value: Any) -> bool:
        """Whether ``value`` belongs to this criterion's domain."""
        return ValueKind.of(value) is self.kind

    def evaluate(self, value: StratumValue) -> bool:
        """Check a candidate value and remember the result.

        Args:
            value: Candidate of this criterion's domain

        Returns:
            Whether the candidate satisfies the criterion

        Raises:
            TypeError: If the candidate is of another domain
        """
        if not self.accepts(value):
            raise TypeError(f"Expected a {self.kind.value} value, got {value!r}")
        self.satisfied = self.comparator.apply(value, self.threshold)
        return self.satisfied

    def is_satisfied(self) -> bool:
        return self.satisfied

    def reset(self) -> None:
        self.satisfied = False

    def copy(self) -> Criterion:
        """Return an unsatisfied criterion with the same rule."""
        return Criterion(self.kind, self.comparator, self.threshold)

    def describe(self) -> str:
        """Rule-file spelling (type, comparator, value), tab separated."""
        return "\t".join(
            (self.kind.value, self.comparator.symbol, self.kind.render(self.threshold))
        )
