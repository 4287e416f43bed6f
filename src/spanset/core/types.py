"""
Core data types for the spanset engine.

This module defines the fundamental types used throughout the engine:
- SpanArray: the canonical flat representation [b0, b1, b2, b3, ...]
- Span: a single half-open interval [start, end)
- TestResult: outcome of a containment test

The engine itself operates on SpanArray lists. Span is the value type handed
out by iteration and export.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from numbers import Real
from typing import List, Tuple, Union

__all__ = [
    "SpanArray",
    "Bound",
    "TestResult",
    "Span",
    "is_number",
    "is_finite_number",
]

# Flat, even-length list of bounds: spans [data[0], data[1]), [data[2], data[3]), ...
SpanArray = List[float]

Bound = Union[int, float]


class TestResult(IntEnum):
    """
    Outcome of testing a value or a range against a span set.

    The integer codes are stable and part of the public interface.
    """
    NONE = 0  # No point of the query is covered
    FULL = 1  # Every point of the query is covered
    PART = 2  # Some, but not all, points are covered

    # Keeps pytest from collecting the enum as a test class
    __test__ = False


def is_number(value) -> bool:
    """True for real numbers; bools are rejected."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_finite_number(value) -> bool:
    if not is_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers too large for a double
        return False


@dataclass(frozen=True)
class Span:
    """
    A half-open interval [start, end) with start < end.

    Spans compare and hash by value, so they can be collected in sets.
    """
    start: float
    end: float

    def __post_init__(self):
        if not self.start < self.end:
            raise ValueError(
                f"Span start must be less than end (got [{self.start}, {self.end}))"
            )

    @property
    def length(self) -> float:
        return self.end - self.start

    def overlaps(self, other: "Span") -> bool:
        """Check if this span shares at least one point with another span."""
        return self.start < other.end and other.start < self.end

    def touches(self, other: "Span") -> bool:
        """Check if two spans are adjacent, i.e. would coalesce into one."""
        return self.end == other.start or other.end == self.start

    def contains(self, other: Union["Span", Bound]) -> bool:
        """Check if this span fully contains another span or a scalar value."""
        if isinstance(other, Span):
            return self.start <= other.start and other.end <= self.end
        return self.start <= other < self.end

    def as_tuple(self) -> Tuple[float, float]:
        return (self.start, self.end)

    def __iter__(self):
        yield self.start
        yield self.end

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"
