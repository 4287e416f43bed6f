"""Containment tests against canonical span arrays.

A scalar is either covered (FULL) or not (NONE). A range or span array may
also be partially covered (PART).
"""

from __future__ import annotations

from .locator import closest_index
from .types import SpanArray, TestResult

__all__ = [
    "classify_value",
    "classify_spans",
]


def classify_value(data: SpanArray, value: float) -> TestResult:
    """Check whether the scalar ``value`` lies inside one of the spans."""
    length = len(data)
    if not length:
        return TestResult.NONE

    # Outside the extremes (the last end is exclusive)
    if value < data[0] or value >= data[length - 1]:
        return TestResult.NONE

    i = closest_index(data, value)
    if data[i] <= value < data[i + 1]:
        return TestResult.FULL
    return TestResult.NONE


def classify_spans(a: SpanArray, b: SpanArray) -> TestResult:
    """
    Check how much of the canonical array ``b`` is covered by ``a``.

    Returns:
        FULL if every span of ``b`` lies inside a span of ``a``,
        PART if some but not all points of ``b`` are covered,
        NONE if ``b`` is empty or shares no point with ``a``.
    """
    if a is b:
        return TestResult.FULL if a else TestResult.NONE

    a_len = len(a)
    b_len = len(b)
    if not a_len or not b_len:
        return TestResult.NONE

    # Extremes don't overlap
    if b[b_len - 1] <= a[0] or b[0] >= a[a_len - 1]:
        return TestResult.NONE

    a_index = closest_index(a, b[0])
    covered = 0
    hit = False

    for b_index in range(0, b_len, 2):
        b0 = b[b_index]
        b1 = b[b_index + 1]

        # Skip spans of a that end before this span of b starts
        while a[a_index + 1] <= b0:
            a_index += 2
            if a_index >= a_len:
                return TestResult.PART if hit else TestResult.NONE

        a0 = a[a_index]
        a1 = a[a_index + 1]

        if a0 <= b0 and b1 <= a1:
            covered += 2
            hit = True
        elif max(a0, b0) < min(a1, b1):
            return TestResult.PART

    if covered == b_len:
        return TestResult.FULL
    return TestResult.PART if hit else TestResult.NONE
