"""
spanset - Set algebra over numeric half-open spans

This package provides:
- SpanSet: mutable handle over a canonical span array
- Pure set operations: union, intersect, xor, subtract
- Containment tests (scalar and range) and affine transforms (shift, scale)

Usage:
    import spanset

    a = spanset.SpanSet([0, 4, 8, 12])
    b = spanset.subtract(a, [2, 6, 10, 14])    # [0, 2, 8, 10]
    spanset.test(b, 1.5)                       # TestResult.FULL
"""

__version__ = "1.0.0"

from .core.types import Span, SpanArray, TestResult
from .core.normalizer import is_canonical, normalize
from .spans import (
    SpanSet,
    and_,
    equals,
    intersect,
    or_,
    scale,
    shift,
    sub,
    subtract,
    test,
    union,
    wrap,
    xor,
)
from .exceptions import (
    InvalidArgumentError,
    InvalidBoundError,
    InvalidShapeError,
    SpanSetError,
)
from .config import Settings, get_settings, reload_settings
from .logging import setup_logging

__all__ = [
    # Types
    "Span",
    "SpanArray",
    "SpanSet",
    "TestResult",
    # Canonical form
    "normalize",
    "is_canonical",
    "wrap",
    "equals",
    # Operations
    "test",
    "shift",
    "scale",
    "union",
    "or_",
    "intersect",
    "and_",
    "xor",
    "subtract",
    "sub",
    # Errors
    "SpanSetError",
    "InvalidBoundError",
    "InvalidArgumentError",
    "InvalidShapeError",
    # Configuration
    "Settings",
    "get_settings",
    "reload_settings",
    "setup_logging",
]
