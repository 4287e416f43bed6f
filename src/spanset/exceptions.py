"""
Unified exception hierarchy for spanset.

All exception classes live here. No per-module exception files.

Hierarchy:
    SpanSetError (base)
    ├── InvalidBoundError     (also a ValueError)
    ├── InvalidArgumentError  (also a ValueError)
    └── InvalidShapeError     (also a TypeError)

Usage:
    from spanset.exceptions import InvalidBoundError, InvalidShapeError
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "SpanSetError",
    "InvalidBoundError",
    "InvalidArgumentError",
    "InvalidShapeError",
]


# =============================================================================
# ROOT
# =============================================================================


class SpanSetError(Exception):
    """
    Base exception for all spanset errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about what was being done
        details: Technical details (offending value, index, etc.)
    """

    def __init__(
        self,
        message: str,
        context: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.context = context
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.context:
            parts.append(f"Context: {self.context}")
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            parts.append(f"Details: {detail_str}")
        return ". ".join(parts)


# =============================================================================
# INGESTION
# =============================================================================


class InvalidBoundError(SpanSetError, ValueError):
    """Raised when a raw span bound is not a finite number."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        index: int | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        details["value"] = value
        if index is not None:
            details["index"] = index
        super().__init__(message, details=details, **kwargs)
        self.value = value
        self.index = index


class InvalidShapeError(SpanSetError, TypeError):
    """Raised when raw input is not a recognizable sequence of pairs or records."""

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        got: str | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if expected:
            details["expected"] = expected
        if got:
            details["got"] = got
        super().__init__(message, details=details, **kwargs)
        self.expected = expected
        self.got = got


# =============================================================================
# CONTROL PARAMETERS
# =============================================================================


class InvalidArgumentError(SpanSetError, ValueError):
    """Raised for an out-of-domain control parameter (e.g. a negative scale)."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if argument:
            details["argument"] = argument
        details["value"] = value
        super().__init__(message, details=details, **kwargs)
        self.argument = argument
        self.value = value
