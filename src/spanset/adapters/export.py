"""Conversion of canonical span arrays for external consumption."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from spanset.config import get_settings
from spanset.core.types import SpanArray
from spanset.exceptions import InvalidArgumentError

__all__ = [
    "to_packed",
    "to_pairs",
    "to_records",
    "format_bound",
    "to_string",
]


def to_packed(data: SpanArray) -> List[float]:
    """Return a copy of the flat bounds."""
    return list(data)


def to_pairs(data: SpanArray) -> List[Tuple[float, float]]:
    """Convert ``[1, 2, 3, 4]`` into ``[(1, 2), (3, 4)]``."""
    return [(data[i], data[i + 1]) for i in range(0, len(data), 2)]


def to_records(
    data: SpanArray,
    start_key: Optional[str] = None,
    end_key: Optional[str] = None,
) -> List[Dict[str, float]]:
    """
    Convert ``[1, 2, 3, 4]`` into ``[{"from": 1, "to": 2}, {"from": 3, "to": 4}]``.

    Args:
        data: Canonical span array.
        start_key: Field name for span starts (default ``export.start_key``).
        end_key: Field name for span ends (default ``export.end_key``).
    """
    settings = get_settings().export
    start_key = start_key or settings.start_key
    end_key = end_key or settings.end_key

    if start_key == end_key:
        raise InvalidArgumentError(
            "Start and end keys must differ",
            argument="end_key",
            value=end_key,
        )

    return [
        {start_key: data[i], end_key: data[i + 1]}
        for i in range(0, len(data), 2)
    ]


def format_bound(value: float) -> str:
    """Render a bound the short way: integral floats without a fraction."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_string(data: SpanArray) -> str:
    """Render bounds comma separated, e.g. ``"1,2,3,4"``."""
    return ",".join(format_bound(v) for v in data)
