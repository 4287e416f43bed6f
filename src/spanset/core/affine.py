"""Affine transforms (shift, scale) of canonical span arrays.

Arithmetic is IEEE-754 double precision. Both transforms are monotonic, so
span order is preserved and only neighbours can collide. A span whose bounds
stop forming a finite ``start < end`` pair (NaN operand, overflow, rounding
collapse) is elided; neighbours that end up touching or overlapping are
coalesced.

NOTE: With fractional bounds and large offsets, rounding can make nearby
spans contiguous, so the result may hold fewer spans than the input.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List

from spanset.exceptions import InvalidArgumentError

from .types import SpanArray, is_number

__all__ = [
    "shift",
    "scale",
    "shift_inplace",
    "scale_inplace",
]

logger = logging.getLogger(__name__)

_INF = math.inf


def _as_float(name: str, value) -> float:
    if not is_number(value):
        raise InvalidArgumentError(
            f"Expected a number for {name}, got {type(value).__name__}",
            argument=name,
            value=value,
        )
    try:
        return float(value)
    except OverflowError:
        return _INF if value > 0 else -_INF


def _check_factor(factor) -> float:
    factor = _as_float("factor", factor)
    if factor < 0:
        raise InvalidArgumentError(
            f"Invalid scale: {factor}",
            argument="factor",
            value=factor,
            context="scale factor must not be negative",
        )
    return factor


def _transform(data: SpanArray, fn: Callable[[float], float]) -> SpanArray:
    output: List[float] = []
    last = -_INF

    for i in range(0, len(data), 2):
        a = fn(data[i])
        b = fn(data[i + 1])

        # Only keep spans whose bounds are finite and still ordered
        if -_INF < a < b < _INF:
            if a > last or not output:
                output.append(a)
                output.append(b)
            else:
                output[-1] = b
            last = b

    elided = (len(data) - len(output)) >> 1
    if elided:
        logger.debug("Transform elided or coalesced spans", extra={"elided": elided})

    return output


def _transform_inplace(data: SpanArray, fn: Callable[[float], float]) -> SpanArray:
    length = len(data)
    last = -_INF
    store = 0

    # Compact left to right; the write index never passes the read index
    for i in range(0, length, 2):
        a = fn(data[i])
        b = fn(data[i + 1])

        if -_INF < a < b < _INF:
            if a > last or not store:
                data[store] = a
                data[store + 1] = b
                store += 2
            else:
                data[store - 1] = b
            last = b

    if store != length:
        logger.debug(
            "Transform elided or coalesced spans",
            extra={"elided": (length - store) >> 1},
        )
        del data[store:]

    return data


def shift(data: SpanArray, offset) -> SpanArray:
    """
    Return a new array with every span moved by ``offset``.

    Raises:
        InvalidArgumentError: ``offset`` is not a number.
    """
    offset = _as_float("offset", offset)
    return _transform(data, lambda v: v + offset)


def scale(data: SpanArray, factor) -> SpanArray:
    """
    Return a new array with every bound multiplied by ``factor``.

    A zero or NaN factor yields an empty array.

    Raises:
        InvalidArgumentError: ``factor`` is negative or not a number.
    """
    factor = _check_factor(factor)
    return _transform(data, lambda v: v * factor)


def shift_inplace(data: SpanArray, offset) -> SpanArray:
    """Shift ``data`` in place, truncating it if spans are elided."""
    offset = _as_float("offset", offset)
    if offset == 0:
        return data
    return _transform_inplace(data, lambda v: v + offset)


def scale_inplace(data: SpanArray, factor) -> SpanArray:
    """Scale ``data`` in place, truncating it if spans are elided."""
    factor = _check_factor(factor)
    if factor == 1:
        return data
    return _transform_inplace(data, lambda v: v * factor)
