"""Canonical form for span arrays.

Turns raw boundary pairs (unsorted, reversed, overlapping, touching or
degenerate) into the canonical form every other engine component expects:

1. even length
2. every span has start < end
3. spans are sorted and strictly separated (touching spans are coalesced)

Most real-world input is already sorted or close to it, so normalization is a
single pass that appends to (or prepends in front of) the current chunk. Input
that fits neither end of the chunk closes it and starts a new one; the chunks
are merged afterwards. Already-canonical input is returned unchanged.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from spanset.config import get_settings
from spanset.exceptions import InvalidBoundError, InvalidShapeError

from .sweep import union_op
from .types import SpanArray, is_finite_number, is_number

__all__ = [
    "is_canonical",
    "check_bound",
    "normalize",
    "normalize_pairs",
    "merge_chunks",
]

logger = logging.getLogger(__name__)


def is_canonical(data: Sequence) -> bool:
    """
    Check if ``data`` is a canonical span array.

    Canonical means every bound is a finite number, spans are sorted, don't
    intersect, and are coalesced (``[1, 3]`` is canonical, ``[1, 2, 2, 3]``
    is not).
    """
    length = len(data)
    if length & 1:
        return False

    last = -math.inf
    for i in range(0, length, 2):
        a = data[i]
        b = data[i + 1]

        if not (is_finite_number(a) and is_finite_number(b)):
            return False
        if not last < a < b:
            return False

        last = b

    return True


def check_bound(value, index: int):
    """Return ``value`` if it is a finite number, raise InvalidBoundError otherwise."""
    if not is_number(value):
        raise InvalidBoundError(
            f"Expected a number, got {type(value).__name__}",
            value=value,
            index=index,
        )
    if not is_finite_number(value):
        raise InvalidBoundError(
            f"Expected a finite number, got {value!r}",
            value=value,
            index=index,
        )
    return value


class _Chunk:
    """A canonical run under construction.

    Appends go to ``tail``; prepends are collected in ``head`` in reverse so
    each one is O(1). ``head`` is reversed once when the chunk is closed.
    """

    __slots__ = ("head", "tail")

    def __init__(self, a=None, b=None):
        self.head: List[float] = []
        self.tail: List[float] = [] if a is None else [a, b]

    def __bool__(self) -> bool:
        return bool(self.tail)

    @property
    def front(self) -> float:
        return self.head[-1] if self.head else self.tail[0]

    def prepend(self, a: float, b: float) -> None:
        if b == self.front:
            if self.head:
                self.head[-1] = a
            else:
                self.tail[0] = a
        else:
            self.head.append(b)
            self.head.append(a)

    def close(self) -> SpanArray:
        if not self.head:
            return self.tail
        self.head.reverse()
        self.head.extend(self.tail)
        return self.head


def normalize_pairs(
    pairs: Iterable[Tuple[float, float]],
    *,
    strict: Optional[bool] = None,
) -> SpanArray:
    """
    Build a canonical span array from ``(a, b)`` pairs.

    Reversed pairs are swapped, touching and overlapping pairs are merged and
    degenerate pairs (``a == b``) are dropped.

    Args:
        pairs: Raw boundary pairs in any order.
        strict: Reject degenerate pairs instead of dropping them. Defaults
                to ``engine.strict_degenerate`` from settings.

    Returns:
        A new canonical span array.

    Raises:
        InvalidBoundError: A bound is not a finite number, or a pair is
            degenerate in strict mode.
    """
    if strict is None:
        strict = get_settings().engine.strict_degenerate

    chunks: List[SpanArray] = []
    chunk = _Chunk()
    last = -math.inf

    for index, (a, b) in enumerate(pairs):
        check_bound(a, 2 * index)
        check_bound(b, 2 * index + 1)

        if a >= b:
            if a == b:
                if strict:
                    raise InvalidBoundError(
                        "Degenerate span (start == end)",
                        value=a,
                        index=2 * index,
                        context="strict_degenerate is enabled",
                    )
                continue
            a, b = b, a

        # Append/merge into the last span of the chunk
        if a >= last:
            if a == last and chunk:
                chunk.tail[-1] = b
            else:
                chunk.tail.append(a)
                chunk.tail.append(b)
            last = b
            continue

        # Prepend/merge into the first span of the chunk
        if b <= chunk.front:
            chunk.prepend(a, b)
            continue

        chunks.append(chunk.close())
        chunk = _Chunk(a, b)
        last = b

    if not chunks:
        return chunk.close()

    chunks.append(chunk.close())
    return merge_chunks(chunks)


def normalize(data: Sequence, *, strict: Optional[bool] = None) -> SpanArray:
    """
    Convert a flat sequence of bounds into a canonical span array.

    Returns ``data`` itself when it is already a canonical list, so callers
    must not assume a copy.

    Raises:
        InvalidShapeError: ``data`` holds an odd number of bounds.
        InvalidBoundError: A bound is not a finite number.
    """
    if is_canonical(data):
        return data if isinstance(data, list) else list(data)

    if len(data) & 1:
        raise InvalidShapeError(
            "Flat span data must hold an even number of bounds",
            expected="even length",
            got=f"length {len(data)}",
        )

    it = iter(data)
    return normalize_pairs(zip(it, it), strict=strict)


def _merge_two(a: SpanArray, b: SpanArray) -> SpanArray:
    x = a[-1]
    y = b[0]

    # Non-overlapping chunks are concatenated
    if x <= y:
        if x == y:
            a[-1] = b[1]
            a.extend(b[2:])
        else:
            a.extend(b)
        return a

    return union_op(a, b)


def merge_chunks(chunks: List[SpanArray]) -> SpanArray:
    """
    Merge canonical chunks into a single canonical array.

    Neighbouring chunks are merged pairwise in rounds, so ``k`` chunks cost
    O(n log k) even for adversarial input. Chunks are consumed (the left
    chunk of a concatenation is extended in place).
    """
    if not chunks:
        return []

    if len(chunks) > 1:
        logger.debug(
            "Merging out-of-order chunks",
            extra={"chunks": len(chunks), "bounds": sum(len(c) for c in chunks)},
        )

    while len(chunks) > 1:
        merged = [
            _merge_two(chunks[i], chunks[i + 1])
            for i in range(0, len(chunks) - 1, 2)
        ]
        if len(chunks) & 1:
            merged.append(chunks[-1])
        chunks = merged

    return chunks[0]
