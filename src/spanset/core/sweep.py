"""Two-cursor sweeps over canonical span arrays.

Each operator merges two canonical arrays in O(len(a) + len(b)) and returns a
freshly allocated canonical array. Coalescing happens while emitting, so no
post-pass is ever needed.

Inputs must already be canonical (see ``normalizer.normalize``); passing the
same list object as both operands takes the identity shortcut without
sweeping.
"""

from __future__ import annotations

from typing import List

from .types import SpanArray

__all__ = [
    "append",
    "union_op",
    "intersect_op",
    "xor_op",
    "subtract_op",
]


def append(output: List[float], src: SpanArray, offset: int = 0) -> List[float]:
    """Append ``src[offset:]`` to ``output`` and return ``output``."""
    if offset:
        output.extend(src[offset:])
    else:
        output.extend(src)
    return output


def _emit(output: List[float], x: float, y: float) -> None:
    """Append [x, y), extending the previous span when the two touch."""
    if output and output[-1] == x:
        output[-1] = y
    else:
        output.append(x)
        output.append(y)


def union_op(a: SpanArray, b: SpanArray) -> SpanArray:
    """Return ``a OR b``."""
    output: List[float] = []

    if a is b:
        return append(output, a)

    a_len = len(a)
    b_len = len(b)
    a_index = 0
    b_index = 0

    while a_index < a_len and b_index < b_len:
        # Take the span with the smaller start
        if a[a_index] < b[b_index]:
            x = a[a_index]
            y = a[a_index + 1]
            a_index += 2
        else:
            x = b[b_index]
            y = b[b_index + 1]
            b_index += 2

        # Extend the running end while either side keeps touching it
        repeat = True
        while repeat:
            repeat = False

            while a_index < a_len and a[a_index] <= y:
                y = max(y, a[a_index + 1])
                a_index += 2
                repeat = True

            while b_index < b_len and b[b_index] <= y:
                y = max(y, b[b_index + 1])
                b_index += 2
                repeat = True

        output.append(x)
        output.append(y)

    if a_index < a_len:
        return append(output, a, a_index)
    if b_index < b_len:
        return append(output, b, b_index)
    return output


def intersect_op(a: SpanArray, b: SpanArray) -> SpanArray:
    """Return ``a AND b``."""
    output: List[float] = []

    a_len = len(a)
    b_len = len(b)
    if not a_len or not b_len:
        return output

    if a is b:
        return append(output, a)

    a_index = 0
    b_index = 0

    while a_index < a_len and b_index < b_len:
        a0 = a[a_index]
        a1 = a[a_index + 1]
        b0 = b[b_index]
        b1 = b[b_index + 1]

        x = max(a0, b0)
        y = min(a1, b1)
        if x < y:
            output.append(x)
            output.append(y)

        # Advance whichever span ends first; both when they end together
        if a1 <= b1:
            a_index += 2
        if b1 <= a1:
            b_index += 2

    return output


def xor_op(a: SpanArray, b: SpanArray) -> SpanArray:
    """Return ``a XOR b`` (symmetric difference)."""
    output: List[float] = []

    if a is b:
        return output

    a_len = len(a)
    b_len = len(b)

    if not a_len:
        return append(output, b)
    if not b_len:
        return append(output, a)

    a_index = 0
    b_index = 0

    a0 = a[0]
    a1 = a[1]
    b0 = b[0]
    b1 = b[1]

    # Everything below ``pos`` has already been emitted or discarded
    pos = min(a0, b0)

    while True:
        if a1 <= b0:
            # Only-a region
            x = max(a0, pos)
            y = a1
            pos = a1
        elif b1 <= a0:
            # Only-b region
            x = max(b0, pos)
            y = b1
            pos = b1
        else:
            # Leading one-sided part, then skip the overlap
            x = pos
            y = max(a0, b0)
            pos = min(a1, b1)

        if x < y:
            _emit(output, x, y)

        if a1 <= pos:
            a_index += 2
        if b1 <= pos:
            b_index += 2

        if a_index >= a_len:
            if b_index >= b_len:
                return output
            _emit(output, max(b[b_index], pos), b[b_index + 1])
            return append(output, b, b_index + 2)

        a0 = a[a_index]
        a1 = a[a_index + 1]

        if b_index >= b_len:
            _emit(output, max(a0, pos), a1)
            return append(output, a, a_index + 2)

        b0 = b[b_index]
        b1 = b[b_index + 1]

        pos = max(pos, min(a0, b0))


def subtract_op(a: SpanArray, b: SpanArray) -> SpanArray:
    """Return ``a SUB b``: the points of ``a`` not covered by ``b``."""
    output: List[float] = []

    a_len = len(a)
    b_len = len(b)

    if not a_len:
        return output
    if not b_len:
        return append(output, a)
    if a is b:
        return output

    a_index = 0
    b_index = 0

    a0 = a[0]
    a1 = a[1]
    b0 = b[0]
    b1 = b[1]

    pos = a0

    while True:
        if a1 <= b0:
            # Rest of the current a span lies before the b span
            if pos < a1:
                output.append(pos)
                output.append(a1)
            pos = a1
        elif a0 >= b0:
            # a span starts inside (or after) the b span; nothing survives yet
            pos = b1
        else:
            # Keep the part of a in front of the b span
            output.append(pos)
            output.append(b0)
            pos = b1

        while a1 <= pos:
            a_index += 2
            if a_index >= a_len:
                return output
            a0 = a[a_index]
            a1 = a[a_index + 1]

        if b1 <= pos:
            b_index += 2
            if b_index >= b_len:
                # b is exhausted, flush the rest of a clipped to ``pos``
                while a_index < a_len:
                    x = max(a[a_index], pos)
                    y = a[a_index + 1]
                    if x < y:
                        output.append(x)
                        output.append(y)
                    a_index += 2
                return output
            b0 = b[b_index]
            b1 = b[b_index + 1]

        pos = max(pos, a0)
