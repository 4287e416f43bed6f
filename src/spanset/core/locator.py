"""Binary search over canonical span arrays."""

from .types import SpanArray


def closest_index(data: SpanArray, value: float) -> int:
    """
    Find the even index of the span closest to ``value``.

    The array is searched as ``len(data) // 2`` blocks of two bounds. If a
    span contains ``value`` its index is returned; otherwise the returned
    span never lies past the first span ending after ``value``, so callers
    can walk forward from it.

    ``data`` must be canonical and non-empty.
    """
    length = len(data)

    if value <= data[1]:
        return 0

    if value >= data[length - 2]:
        return length - 2

    base = 0
    i = 0
    lim = length >> 1

    while lim:
        i = base + (lim & ~1)

        if data[i + 1] <= value:
            base = i + 2
            lim -= 1
        elif data[i] <= value:
            return i

        lim >>= 1

    return i
