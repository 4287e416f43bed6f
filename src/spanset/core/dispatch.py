"""Fast-path dispatch for the binary span operators.

Before running an O(n + m) sweep, the dispatcher looks at the operand
extremes. When either operand is empty or the two are wholly disjoint, the
result is known without sweeping:

- union / xor: ordered concatenation, coalescing a touching boundary
- intersect:   empty
- subtract:    the left operand unchanged

The shortcut results are identical to what the sweep would produce.
Multi-operand calls fold left to right through the dispatcher.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional

from spanset.config import get_settings

from .sweep import intersect_op, subtract_op, union_op, xor_op
from .types import SpanArray

__all__ = [
    "Operation",
    "is_disjoint",
    "merge_disjoint",
    "merge_disjoint_inplace",
    "dispatch",
    "fold",
    "fold_inplace",
]

logger = logging.getLogger(__name__)

BinaryOp = Callable[[SpanArray, SpanArray], SpanArray]


class Operation(Enum):
    """Binary set operations understood by the dispatcher."""
    UNION = "union"
    INTERSECT = "intersect"
    XOR = "xor"
    SUBTRACT = "subtract"


def is_disjoint(a: SpanArray, b: SpanArray) -> bool:
    """True if either array is empty or their extremes don't overlap."""
    return not a or not b or a[0] >= b[-1] or a[-1] <= b[0]


# =============================================================================
# SPECIAL CASES
# =============================================================================


def _concat_into(output: List[float], right: SpanArray) -> List[float]:
    """Append ``right`` (entirely at or after ``output``) to ``output``."""
    if output and right and output[-1] == right[0]:
        output[-1] = right[1]
        output.extend(right[2:])
    else:
        output.extend(right)
    return output


def merge_disjoint(a: SpanArray, b: SpanArray) -> SpanArray:
    """Return a new array holding two disjoint arrays in order."""
    if not a:
        return list(b)
    if not b:
        return list(a)
    if b[0] >= a[-1]:
        return _concat_into(list(a), b)
    return _concat_into(list(b), a)


def merge_disjoint_inplace(a: SpanArray, b: SpanArray) -> SpanArray:
    """Merge the disjoint array ``b`` into ``a`` and return ``a``."""
    if not b:
        return a
    if not a or b[0] >= a[-1]:
        return _concat_into(a, b)

    # Prepend with one slice assignment
    if a[0] == b[-1]:
        a[0] = b[-2]
        a[:0] = b[:-2]
    else:
        a[:0] = b
    return a


def _clear(a: SpanArray, b: SpanArray) -> SpanArray:
    return []


def _clear_inplace(a: SpanArray, b: SpanArray) -> SpanArray:
    a.clear()
    return a


def _keep(a: SpanArray, b: SpanArray) -> SpanArray:
    return list(a)


def _keep_inplace(a: SpanArray, b: SpanArray) -> SpanArray:
    return a


class _Handlers(NamedTuple):
    regular: BinaryOp
    special: BinaryOp
    special_inplace: BinaryOp


_HANDLERS: Dict[Operation, _Handlers] = {
    Operation.UNION: _Handlers(union_op, merge_disjoint, merge_disjoint_inplace),
    Operation.INTERSECT: _Handlers(intersect_op, _clear, _clear_inplace),
    Operation.XOR: _Handlers(xor_op, merge_disjoint, merge_disjoint_inplace),
    Operation.SUBTRACT: _Handlers(subtract_op, _keep, _keep_inplace),
}


# =============================================================================
# DISPATCH
# =============================================================================


def _use_fast_paths(fast_paths: Optional[bool]) -> bool:
    if fast_paths is None:
        return get_settings().engine.fast_paths
    return fast_paths


def dispatch(
    op: Operation,
    a: SpanArray,
    b: SpanArray,
    *,
    fast_paths: Optional[bool] = None,
) -> SpanArray:
    """
    Apply ``op`` to two canonical arrays, returning a new array.

    Args:
        op: The operation to apply.
        a: Left operand (never modified).
        b: Right operand (never modified).
        fast_paths: Allow the disjoint/empty shortcuts. Defaults to
                    ``engine.fast_paths`` from settings.
    """
    handlers = _HANDLERS[op]
    if _use_fast_paths(fast_paths) and is_disjoint(a, b):
        logger.debug("Fast path taken", extra={"operation": op.value})
        return handlers.special(a, b)
    return handlers.regular(a, b)


def fold(
    op: Operation,
    operands: Iterable[SpanArray],
    *,
    fast_paths: Optional[bool] = None,
) -> SpanArray:
    """
    Fold canonical operands left to right: ``op(op(op(a, b), c), ...)``.

    Operands are never modified and the result never shares storage with
    any of them. No operands yields an empty array.
    """
    fast_paths = _use_fast_paths(fast_paths)

    iterator = iter(operands)
    first = next(iterator, None)
    if first is None:
        return []

    data = first
    for other in iterator:
        data = dispatch(op, data, other, fast_paths=fast_paths)

    if data is first:
        data = list(first)
    return data


def fold_inplace(
    op: Operation,
    data: SpanArray,
    operands: Iterable[SpanArray],
    *,
    fast_paths: Optional[bool] = None,
) -> SpanArray:
    """
    Fold ``operands`` into the canonical array ``data``, modifying it.

    ``data`` stays the same list object; its contents are replaced.
    """
    handlers = _HANDLERS[op]
    fast_paths = _use_fast_paths(fast_paths)

    # An operand that is ``data`` itself keeps its value from before the fold
    operands = [list(other) if other is data else other for other in operands]

    for other in operands:
        if fast_paths and is_disjoint(data, other):
            logger.debug("Fast path taken", extra={"operation": op.value})
            result = handlers.special_inplace(data, other)
        else:
            result = handlers.regular(data, other)

        if result is not data:
            data[:] = result

    return data
