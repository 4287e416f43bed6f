"""
spanset core engine.

Pure functions over canonical span arrays: flat lists ``[b0, b1, b2, b3, ...]``
describing the half-open spans ``[b0, b1), [b2, b3), ...``.

Usage:
    from spanset.core import normalize, fold, Operation

    a = normalize([3, 4, 1, 2, 2, 3])          # [1, 4]
    b = normalize([0, 1, 5, 6])
    fold(Operation.UNION, [a, b])              # [0, 4, 5, 6]
"""

from .types import (
    SpanArray,
    Span,
    TestResult,
    is_number,
    is_finite_number,
)

from .normalizer import (
    is_canonical,
    check_bound,
    normalize,
    normalize_pairs,
    merge_chunks,
)

from .locator import closest_index

from .containment import (
    classify_value,
    classify_spans,
)

from .sweep import (
    union_op,
    intersect_op,
    xor_op,
    subtract_op,
)

from .affine import (
    shift,
    scale,
    shift_inplace,
    scale_inplace,
)

from .dispatch import (
    Operation,
    is_disjoint,
    merge_disjoint,
    dispatch,
    fold,
    fold_inplace,
)

__all__ = [
    # Types
    "SpanArray",
    "Span",
    "TestResult",
    "is_number",
    "is_finite_number",
    # Normalization
    "is_canonical",
    "check_bound",
    "normalize",
    "normalize_pairs",
    "merge_chunks",
    # Containment
    "closest_index",
    "classify_value",
    "classify_spans",
    # Sweeps
    "union_op",
    "intersect_op",
    "xor_op",
    "subtract_op",
    # Transforms
    "shift",
    "scale",
    "shift_inplace",
    "scale_inplace",
    # Dispatch
    "Operation",
    "is_disjoint",
    "merge_disjoint",
    "dispatch",
    "fold",
    "fold_inplace",
]
