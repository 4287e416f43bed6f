"""
SpanSet: a mutable handle around a canonical span array.

Module-level functions are pure: they accept anything ``SpanSet`` accepts and
return a new ``SpanSet``. Methods named after an operation modify the handle
in place and return it, so calls can be chained:

    from spanset import SpanSet, union

    a = SpanSet([0, 1, 10, 11])
    a.union([1, 2]).subtract([10, 10.5])   # a is now [0, 2, 10.5, 11]

    b = union([0, 1], [[5, 6]], [{"start": 1, "end": 2}])   # [0, 2, 5, 6]
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

from spanset.adapters.export import to_pairs, to_records, to_string
from spanset.adapters.ingest import ingest
from spanset.core.affine import scale as scale_op
from spanset.core.affine import scale_inplace
from spanset.core.affine import shift as shift_op
from spanset.core.affine import shift_inplace
from spanset.core.containment import classify_spans, classify_value
from spanset.core.dispatch import Operation, fold, fold_inplace
from spanset.core.normalizer import check_bound, is_canonical, normalize
from spanset.core.types import Span, SpanArray, TestResult, is_number
from spanset.exceptions import InvalidShapeError, SpanSetError

__all__ = [
    "SpanSet",
    "wrap",
    "equals",
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
]


def _data_from_arg(src: Any, start_key: Optional[str] = None, end_key: Optional[str] = None) -> SpanArray:
    """Canonical array for ``src``; a SpanSet hands out its own storage."""
    if isinstance(src, SpanSet):
        return src.data
    return ingest(src, start_key, end_key)


class SpanSet:
    """
    A set of half-open numeric spans kept in canonical form.

    Attributes:
        data: The canonical backing list. It is shared, not copied: altering
              it directly can break the canonical invariants.
    """

    __slots__ = ("data",)
    __hash__ = None  # mutable

    def __init__(
        self,
        src: Any = None,
        start_key: Optional[str] = None,
        end_key: Optional[str] = None,
    ):
        """
        Args:
            src: Another SpanSet (copied), flat bounds, pairs or records.
                 None gives an empty set.
            start_key: Record field holding span starts (auto-detected
                       when omitted).
            end_key: Record field holding span ends (auto-detected when
                     omitted).
        """
        if src is None:
            data: SpanArray = []
        elif isinstance(src, SpanSet):
            data = list(src.data)
        else:
            data = ingest(src, start_key, end_key)
            if data is src:
                data = list(data)
        self.data = data

    @classmethod
    def _adopt(cls, data: SpanArray) -> "SpanSet":
        instance = cls.__new__(cls)
        instance.data = data
        return instance

    @classmethod
    def wrap(cls, data: SpanArray) -> "SpanSet":
        """
        Build a SpanSet reusing ``data`` as its backing list.

        Canonical lists are adopted without copying; anything else is
        normalized into a new list first.
        """
        return cls._adopt(normalize(data))

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def get_data(self) -> SpanArray:
        return self.data

    def to_packed(self) -> List[float]:
        """Return a copy of the flat bounds."""
        return list(self.data)

    def to_pairs(self) -> List[Tuple[float, float]]:
        return to_pairs(self.data)

    def to_records(
        self,
        start_key: Optional[str] = None,
        end_key: Optional[str] = None,
    ) -> List[Dict[str, float]]:
        return to_records(self.data, start_key, end_key)

    def spans(self) -> Iterator[Span]:
        data = self.data
        for i in range(0, len(data), 2):
            yield Span(data[i], data[i + 1])

    def __iter__(self) -> Iterator[Span]:
        return self.spans()

    def __str__(self) -> str:
        return to_string(self.data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def equals(self, other: Any) -> bool:
        """Check if ``other`` covers exactly the same points."""
        if self is other:
            return True
        return self.data == _data_from_arg(other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (SpanSet, list, tuple)):
            return NotImplemented
        try:
            return self.equals(other)
        except SpanSetError:
            return NotImplemented

    def is_empty(self) -> bool:
        return not self.data

    def __bool__(self) -> bool:
        return bool(self.data)

    def count(self) -> int:
        """Number of spans; ``[1, 2]`` holds one."""
        return len(self.data) >> 1

    def __len__(self) -> int:
        return len(self.data) >> 1

    def copy(self) -> "SpanSet":
        return self._adopt(list(self.data))

    __copy__ = copy

    def clear(self) -> "SpanSet":
        self.data.clear()
        return self

    def test(self, value: Any) -> TestResult:
        """
        Check whether a scalar or a span set is covered by this set.

        Returns:
            TestResult.NONE, TestResult.FULL or TestResult.PART (never PART
            for a scalar).
        """
        if is_number(value):
            return classify_value(self.data, value)
        return classify_spans(self.data, _data_from_arg(value))

    def __contains__(self, value: Any) -> bool:
        return self.test(value) is TestResult.FULL

    # -------------------------------------------------------------------------
    # In-place transforms and set operations
    # -------------------------------------------------------------------------

    def shift(self, offset: float) -> "SpanSet":
        """Move every span by ``offset`` in place."""
        shift_inplace(self.data, offset)
        return self

    def scale(self, factor: float) -> "SpanSet":
        """Multiply every bound by ``factor`` in place (factor must be >= 0)."""
        scale_inplace(self.data, factor)
        return self

    def _fold(self, op: Operation, others: Tuple[Any, ...]) -> "SpanSet":
        fold_inplace(op, self.data, [_data_from_arg(other) for other in others])
        return self

    def union(self, *others: Any) -> "SpanSet":
        """``self = self OR others[0] OR others[1] ...``"""
        return self._fold(Operation.UNION, others)

    def intersect(self, *others: Any) -> "SpanSet":
        """``self = self AND others[0] AND others[1] ...``"""
        return self._fold(Operation.INTERSECT, others)

    def xor(self, *others: Any) -> "SpanSet":
        """``self = self XOR others[0] XOR others[1] ...``"""
        return self._fold(Operation.XOR, others)

    def subtract(self, *others: Any) -> "SpanSet":
        """``self = self SUB others[0] SUB others[1] ...``"""
        return self._fold(Operation.SUBTRACT, others)

    or_ = union
    and_ = intersect
    sub = subtract

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __or__(self, other: Any) -> "SpanSet":
        return union(self, other)

    def __and__(self, other: Any) -> "SpanSet":
        return intersect(self, other)

    def __xor__(self, other: Any) -> "SpanSet":
        return xor(self, other)

    def __sub__(self, other: Any) -> "SpanSet":
        return subtract(self, other)

    def __ror__(self, other: Any) -> "SpanSet":
        return union(other, self)

    def __rand__(self, other: Any) -> "SpanSet":
        return intersect(other, self)

    def __rxor__(self, other: Any) -> "SpanSet":
        return xor(other, self)

    def __rsub__(self, other: Any) -> "SpanSet":
        return subtract(other, self)

    def __ior__(self, other: Any) -> "SpanSet":
        return self.union(other)

    def __iand__(self, other: Any) -> "SpanSet":
        return self.intersect(other)

    def __ixor__(self, other: Any) -> "SpanSet":
        return self.xor(other)

    def __isub__(self, other: Any) -> "SpanSet":
        return self.subtract(other)


# =============================================================================
# PURE FUNCTIONS
# =============================================================================


def wrap(data: SpanArray) -> SpanSet:
    """Build a SpanSet adopting ``data`` without copying when it is canonical."""
    return SpanSet.wrap(data)


def equals(a: Any, b: Any) -> bool:
    """Check if two span sets (or compatible inputs) are equivalent."""
    return _data_from_arg(a) == _data_from_arg(b)


def test(a: Any, value: Any) -> TestResult:
    """
    Check whether ``a`` contains a scalar ``value`` or a span set ``value``.

    Returns:
        TestResult.NONE, TestResult.FULL or TestResult.PART.
    """
    if is_number(value):
        if isinstance(a, SpanSet):
            return classify_value(a.data, value)

        if isinstance(a, (list, tuple)) and (not a or is_number(a[0])):
            if is_canonical(a):
                return classify_value(a, value)
            # One scalar: scan the raw pairs without normalizing
            return _scan_value(a, value)

        return classify_value(_data_from_arg(a), value)

    data = _data_from_arg(a)
    return classify_spans(data, _data_from_arg(value))


# Not a pytest test function
test.__test__ = False


def _scan_value(bounds, value: float) -> TestResult:
    if len(bounds) & 1:
        raise InvalidShapeError(
            "Flat span data must hold an even number of bounds",
            expected="even length",
            got=f"length {len(bounds)}",
        )

    for i in range(0, len(bounds), 2):
        a = check_bound(bounds[i], i)
        b = check_bound(bounds[i + 1], i + 1)
        if a > b:
            a, b = b, a
        if a <= value < b:
            return TestResult.FULL
    return TestResult.NONE


def shift(a: Any, offset: float) -> SpanSet:
    """Return a new SpanSet with every span of ``a`` moved by ``offset``."""
    return SpanSet._adopt(shift_op(_data_from_arg(a), offset))


def scale(a: Any, factor: float) -> SpanSet:
    """Return a new SpanSet with every bound of ``a`` multiplied by ``factor``."""
    return SpanSet._adopt(scale_op(_data_from_arg(a), factor))


def _fold(op: Operation, operands: Tuple[Any, ...]) -> SpanSet:
    return SpanSet._adopt(fold(op, [_data_from_arg(x) for x in operands]))


def union(*operands: Any) -> SpanSet:
    """Return ``a OR b OR ...`` as a new SpanSet."""
    return _fold(Operation.UNION, operands)


def intersect(*operands: Any) -> SpanSet:
    """Return ``a AND b AND ...`` as a new SpanSet."""
    return _fold(Operation.INTERSECT, operands)


def xor(*operands: Any) -> SpanSet:
    """Return ``a XOR b XOR ...`` as a new SpanSet."""
    return _fold(Operation.XOR, operands)


def subtract(*operands: Any) -> SpanSet:
    """Return ``a SUB b SUB ...`` as a new SpanSet."""
    return _fold(Operation.SUBTRACT, operands)


or_ = union
and_ = intersect
sub = subtract
