"""Ingestion of raw span data.

Raw input comes in three shapes, resolved once by ``classify`` so that the
engine only ever sees flat numeric pairs:

- RawPair:       flat bounds          [1, 2, 4, 5]
- RawArrayPair:  pairs                [[1, 2], (4, 5)]
- RawRecord:     records with fields  [{"from": 1, "to": 2}, Interval(start=4, end=5)]

Record fields are detected per record when not given explicitly: the start
is the first of ``from``, ``start``, ``a`` present, the end the first of
``to``, ``end``, ``b``. Records can be mappings or plain objects.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, Union

from spanset.core.normalizer import normalize, normalize_pairs
from spanset.core.types import SpanArray, is_number
from spanset.exceptions import InvalidShapeError

__all__ = [
    "START_KEYS",
    "END_KEYS",
    "RawPair",
    "RawArrayPair",
    "RawRecord",
    "RawInput",
    "classify",
    "detect_key",
    "ingest",
]

START_KEYS: Tuple[str, ...] = ("from", "start", "a")
END_KEYS: Tuple[str, ...] = ("to", "end", "b")


@dataclass(frozen=True)
class RawPair:
    """Flat sequence of bounds, two per span."""
    values: Sequence[Any]

    def to_spans(self, strict: Optional[bool] = None) -> SpanArray:
        return normalize(self.values, strict=strict)


@dataclass(frozen=True)
class RawArrayPair:
    """Sequence of two-element sequences."""
    pairs: Sequence[Any]

    def iter_pairs(self) -> Iterator[Tuple[Any, Any]]:
        for index, pair in enumerate(self.pairs):
            if not _is_sequence(pair) or len(pair) != 2:
                raise InvalidShapeError(
                    f"Span #{index} is not a pair",
                    expected="sequence of length 2",
                    got=_describe(pair),
                )
            yield pair[0], pair[1]

    def to_spans(self, strict: Optional[bool] = None) -> SpanArray:
        return normalize_pairs(self.iter_pairs(), strict=strict)


@dataclass(frozen=True)
class RawRecord:
    """Sequence of records (mappings or objects) with start/end fields."""
    records: Sequence[Any]
    start_key: Optional[str] = None
    end_key: Optional[str] = None

    def iter_pairs(self) -> Iterator[Tuple[Any, Any]]:
        start_key = self.start_key or START_KEYS[0]
        end_key = self.end_key or END_KEYS[0]

        for record in self.records:
            # Keep the last working key, re-detect when a record lacks it
            if not _has_field(record, start_key):
                start_key = detect_key(record, START_KEYS)
            if not _has_field(record, end_key):
                end_key = detect_key(record, END_KEYS)
            yield _get_field(record, start_key), _get_field(record, end_key)

    def to_spans(self, strict: Optional[bool] = None) -> SpanArray:
        return normalize_pairs(self.iter_pairs(), strict=strict)


RawInput = Union[RawPair, RawArrayPair, RawRecord]


def _is_sequence(value) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _describe(value) -> str:
    if _is_sequence(value):
        return f"{type(value).__name__} of length {len(value)}"
    return type(value).__name__


def _has_field(record, key: str) -> bool:
    if isinstance(record, Mapping):
        return key in record
    return hasattr(record, key)


def _get_field(record, key: str):
    if isinstance(record, Mapping):
        return record[key]
    return getattr(record, key)


def detect_key(record, candidates: Sequence[str]) -> str:
    """
    Return the first of ``candidates`` present on ``record``.

    Raises:
        InvalidShapeError: None of the candidates is present.
    """
    for key in candidates:
        if _has_field(record, key):
            return key

    raise InvalidShapeError(
        "Couldn't detect which field describes the span start/end",
        expected=" | ".join(candidates),
        got=_describe(record),
    )


def classify(
    src: Any,
    start_key: Optional[str] = None,
    end_key: Optional[str] = None,
) -> RawInput:
    """
    Resolve raw input into one of the tagged input shapes.

    The first element decides the shape: a number means flat bounds, a
    sequence means pairs, anything else is treated as a record.

    Raises:
        InvalidShapeError: ``src`` is not a sequence of bounds, pairs or records.
    """
    if isinstance(src, (str, bytes, bytearray, Mapping)) or not isinstance(src, Iterable):
        raise InvalidShapeError(
            "Expected a sequence of bounds, pairs or records",
            expected="sequence",
            got=type(src).__name__,
        )

    if not isinstance(src, Sequence):
        src = list(src)

    if not src:
        return RawPair(src)

    first = src[0]
    if is_number(first) or isinstance(first, bool):
        # Bools are rejected bound by bound in the normalizer
        return RawPair(src)
    if _is_sequence(first):
        return RawArrayPair(src)
    if isinstance(first, (str, bytes, bytearray)) or first is None:
        raise InvalidShapeError(
            "Expected a number, pair or record as span data",
            expected="number | pair | record",
            got=type(first).__name__,
        )
    return RawRecord(src, start_key, end_key)


def ingest(
    src: Any,
    start_key: Optional[str] = None,
    end_key: Optional[str] = None,
    *,
    strict: Optional[bool] = None,
) -> SpanArray:
    """
    Convert raw input into a canonical span array.

    Flat input that is already canonical is returned as the same list.
    """
    return classify(src, start_key, end_key).to_spans(strict=strict)
