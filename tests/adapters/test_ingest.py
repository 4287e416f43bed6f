"""Tests for ingest.py - raw input classification and conversion."""

from collections import namedtuple
from dataclasses import dataclass

import pytest

from spanset.adapters.ingest import (
    END_KEYS,
    START_KEYS,
    RawArrayPair,
    RawPair,
    RawRecord,
    classify,
    detect_key,
    ingest,
)
from spanset.exceptions import InvalidBoundError, InvalidShapeError


@dataclass
class Interval:
    start: float
    end: float


Window = namedtuple("Window", ["a", "b"])


# =============================================================================
# CLASSIFY TESTS
# =============================================================================

class TestClassify:
    """Tests for classify function."""

    def test_empty_is_flat(self):
        assert isinstance(classify([]), RawPair)

    def test_numbers_are_flat(self):
        assert isinstance(classify([1, 2, 4, 5]), RawPair)
        assert isinstance(classify((1.5, 2)), RawPair)

    def test_sequences_are_pairs(self):
        assert isinstance(classify([[1, 2], [4, 5]]), RawArrayPair)
        assert isinstance(classify([(1, 2)]), RawArrayPair)

    def test_mappings_are_records(self):
        raw = classify([{"from": 1, "to": 2}], "from", "to")

        assert isinstance(raw, RawRecord)
        assert raw.start_key == "from"
        assert raw.end_key == "to"

    def test_objects_are_records(self):
        assert isinstance(classify([Interval(1, 2)]), RawRecord)

    def test_generator_materialized(self):
        raw = classify(x for x in (1, 2))

        assert isinstance(raw, RawPair)
        assert list(raw.values) == [1, 2]

    @pytest.mark.parametrize("src", ["1,2", b"12", {"from": 1, "to": 2}, 5, None])
    def test_unsupported_containers(self, src):
        with pytest.raises(InvalidShapeError):
            classify(src)

    @pytest.mark.parametrize("first", ["1", None])
    def test_unsupported_first_element(self, first):
        with pytest.raises(InvalidShapeError):
            classify([first, 2])

    def test_shape_error_is_type_error(self):
        with pytest.raises(TypeError):
            classify("0,1")


# =============================================================================
# KEY DETECTION TESTS
# =============================================================================

class TestDetectKey:
    """Tests for detect_key function."""

    @pytest.mark.parametrize("record,start,end", [
        ({"from": 0, "to": 1}, "from", "to"),
        ({"start": 0, "end": 1}, "start", "end"),
        ({"a": 0, "b": 1}, "a", "b"),
        ({"from": 0, "start": 5, "to": 1}, "from", "to"),
    ])
    def test_mapping_keys(self, record, start, end):
        assert detect_key(record, START_KEYS) == start
        assert detect_key(record, END_KEYS) == end

    def test_attribute_keys(self):
        assert detect_key(Interval(0, 1), START_KEYS) == "start"
        assert detect_key(Window(0, 1), END_KEYS) == "b"

    def test_missing_key_raises(self):
        with pytest.raises(InvalidShapeError) as exc_info:
            detect_key({"lo": 0, "hi": 1}, START_KEYS)

        assert "from | start | a" in str(exc_info.value)


# =============================================================================
# INGEST TESTS
# =============================================================================

class TestIngest:
    """Tests for ingest function."""

    def test_flat_canonical_returned_unchanged(self):
        data = [1, 2, 4, 5]

        assert ingest(data) is data

    def test_flat_normalized(self):
        assert ingest([4, 5, 2, 1]) == [1, 2, 4, 5]

    def test_pairs(self):
        assert ingest([[1, 2], [4, 5]]) == [1, 2, 4, 5]

    def test_pairs_normalized(self):
        assert ingest([(5, 4), [0, 1], (1, 2)]) == [0, 2, 4, 5]

    def test_from_to_records(self):
        records = [
            {"from": 1, "to": 2},
            {"from": 4, "to": 5},
            {"from": 10, "to": 19},
            {"from": 20, "to": 24},
        ]

        assert ingest(records) == [1, 2, 4, 5, 10, 19, 20, 24]

    def test_start_end_records(self):
        records = [{"start": 0, "end": 1}, {"start": 5, "end": 6}]

        assert ingest(records) == [0, 1, 5, 6]

    def test_a_b_records(self):
        assert ingest([{"a": 3, "b": 1}]) == [1, 3]

    def test_object_records(self):
        assert ingest([Interval(1, 2), Interval(4, 5)]) == [1, 2, 4, 5]
        assert ingest([Window(0, 1)]) == [0, 1]

    def test_mixed_record_layouts(self):
        """Keys are re-detected for records that lack the current ones."""
        records = [{"from": 0, "to": 1}, {"start": 5, "end": 6}, Interval(8, 9)]

        assert ingest(records) == [0, 1, 5, 6, 8, 9]

    def test_explicit_keys(self):
        records = [{"lo": 0, "hi": 1, "from": 50, "to": 60}]

        assert ingest(records, "lo", "hi") == [0, 1]

    def test_explicit_key_missing_falls_back(self):
        assert ingest([{"from": 0, "to": 1}], "lo", "hi") == [0, 1]

    def test_record_without_keys_raises(self):
        with pytest.raises(InvalidShapeError):
            ingest([{"lo": 0, "hi": 1}])

    @pytest.mark.parametrize("pairs", [
        [[1, 2, 3]],
        [[1]],
        [[1, 2], 3],
        [[1, 2], "ab"],
    ])
    def test_malformed_pairs_raise(self, pairs):
        with pytest.raises(InvalidShapeError):
            ingest(pairs)

    def test_pair_error_names_index(self):
        with pytest.raises(InvalidShapeError, match="Span #1 is not a pair"):
            ingest([[0, 1], [1, 2, 3]])

    def test_bad_bound_in_pairs(self):
        with pytest.raises(InvalidBoundError):
            ingest([[0, "1"]])

    def test_bad_bound_in_records(self):
        with pytest.raises(InvalidBoundError):
            ingest([{"from": 0, "to": None}])

    def test_bool_bounds_rejected(self):
        with pytest.raises(InvalidBoundError):
            ingest([True, 2])

    def test_strict_passed_through(self):
        with pytest.raises(InvalidBoundError):
            ingest([[1, 1]], strict=True)

        assert ingest([[1, 1]], strict=False) == []

    def test_range_input(self):
        assert ingest(range(4)) == [0, 1, 2, 3]
