"""Tests for normalizer.py - canonical form for span arrays.

Tests cover:
- Canonical form detection
- Swapping, coalescing and dropping of raw pairs
- Out-of-order input and chunk merging
- Bound validation and strict degenerate mode
"""

import itertools
import math

import pytest

from spanset.core.normalizer import (
    check_bound,
    is_canonical,
    merge_chunks,
    normalize,
    normalize_pairs,
)
from spanset.exceptions import InvalidBoundError, InvalidShapeError


# =============================================================================
# IS_CANONICAL TESTS
# =============================================================================

class TestIsCanonical:
    """Tests for is_canonical function."""

    @pytest.mark.parametrize("data", [
        [],
        [1, 2],
        [1, 2, 4, 5, 10, 19, 20, 24],
        [-5.5, -1.25, 0, 0.5],
        (1, 2, 3, 4),
    ])
    def test_canonical_inputs(self, data):
        """Sorted, separated, non-degenerate spans are canonical."""
        assert is_canonical(data) is True

    @pytest.mark.parametrize("data", [
        [1, 2, 2, 3],       # touching
        [1, 3, 2, 4],       # overlapping
        [3, 4, 1, 2],       # unsorted
        [2, 1],             # reversed
        [1, 1],             # degenerate
        [1, 2, 3],          # odd length
    ])
    def test_non_canonical_inputs(self, data):
        """Touching, overlapping, unsorted or malformed data is not canonical."""
        assert is_canonical(data) is False

    @pytest.mark.parametrize("data", [
        [0, math.nan],
        [0, math.inf],
        [-math.inf, 0],
        ["0", 1],
        [True, 2],
        [None, 1],
    ])
    def test_non_finite_or_non_numeric_bounds(self, data):
        """Only finite real numbers can appear in canonical data."""
        assert is_canonical(data) is False


# =============================================================================
# NORMALIZE TESTS
# =============================================================================

class TestNormalize:
    """Tests for normalize function."""

    def test_canonical_list_returned_unchanged(self):
        """A canonical list is returned as the same object."""
        for packed in ([], [1, 2], [1, 2, 4, 5, 10, 19, 20, 24]):
            assert normalize(packed) is packed

    def test_canonical_tuple_converted_to_list(self):
        """Canonical non-list input is copied into a list."""
        result = normalize((1, 2, 4, 5))

        assert result == [1, 2, 4, 5]
        assert isinstance(result, list)

    def test_touching_spans_coalesce(self):
        """[1, 2) and [2, 3) become [1, 3)."""
        assert normalize([1, 2, 2, 3]) == [1, 3]

    def test_touching_spans_in_reverse_order_coalesce(self):
        """Prepending a touching span extends the first span."""
        assert normalize([2, 3, 1, 2]) == [1, 3]

    def test_unsorted_spans_are_sorted(self):
        """Spans before the current run are prepended."""
        assert normalize([3, 4, 1, 2]) == [1, 2, 3, 4]

    def test_enclosing_span_absorbs_previous(self):
        """A late span covering everything collapses the result."""
        assert normalize([1, 2, 3, 4, -1, 5]) == [-1, 5]

    def test_reversed_pair_swapped(self):
        """A pair with a > b is swapped silently."""
        assert normalize([5, 1]) == [1, 5]
        assert normalize([0, 1, 5, 3]) == [0, 1, 3, 5]

    def test_degenerate_pair_dropped(self):
        """A pair with a == b covers nothing and is dropped."""
        assert normalize([1, 1, 2, 3]) == [2, 3]
        assert normalize([4, 4]) == []

    def test_overlapping_spans_merge(self):
        """Overlapping spans merge into their union."""
        assert normalize([0, 5, 3, 8]) == [0, 8]
        assert normalize([3, 8, 0, 5]) == [0, 8]

    def test_contained_span_absorbed(self):
        """A span inside an earlier one adds nothing."""
        assert normalize([0, 10, 2, 3]) == [0, 10]

    def test_multiple_out_of_order_chunks(self):
        """Input that breaks into several chunks is merged back together."""
        raw = [10, 11, 0, 1, 5, 6, 20, 21, 3, 4]

        assert normalize(raw) == [0, 1, 3, 4, 5, 6, 10, 11, 20, 21]

    def test_prepend_after_prepend(self):
        """Several prepends keep their order."""
        raw = [10, 11, 7, 8, 4, 5, 1, 2]

        assert normalize(raw) == [1, 2, 4, 5, 7, 8, 10, 11]

    def test_prepend_coalesces_with_prepended_front(self):
        """A prepend touching an earlier prepend extends it."""
        assert normalize([10, 11, 7, 8, 5, 7]) == [5, 8, 10, 11]

    def test_order_independence(self):
        """Every permutation of the same pairs yields the same result."""
        pairs = [(0, 2), (2, 3), (5, 6), (-3, -1), (5.5, 9)]
        expected = [-3, -1, 0, 3, 5, 9]

        for perm in itertools.permutations(pairs):
            flat = [v for pair in perm for v in pair]
            assert normalize(flat) == expected

    def test_idempotent(self):
        """Normalizing canonical output again changes nothing."""
        once = normalize([10, 11, 0, 1, 5, 6, 20, 21, 3, 4, 1, 3])

        assert normalize(once) == once
        assert normalize(once) is once

    def test_floats_and_ints_mix(self):
        """Integer and float bounds can be combined."""
        assert normalize([0.5, 1, 1.0, 2.5]) == [0.5, 2.5]

    def test_odd_length_raises(self):
        """Flat data must come in pairs."""
        with pytest.raises(InvalidShapeError):
            normalize([1, 2, 3])

    def test_non_numeric_bound_raises(self):
        """A non-numeric bound raises InvalidBoundError with its index."""
        with pytest.raises(InvalidBoundError) as exc_info:
            normalize([0, 1, "x", 3])

        assert exc_info.value.index == 2
        assert exc_info.value.value == "x"

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_bound_raises(self, bad):
        """NaN and infinities are rejected at ingestion."""
        with pytest.raises(InvalidBoundError):
            normalize([0, bad])

    def test_bool_bound_raises(self):
        """Bools are not accepted as bounds."""
        with pytest.raises(InvalidBoundError):
            normalize([True, 2])

    def test_huge_integer_bound_raises(self):
        """Integers beyond double range are not finite doubles."""
        with pytest.raises(InvalidBoundError):
            normalize([0, 10 ** 400])

    def test_invalid_bound_is_value_error(self):
        """InvalidBoundError can be caught as ValueError."""
        with pytest.raises(ValueError):
            normalize([0, "1"])


# =============================================================================
# STRICT DEGENERATE MODE TESTS
# =============================================================================

class TestStrictDegenerate:
    """Tests for rejecting degenerate pairs."""

    def test_explicit_strict_raises(self):
        """strict=True turns a == b into an error."""
        with pytest.raises(InvalidBoundError) as exc_info:
            normalize([0, 1, 3, 3], strict=True)

        assert exc_info.value.index == 2

    def test_explicit_lenient_drops(self):
        """strict=False drops the pair."""
        assert normalize([0, 1, 3, 3], strict=False) == [0, 1]

    def test_strict_from_settings(self, settings_env):
        """engine.strict_degenerate in settings enables strict mode."""
        settings_env(engine__strict_degenerate="true")

        with pytest.raises(InvalidBoundError):
            normalize([3, 3])

    def test_canonical_input_unaffected_by_strict(self):
        """Canonical data has no degenerate pairs to reject."""
        data = [0, 1, 2, 3]

        assert normalize(data, strict=True) is data


# =============================================================================
# NORMALIZE_PAIRS TESTS
# =============================================================================

class TestNormalizePairs:
    """Tests for normalize_pairs function."""

    def test_accepts_generator(self):
        """Any iterable of pairs works."""
        pairs = ((i, i + 1) for i in (6, 4, 2, 0))

        assert normalize_pairs(pairs) == [0, 1, 2, 3, 4, 5, 6, 7]

    def test_empty(self):
        """No pairs, no spans."""
        assert normalize_pairs([]) == []

    def test_error_index_counts_bounds(self):
        """Error indexes refer to flat bound positions."""
        with pytest.raises(InvalidBoundError) as exc_info:
            normalize_pairs([(0, 1), (2, None)])

        assert exc_info.value.index == 3


# =============================================================================
# MERGE_CHUNKS / CHECK_BOUND TESTS
# =============================================================================

class TestMergeChunks:
    """Tests for merge_chunks function."""

    def test_empty(self):
        assert merge_chunks([]) == []

    def test_single_chunk(self):
        chunk = [0, 1]
        assert merge_chunks([chunk]) is chunk

    def test_touching_chunks_concatenate(self):
        """Chunks that touch are joined into one span."""
        assert merge_chunks([[0, 1], [1, 2], [5, 6]]) == [0, 2, 5, 6]

    def test_overlapping_chunks_use_union(self):
        """Chunks that overlap are merged with a full sweep."""
        assert merge_chunks([[0, 5, 10, 11], [3, 4, 6, 12]]) == [0, 5, 6, 12]

    def test_many_chunks(self):
        """Many descending chunks merge into sorted order."""
        chunks = [[i, i + 1, i + 10, i + 10.5] for i in range(9, -1, -1)]

        result = merge_chunks(chunks)

        expected = [0, 10.5]
        for i in range(11, 20):
            expected.extend([i, i + 0.5])

        assert is_canonical(result)
        assert result == expected


class TestCheckBound:
    """Tests for check_bound function."""

    def test_returns_value(self):
        assert check_bound(1.5, 0) == 1.5

    def test_message_names_type(self):
        with pytest.raises(InvalidBoundError, match="Expected a number, got str"):
            check_bound("1", 0)

    def test_message_names_non_finite(self):
        with pytest.raises(InvalidBoundError, match="finite"):
            check_bound(math.inf, 0)
