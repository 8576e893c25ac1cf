"""Tests for ksum.engine — pair and triple complement-sum search."""

from __future__ import annotations

import math

import pytest

from ksum.engine import (
    DEFAULT_TARGET,
    SUPPORTED_SIZES,
    find_ksum,
    find_pair,
    find_triple,
    get_search,
)
from ksum.exceptions import SearchError
from ksum.types import Match

SAMPLE = [1721, 979, 366, 299, 675, 1456]


class TestFindPair:
    def test_sample(self):
        match = find_pair(SAMPLE)
        assert match == Match((299, 1721))
        assert match.product == 514579

    def test_default_target(self):
        assert DEFAULT_TARGET == 2020

    def test_no_solution_returns_none(self):
        assert find_pair([1, 2, 3]) is None

    def test_empty_input(self):
        assert find_pair([]) is None

    def test_custom_target(self):
        assert find_pair([3, 8, 5], target=8) == Match((5, 3))

    def test_value_does_not_pair_with_itself(self):
        assert find_pair([1010]) is None
        assert find_pair([5, 1010, 7]) is None

    def test_literal_duplicate_pairs(self):
        assert find_pair([1010, 3, 1010]) == Match((1010, 1010))

    def test_first_match_in_scan_wins(self):
        # 1000+1020 completes at index 2, 10+2010 only at index 3
        match = find_pair([1000, 10, 1020, 2010])
        assert match == Match((1020, 1000))

    def test_stops_consuming_at_first_match(self):
        consumed: list[int] = []

        def stream():
            for v in [1, 2019, 5, 6]:
                consumed.append(v)
                yield v

        assert find_pair(stream()) == Match((2019, 1))
        assert consumed == [1, 2019]

    def test_negative_values(self):
        assert find_pair([-5, 10, 2025]) == Match((2025, -5))

    def test_zero_target_with_zero(self):
        assert find_pair([0, 0], target=0) == Match((0, 0))

    def test_deterministic_on_rerun(self):
        assert find_pair(iter(SAMPLE)) == find_pair(iter(SAMPLE))


class TestFindTriple:
    def test_sample(self):
        match = find_triple(SAMPLE)
        assert match is not None
        assert sorted(match.values) == [366, 675, 979]
        assert match.product == 241861950

    def test_outer_value_comes_first(self):
        assert find_triple(SAMPLE) == Match((979, 675, 366))

    def test_no_solution_returns_none(self):
        assert find_triple([1, 2, 3]) is None

    def test_empty_input(self):
        assert find_triple([]) is None

    def test_too_few_values(self):
        assert find_triple([1000, 1020]) is None

    def test_accepts_iterator(self):
        assert find_triple(iter(SAMPLE)).product == 241861950

    def test_inner_scan_covers_entire_collection(self):
        # The inner pass includes the outer value itself: a=1009 needs 1011,
        # and 2 + 1009 is found in the full list.
        match = find_triple([2, 1009])
        assert match == Match((1009, 1009, 2))
        assert match.product == 2036162

    def test_entire_collection_with_extra_values(self):
        assert find_triple([2, 1009, 5]).product == 2036162

    def test_literal_duplicates_allowed(self):
        match = find_triple([1009, 2, 1009])
        assert match is not None
        assert sorted(match.values) == [2, 1009, 1009]

    def test_custom_target(self):
        match = find_triple([1, 2, 3, 4], target=9)
        assert match is not None
        assert match.total == 9

    def test_map_reset_between_outer_values(self):
        # A shared map would carry residuals from a=100 into a=1 and report
        # values that do not sum to the target.
        values = [100, 1, 2, 3]
        match = find_triple(values, target=6)
        assert match is not None
        assert match.total == 6
        assert sorted(match.values) == [1, 2, 3]

    @pytest.mark.parametrize(
        "values",
        [
            [5, 10, 15, 20, 2000, 3, 17],
            [1000, 500, 520, 7, 8, 9],
            [-10, 30, 2000, 4, 6],
        ],
    )
    def test_match_is_made_of_input_values(self, values: list[int]):
        match = find_triple(values)
        assert match is not None
        assert match.total == 2020
        assert set(match.values) <= set(values)
        assert match.product == math.prod(match.values)

    def test_no_triple_even_with_reuse(self):
        assert find_triple([1, 2, 4]) is None


class TestDispatch:
    def test_supported_sizes(self):
        assert SUPPORTED_SIZES == (2, 3)

    def test_get_search(self):
        assert get_search(2) is find_pair
        assert get_search(3) is find_triple

    @pytest.mark.parametrize("size", [0, 1, 4])
    def test_unsupported_size_raises(self, size: int):
        with pytest.raises(SearchError, match="Unsupported tuple size"):
            get_search(size)

    def test_find_ksum(self):
        assert find_ksum(SAMPLE, 2).product == 514579
        assert find_ksum(SAMPLE, 3).product == 241861950

    def test_find_ksum_custom_target(self):
        assert find_ksum([1, 2, 3], 2, target=5) == Match((3, 2))
