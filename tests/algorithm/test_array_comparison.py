"""Tests for greedy multiset array matching.

Covers:
- Identical and permuted arrays match completely
- Duplicate values are consumed lowest-expected-index first
- missing / extra are reported in ascending index order
- in_correct_order reflects the induced expected-index sequence
- The equals callback is consulted in the documented scan order
"""

from __future__ import annotations

import itertools
from typing import Any

import pytest

from json_unit_diff.algorithm.array_comparison import (
    ArrayComparison,
    ArrayComparisonResult,
    NodeWithIndex,
)
from json_unit_diff.tree.builder import to_node
from json_unit_diff.tree.nodes import Node

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _compare(expected: list[Any], actual: list[Any]) -> ArrayComparisonResult:
    expected_nodes = [to_node(v) for v in expected]
    actual_nodes = [to_node(v) for v in actual]
    return ArrayComparison(
        expected_nodes,
        actual_nodes,
        lambda e, a: expected_nodes[e] == actual_nodes[a],
    ).compare()


def _values(items: tuple[NodeWithIndex, ...]) -> list[tuple[Any, int]]:
    return [(item.node.to_python(), item.index) for item in items]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCompleteMatches:
    def test_identical_arrays(self) -> None:
        result = _compare([1, 2, 3], [1, 2, 3])
        assert result.is_complete
        assert result.in_correct_order
        assert [m.index for m in result.matched if m is not None] == [0, 1, 2]

    def test_permuted_arrays(self) -> None:
        result = _compare([1, 2, 3], [3, 1, 2])
        assert result.is_complete
        assert not result.in_correct_order
        assert [m.index for m in result.matched if m is not None] == [2, 0, 1]

    def test_empty_arrays(self) -> None:
        result = _compare([], [])
        assert result == ArrayComparisonResult((), (), (), True)


class TestDuplicates:
    def test_duplicate_case(self) -> None:
        result = _compare([1, 1, 2, 2], [2, 2, 1, 2])
        assert _values(result.missing) == [(1, 1)]
        assert _values(result.extra) == [(2, 3)]
        assert not result.in_correct_order
        assert [m.index if m else None for m in result.matched] == [2, 3, 0, None]

    def test_lowest_unused_index_is_consumed(self) -> None:
        result = _compare(["a", "a", "a"], ["a", "a"])
        assert [m.index for m in result.matched if m is not None] == [0, 1]
        assert _values(result.missing) == [("a", 2)]
        assert result.in_correct_order

    def test_equal_duplicates_keep_order_flag(self) -> None:
        assert _compare([1, 1, 2], [1, 2, 1]).in_correct_order is False
        assert _compare([1, 1, 2], [1, 1, 2]).in_correct_order is True


class TestMissingAndExtra:
    def test_missing_ascending(self) -> None:
        result = _compare([5, 4, 3, 2], [4])
        assert _values(result.missing) == [(5, 0), (3, 2), (2, 3)]
        assert result.extra == ()

    def test_extra_ascending(self) -> None:
        result = _compare([1], [9, 1, 8])
        assert _values(result.extra) == [(9, 0), (8, 2)]
        assert result.missing == ()
        assert result.matched[0] is None
        assert result.matched[2] is None

    def test_matched_is_parallel_to_actual(self) -> None:
        result = _compare([1, 2], [3, 2, 1, 4])
        assert len(result.matched) == 4


class TestScanOrder:
    def test_equals_called_in_ascending_expected_order(self) -> None:
        expected: list[Node] = [to_node(v) for v in (1, 2, 2)]
        actual: list[Node] = [to_node(v) for v in (2, 2)]
        calls: list[tuple[int, int]] = []

        def equals(e: int, a: int) -> bool:
            calls.append((e, a))
            return expected[e] == actual[a]

        ArrayComparison(expected, actual, equals).compare()
        # actual[0] scans 0, 1 -> match; actual[1] scans 0, 2 -> match
        assert calls == [(0, 0), (1, 0), (0, 1), (2, 1)]


class TestOrderFlag:
    @pytest.mark.parametrize("permutation", list(itertools.permutations(range(4))))
    def test_flag_is_true_only_for_identity(self, permutation: tuple[int, ...]) -> None:
        expected = ["a", "b", "c", "d"]
        actual = [expected[i] for i in permutation]
        result = _compare(expected, actual)
        assert result.is_complete
        assert result.in_correct_order == (list(permutation) == sorted(permutation))
