"""Greedy multiset matching of array elements.

Used by ``Diff`` for arrays compared with IGNORING_ARRAY_ORDER.

Algorithm:
    1. Every expected index starts unused.
    2. Actual elements are processed in their original order.  Each one takes
       the lowest-indexed unused expected element it is equal to (according
       to the ``equals`` callback, a nested quiet comparison).  Actual
       elements that find nothing become ``extra``.
    3. Expected elements still unused at the end become ``missing``, in
       ascending index order.
    4. ``in_correct_order`` is True iff the matched expected indices, read in
       actual order, never decrease.

The scan order decides which of several equal duplicates is consumed and so
which ones are reported; it must not change.  Worst case is
``len(expected) * len(actual)`` calls to ``equals``.

Example::

    expected = [to_node(v) for v in (1, 1, 2, 2)]
    actual = [to_node(v) for v in (2, 2, 1, 2)]
    result = ArrayComparison(
        expected, actual, lambda e, a: expected[e] == actual[a]
    ).compare()
    [m.index for m in result.missing]   # [1]
    [x.index for x in result.extra]     # [3]
    result.in_correct_order             # False
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from json_unit_diff.tree.nodes import Node

__all__ = ["ArrayComparison", "ArrayComparisonResult", "NodeWithIndex"]

logger = logging.getLogger(__name__)

_UNMATCHED = -1


@dataclass(frozen=True, slots=True)
class NodeWithIndex:
    """An array element together with its index in its own array."""

    node: Node
    index: int


@dataclass(frozen=True, slots=True)
class ArrayComparisonResult:
    """Outcome of ``ArrayComparison.compare``.

    Attributes:
        matched: Parallel to the actual array; the expected element each
            actual element was paired with, or None.
        missing: Unmatched expected elements, ascending expected index.
        extra: Unmatched actual elements, ascending actual index.
        in_correct_order: True iff the matched expected indices are
            non-decreasing in actual order.
    """

    matched: tuple[NodeWithIndex | None, ...]
    missing: tuple[NodeWithIndex, ...]
    extra: tuple[NodeWithIndex, ...]
    in_correct_order: bool

    @property
    def is_complete(self) -> bool:
        """True when every element on both sides found a partner."""
        return not self.missing and not self.extra


class ArrayComparison:
    """Pairs equal elements of two arrays, ignoring their order.

    Args:
        expected: Elements of the expected array.
        actual: Elements of the actual array.
        equals: ``equals(expected_index, actual_index)`` returns True when the
            two elements are equal under the active configuration.
    """

    def __init__(
        self,
        expected: Sequence[Node],
        actual: Sequence[Node],
        equals: Callable[[int, int], bool],
    ) -> None:
        self._expected = expected
        self._actual = actual
        self._equals = equals

    def compare(self) -> ArrayComparisonResult:
        used = np.zeros(len(self._expected), dtype=bool)
        assignment = np.full(len(self._actual), _UNMATCHED, dtype=np.intp)

        for actual_index in range(len(self._actual)):
            for expected_index in np.flatnonzero(~used):
                if self._equals(int(expected_index), actual_index):
                    used[expected_index] = True
                    assignment[actual_index] = expected_index
                    break

        matched_indices = assignment[assignment != _UNMATCHED]
        in_correct_order = bool(np.all(np.diff(matched_indices) >= 0))
        if not in_correct_order:
            logger.debug(
                "Array elements matched out of order: %s", matched_indices.tolist()
            )

        matched = tuple(
            None
            if expected_index == _UNMATCHED
            else NodeWithIndex(self._expected[expected_index], int(expected_index))
            for expected_index in assignment.tolist()
        )
        missing = tuple(
            NodeWithIndex(self._expected[index], index)
            for index in np.flatnonzero(~used).tolist()
        )
        extra = tuple(
            NodeWithIndex(self._actual[index], index)
            for index in np.flatnonzero(assignment == _UNMATCHED).tolist()
        )
        return ArrayComparisonResult(matched, missing, extra, in_correct_order)
