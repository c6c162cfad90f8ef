"""Performance benchmark suite for json-unit-diff.

Run with: pytest tests/benchmarks/ --benchmark-only -v
Skip during normal test runs: pytest --benchmark-disable
"""

from __future__ import annotations

from json_unit_diff import Configuration, Option, compare, is_similar


def _differences(expected, actual, configuration=None):  # type: ignore[no-untyped-def]
    return compare(expected, actual, configuration).differences


class TestPerformanceObjects:
    """Benchmarks for object comparison."""

    def test_10key_equal(self, benchmark, pair_10key_equal):  # type: ignore[no-untyped-def]
        left, right = pair_10key_equal
        result = benchmark(is_similar, left, right)
        # Verify the result is valid (not just timing)
        assert result is True

    def test_100key_different(self, benchmark, pair_100key_different):  # type: ignore[no-untyped-def]
        left, right = pair_100key_different
        result = benchmark(_differences, left, right)
        assert len(result) == 90


class TestPerformanceArrays:
    """Benchmarks for ordered and order-insensitive array comparison."""

    def test_500_ordered(self, benchmark, pair_500_ordered):  # type: ignore[no-untyped-def]
        left, right = pair_500_ordered
        assert benchmark(is_similar, left, right) is True

    def test_200_reversed_ignoring_order(self, benchmark, pair_200_reversed):  # type: ignore[no-untyped-def]
        left, right = pair_200_reversed
        config = Configuration.empty().when(Option.IGNORING_ARRAY_ORDER)
        assert benchmark(is_similar, left, right, config) is True
