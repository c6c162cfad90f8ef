"""Public API functions for json-unit-diff.

This module provides the three user-facing shortcuts: compare, is_similar
and differences.  Each call creates a fresh ``Diff``, so nothing is shared
between calls except the (immutable) ``Configuration`` passed in.
"""

from __future__ import annotations

from typing import Any

from json_unit_diff.algorithm.config import Configuration
from json_unit_diff.algorithm.diff import Diff
from json_unit_diff.result import Difference

__all__ = ["compare", "differences", "is_similar"]


def compare(
    expected: Any,
    actual: Any,
    configuration: Configuration | None = None,
    path: str = "",
) -> Diff:
    """Compare two JSON values and return the ``Diff``.

    Args:
        expected:      Expected JSON value (dict, list, str, int, float,
                       Decimal, bool, None).
        actual:        Actual JSON value.
        configuration: Comparison policy.  Defaults to
                       ``Configuration.empty()`` when None.
        path:          Start path in ``actual`` that ``expected`` describes.

    Returns:
        A ``Diff``; query it with ``similar()``, ``differences``,
        ``summary()`` or ``fail_if_different()``.
    """
    return Diff.create(expected, actual, path, configuration)


def is_similar(
    expected: Any,
    actual: Any,
    configuration: Configuration | None = None,
    path: str = "",
) -> bool:
    """Return True if ``actual`` matches ``expected`` under ``configuration``."""
    return compare(expected, actual, configuration, path).similar()


def differences(
    expected: Any,
    actual: Any,
    configuration: Configuration | None = None,
    path: str = "",
) -> list[Difference]:
    """Return every difference between the two values, in traversal order.

    An empty list means the values are similar.
    """
    return compare(expected, actual, configuration, path).differences
