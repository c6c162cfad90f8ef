"""Default numeric equality for JSON numbers.

Numbers arrive as ``Decimal``.  Without a tolerance two numbers are equal
when they are numerically equal, whatever their textual scale
(``1 == 1.0 == 1.00``).  With a tolerance they are equal when
``|expected - actual| <= tolerance``; the boundary itself is inclusive.
"""

from __future__ import annotations

from decimal import Decimal

__all__ = ["DefaultNumberComparator"]


class DefaultNumberComparator:
    """Scale-insensitive, tolerance-aware number comparison.

    Satisfies the ``NumberComparator`` Protocol structurally.  Stateless, so a
    single instance is shared by every ``Configuration``.

    Example::

        cmp = DefaultNumberComparator()
        cmp.compare(Decimal("1"), Decimal("1.0"), None)                 # True
        cmp.compare(Decimal("1"), Decimal("1.00001"), Decimal("0.001")) # True
    """

    def compare(
        self, expected: Decimal, actual: Decimal, tolerance: Decimal | None
    ) -> bool:
        if tolerance is not None:
            return abs(expected - actual) <= tolerance
        return expected == actual

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DefaultNumberComparator)

    def __hash__(self) -> int:
        return hash(DefaultNumberComparator)

    def __repr__(self) -> str:
        return "DefaultNumberComparator()"
