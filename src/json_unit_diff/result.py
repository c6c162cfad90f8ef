"""Difference records produced by a comparison.

This module provides the data types handed to difference listeners and
returned by ``Diff.differences``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_unit_diff.algorithm.config import Configuration
    from json_unit_diff.tree.path import Path

__all__ = ["Difference", "DifferenceContext", "DifferenceType"]


class DifferenceType(StrEnum):
    """Kind of a single difference.

    - DIFFERENT: the node exists on both sides with different values or types.
    - MISSING:   the node exists only in the expected document.
    - EXTRA:     the node exists only in the actual document.
    """

    DIFFERENT = auto()
    MISSING = auto()
    EXTRA = auto()


@dataclass(frozen=True, slots=True)
class Difference:
    """One discrepancy between the expected and the actual document.

    Attributes:
        type: DIFFERENT, MISSING or EXTRA.
        actual_path: Location in the actual document; None for MISSING.
        expected_path: Location in the expected document; None for EXTRA.
            Differs from ``actual_path`` only inside arrays compared with
            IGNORING_ARRAY_ORDER.
        actual: Materialized actual value (Decimal for numbers); None for MISSING.
        expected: Materialized expected value; None for EXTRA.
    """

    type: DifferenceType
    actual_path: Path | None
    expected_path: Path | None
    actual: Any = None
    expected: Any = None

    def __str__(self) -> str:
        if self.type == DifferenceType.MISSING:
            return f"{self.type.name} {self.expected!r} in {self.expected_path}"
        if self.type == DifferenceType.EXTRA:
            return f"{self.type.name} {self.actual!r} in {self.actual_path}"
        return (
            f"{self.type.name} Expected {self.expected!r} in {self.expected_path}"
            f" got {self.actual!r} in {self.actual_path}"
        )


@dataclass(frozen=True, slots=True)
class DifferenceContext:
    """What a difference listener can see besides the difference itself.

    Attributes:
        configuration: The configuration the comparison runs with.
        actual_source: The whole actual document, materialized to Python values.
        expected_source: The whole expected document, materialized to Python values.
    """

    configuration: Configuration
    actual_source: Any
    expected_source: Any
