"""Extension-point protocols for json-unit-diff.

Defines the structural interfaces of every pluggable collaborator.  Users can
plug in their own implementations without inheriting from any base class;
any class with conformant methods passes ``isinstance`` checks.

Example::

    from json_unit_diff.protocols import DifferenceListener

    class PrintingListener:
        def diff(self, difference, context) -> None:
            print(difference)

    assert isinstance(PrintingListener(), DifferenceListener)  # True
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_unit_diff.result import Difference, DifferenceContext

__all__ = [
    "DifferenceListener",
    "JsonPathResolver",
    "NamedMatcher",
    "NumberComparator",
    "ParametrizedMatcher",
]


@runtime_checkable
class DifferenceListener(Protocol):
    """Receives every difference found during a comparison.

    ``diff`` is called synchronously, once per difference, in depth-first
    traversal order.  An exception raised by the listener propagates out of
    the comparison and aborts it.
    """

    def diff(self, difference: Difference, context: DifferenceContext) -> None: ...


@runtime_checkable
class NumberComparator(Protocol):
    """Decides whether two JSON numbers are equal.

    ``tolerance`` is ``None`` when no tolerance is configured.
    """

    def compare(
        self, expected: Decimal, actual: Decimal, tolerance: Decimal | None
    ) -> bool: ...


@runtime_checkable
class NamedMatcher(Protocol):
    """A matcher referenced from an expected document as
    ``${json-unit.matches:<name>}``.

    ``actual`` is the materialized actual value (dict, list, Decimal, str,
    bool or None; None also when the actual node is missing).
    """

    def matches(self, actual: Any) -> bool: ...

    def describe_mismatch(self, actual: Any) -> str: ...


@runtime_checkable
class ParametrizedMatcher(NamedMatcher, Protocol):
    """A named matcher that accepts the literal text following the macro.

    For ``"${json-unit.matches:between}1,5"`` the comparison calls
    ``with_parameter("1,5")`` and matches with the returned matcher, leaving
    the registered instance untouched.
    """

    def with_parameter(self, parameter: str) -> NamedMatcher: ...


@runtime_checkable
class JsonPathResolver(Protocol):
    """Expands a JSONPath expression into the concrete paths it selects.

    Returned paths use dot/bracket notation (``"a[0].b"``) and must name
    nodes that exist in ``document``.
    """

    def resolve(self, document: Any, expression: str) -> list[str]: ...
