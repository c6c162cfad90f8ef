"""NodeBuilder: converts any valid Python JSON value into a Node tree.

Uses recursive dispatch to convert dicts, lists/tuples, and scalar values into
``Node`` objects.  Numbers of every Python flavour (int, float, Decimal) become
``Decimal`` so the comparison can be exact and scale-insensitive.

This is the boundary where foreign representations enter the comparison;
the ``Diff`` walker itself only ever sees ``Node`` objects.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from json_unit_diff.tree.nodes import Node, NodeType

__all__ = ["JsonValue", "NodeBuilder", "from_json", "to_node"]

# Type alias for valid JSON values
JsonValue = (
    dict[str, Any] | list[Any] | tuple[Any, ...] | str | int | float | Decimal | bool | None
)

_TRUE = Node(NodeType.BOOLEAN, value=True)
_FALSE = Node(NodeType.BOOLEAN, value=False)
_NULL = Node(NodeType.NULL)


@dataclass
class NodeBuilder:
    """Converts any valid JSON value into a typed Node tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True).

    Object key order is the mapping's iteration order, which for ``dict`` and
    ``json.loads`` output is the source document order.

    Example::
        builder = NodeBuilder()
        node = builder.build({"a": [1, "x"]})
        # node: OBJECT(a -> ARRAY(NUMBER(1), STRING("x")))
    """

    def build(self, value: Any) -> Node:
        """Convert a JSON value to a Node tree.

        Args:
            value: Any valid JSON value (dict, list, tuple, str, int, float,
                Decimal, bool, None).  An existing ``Node`` is returned as is.

        Returns:
            The root Node of the converted value.

        Raises:
            TypeError: If value (or anything nested in it) is not a JSON type.
            ValueError: If a float is NaN or infinite.
        """
        if isinstance(value, Node):
            return value

        # bool before int: bool subclasses int
        if isinstance(value, bool):
            return _TRUE if value else _FALSE

        if value is None:
            return _NULL

        if isinstance(value, str):
            return Node(NodeType.STRING, value=value)

        if isinstance(value, Mapping):
            return self._build_object(value)

        if isinstance(value, (list, tuple)):
            return Node(
                NodeType.ARRAY, elements=tuple(self.build(item) for item in value)
            )

        if isinstance(value, (int, float, Decimal)):
            return Node(NodeType.NUMBER, value=_to_decimal(value))

        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")

    def _build_object(self, obj: Mapping[Any, Any]) -> Node:
        fields: dict[str, Node] = {}
        for key, val in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be str, got {type(key)!r}")
            fields[key] = self.build(val)
        return Node(NodeType.OBJECT, fields=fields)


def _to_decimal(value: int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"JSON numbers must be finite, got {value}")
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"JSON numbers must be finite, got {value}")
        # str() gives the shortest repr, so 0.1 stays 0.1 instead of its binary expansion
        return Decimal(str(value))
    return Decimal(value)


# Module-level builder (stateless, safe to share)
_builder = NodeBuilder()


def to_node(value: Any) -> Node:
    """Materialize a Python JSON value with the shared ``NodeBuilder``."""
    return _builder.build(value)


def from_json(text: str) -> Node:
    """Parse raw JSON text into a Node tree.

    Floating-point literals are parsed straight into ``Decimal`` so no
    precision is lost before the comparison sees them.

    Raises:
        json.JSONDecodeError: If ``text`` is not valid JSON.
    """
    return _builder.build(json.loads(text, parse_float=Decimal))
