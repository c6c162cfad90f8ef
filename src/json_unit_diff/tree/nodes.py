"""Node dataclass and NodeType StrEnum: the generic JSON value model.

Every document compared by ``Diff`` is first materialized into ``Node``
objects (see ``json_unit_diff.tree.builder``), so the comparison never
depends on which parser or library produced the data.

Numbers are held as ``decimal.Decimal`` so that ``1``, ``1.0`` and ``1.00``
keep their textual form for messages while still comparing numerically.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

__all__ = ["MISSING_NODE", "Node", "NodeType"]


class NodeType(StrEnum):
    """Enumeration of the seven node kinds in the value model.

    StrEnum values are the lowercased member names:
    - OBJECT  -> "object"  : JSON object {}
    - ARRAY   -> "array"   : JSON array []
    - STRING  -> "string"  : JSON string
    - NUMBER  -> "number"  : JSON number (held as Decimal)
    - BOOLEAN -> "boolean" : true / false
    - NULL    -> "null"    : JSON null
    - MISSING -> "missing" : the path does not exist in the document
    """

    OBJECT = auto()
    ARRAY = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    MISSING = auto()


@dataclass(frozen=True, slots=True)
class Node:
    """A read-only view over one JSON value.

    Attributes:
        node_type: Which kind of value this is (see NodeType).
        value:     The scalar payload: ``str`` for STRING, ``Decimal`` for
                   NUMBER, ``bool`` for BOOLEAN, ``None`` otherwise.
        fields:    Child nodes of an OBJECT, in source key order.
        elements:  Child nodes of an ARRAY.
    """

    node_type: NodeType
    value: Any = None
    fields: dict[str, Node] = field(default_factory=dict)
    elements: tuple[Node, ...] = ()

    # ------------------------------------------------------------------
    # Type predicates
    # ------------------------------------------------------------------

    @property
    def is_missing(self) -> bool:
        return self.node_type == NodeType.MISSING

    @property
    def is_null(self) -> bool:
        return self.node_type == NodeType.NULL

    @property
    def is_container(self) -> bool:
        return self.node_type in (NodeType.OBJECT, NodeType.ARRAY)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get(self, key: str) -> Node:
        """Return the field ``key`` of an object, or MISSING_NODE."""
        if self.node_type != NodeType.OBJECT:
            return MISSING_NODE
        return self.fields.get(key, MISSING_NODE)

    def element(self, index: int) -> Node:
        """Return array element ``index``, or MISSING_NODE when out of range.

        Negative indices count from the end of the array.
        """
        if self.node_type != NodeType.ARRAY:
            return MISSING_NODE
        if index < 0:
            index += len(self.elements)
        if 0 <= index < len(self.elements):
            return self.elements[index]
        return MISSING_NODE

    def size(self) -> int:
        if self.node_type == NodeType.OBJECT:
            return len(self.fields)
        if self.node_type == NodeType.ARRAY:
            return len(self.elements)
        return 0

    def keys(self) -> list[str]:
        return list(self.fields)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_python(self) -> Any:
        """Convert back to plain Python values (dict, list, Decimal, ...).

        MISSING converts to ``None``; callers that must tell the two apart
        check ``is_missing`` first.
        """
        if self.node_type == NodeType.OBJECT:
            return {key: child.to_python() for key, child in self.fields.items()}
        if self.node_type == NodeType.ARRAY:
            return [child.to_python() for child in self.elements]
        return self.value

    def to_json(self) -> str:
        """Render the node as compact JSON text, keeping object key order."""
        node_type = self.node_type
        if node_type == NodeType.OBJECT:
            inner = ",".join(
                f"{json.dumps(key, ensure_ascii=False)}:{child.to_json()}"
                for key, child in self.fields.items()
            )
            return "{" + inner + "}"
        if node_type == NodeType.ARRAY:
            return "[" + ",".join(child.to_json() for child in self.elements) + "]"
        if node_type == NodeType.STRING:
            return json.dumps(self.value, ensure_ascii=False)
        if node_type == NodeType.NUMBER:
            # Decimal keeps the source scale: Decimal("1.0") renders as "1.0".
            return str(self.value)
        if node_type == NodeType.BOOLEAN:
            return "true" if self.value else "false"
        if node_type == NodeType.NULL:
            return "null"
        return "missing"

    def __str__(self) -> str:
        return self.to_json()


MISSING_NODE = Node(NodeType.MISSING)
