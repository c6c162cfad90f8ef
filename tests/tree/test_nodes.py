"""Tests for the Node dataclass and NodeType StrEnum.

Verifies:
- NodeType has exactly 7 members with lowercase string values (StrEnum property)
- Navigation (get / element) returns MISSING_NODE instead of raising
- Negative element indices count from the end
- to_python / to_json conversions keep key order and number scale
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from json_unit_diff.tree.builder import to_node
from json_unit_diff.tree.nodes import MISSING_NODE, Node, NodeType


class TestNodeType:
    """Tests for the NodeType StrEnum."""

    def test_has_exactly_seven_members(self) -> None:
        assert len(NodeType) == 7

    def test_values_are_lowercased(self) -> None:
        """auto() on StrEnum yields the lowercased member name (Python 3.11+)."""
        assert NodeType.OBJECT == "object"
        assert NodeType.ARRAY == "array"
        assert NodeType.STRING == "string"
        assert NodeType.NUMBER == "number"
        assert NodeType.BOOLEAN == "boolean"
        assert NodeType.NULL == "null"
        assert NodeType.MISSING == "missing"

    def test_members_are_str_instances(self) -> None:
        for member in NodeType:
            assert isinstance(member, str), f"{member!r} is not a str instance"


class TestPredicates:
    def test_missing_node_is_missing(self) -> None:
        assert MISSING_NODE.is_missing
        assert not MISSING_NODE.is_null

    def test_null_is_not_missing(self) -> None:
        node = to_node(None)
        assert node.is_null
        assert not node.is_missing

    def test_containers(self) -> None:
        assert to_node({}).is_container
        assert to_node([]).is_container
        assert not to_node("x").is_container

    def test_node_is_frozen(self) -> None:
        node = to_node(1)
        with pytest.raises(FrozenInstanceError):
            node.value = Decimal(2)  # type: ignore[misc]


class TestNavigation:
    def test_get_existing_field(self) -> None:
        node = to_node({"a": 1})
        assert node.get("a").value == Decimal(1)

    def test_get_absent_field_is_missing(self) -> None:
        assert to_node({"a": 1}).get("b") is MISSING_NODE

    def test_get_on_non_object_is_missing(self) -> None:
        assert to_node([1]).get("a") is MISSING_NODE

    def test_element_in_range(self) -> None:
        assert to_node([1, 2, 3]).element(1).value == Decimal(2)

    def test_negative_element_counts_from_end(self) -> None:
        assert to_node([1, 2, 3]).element(-1).value == Decimal(3)

    def test_element_out_of_range_is_missing(self) -> None:
        node = to_node([1])
        assert node.element(1) is MISSING_NODE
        assert node.element(-2) is MISSING_NODE

    def test_size(self) -> None:
        assert to_node({"a": 1, "b": 2}).size() == 2
        assert to_node([1, 2, 3]).size() == 3
        assert to_node("abc").size() == 0

    def test_keys_keep_insertion_order(self) -> None:
        assert to_node({"b": 1, "a": 2}).keys() == ["b", "a"]


class TestConversion:
    def test_to_python_round_trips_structure(self) -> None:
        value = {"a": [1, "x", True, None], "b": {"c": 1.5}}
        assert to_node(value).to_python() == {
            "a": [Decimal(1), "x", True, None],
            "b": {"c": Decimal("1.5")},
        }

    def test_missing_to_python_is_none(self) -> None:
        assert MISSING_NODE.to_python() is None

    def test_to_json_is_compact_and_ordered(self) -> None:
        node = to_node({"b": [1, 2], "a": "x"})
        assert node.to_json() == '{"b":[1,2],"a":"x"}'

    def test_to_json_keeps_number_scale(self) -> None:
        assert to_node(Decimal("1.0")).to_json() == "1.0"

    def test_to_json_scalars(self) -> None:
        assert to_node(True).to_json() == "true"
        assert to_node(None).to_json() == "null"
        assert to_node('say "hi"').to_json() == '"say \\"hi\\""'

    def test_str_is_json(self) -> None:
        node = Node(NodeType.ARRAY, elements=(to_node(1),))
        assert str(node) == "[1]"
