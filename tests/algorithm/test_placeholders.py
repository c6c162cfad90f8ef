"""Tests for placeholder macro parsing."""

from __future__ import annotations

import pytest

from json_unit_diff.algorithm.placeholders import (
    Placeholder,
    PlaceholderKind,
    compile_regex,
    parse_placeholder,
)
from json_unit_diff.errors import InvalidConfigurationError
from json_unit_diff.tree.nodes import NodeType


class TestAnyTypeMacros:
    @pytest.mark.parametrize("prefix", ["$", "#"])
    @pytest.mark.parametrize(
        ("name", "kind", "node_type"),
        [
            ("boolean", PlaceholderKind.ANY_BOOLEAN, NodeType.BOOLEAN),
            ("number", PlaceholderKind.ANY_NUMBER, NodeType.NUMBER),
            ("string", PlaceholderKind.ANY_STRING, NodeType.STRING),
        ],
    )
    def test_both_prefixes(
        self, prefix: str, name: str, kind: PlaceholderKind, node_type: NodeType
    ) -> None:
        placeholder = parse_placeholder(prefix + "{json-unit.any-" + name + "}")
        assert placeholder == Placeholder(kind)
        assert placeholder.required_type == node_type
        assert placeholder.type_description == f"a {name}"

    def test_trailing_text_is_not_a_macro(self) -> None:
        assert parse_placeholder("${json-unit.any-number}x") is None


class TestIgnoreElementMacro:
    @pytest.mark.parametrize("prefix", ["$", "#"])
    def test_both_prefixes(self, prefix: str) -> None:
        placeholder = parse_placeholder(prefix + "{json-unit.ignore-element}")
        assert placeholder == Placeholder(PlaceholderKind.IGNORE_ELEMENT)
        assert placeholder.required_type is None

    def test_trailing_text_is_not_a_macro(self) -> None:
        assert parse_placeholder("${json-unit.ignore-element}x") is None


class TestRegexMacro:
    def test_pattern_is_captured(self) -> None:
        placeholder = parse_placeholder("${json-unit.regex}[A-Z]+")
        assert placeholder == Placeholder(PlaceholderKind.REGEX, argument="[A-Z]+")
        assert placeholder.required_type is None

    def test_hash_prefix(self) -> None:
        placeholder = parse_placeholder("#{json-unit.regex}^\\d$")
        assert placeholder is not None
        assert placeholder.argument == "^\\d$"

    def test_compile_regex_is_memoized(self) -> None:
        assert compile_regex("[a-z]+") is compile_regex("[a-z]+")

    def test_invalid_regex_raises(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            compile_regex("(")


class TestMatchesMacro:
    def test_name_without_parameter(self) -> None:
        placeholder = parse_placeholder("${json-unit.matches:positive}")
        assert placeholder == Placeholder(PlaceholderKind.MATCHES, argument="positive")
        assert placeholder.parameter is None

    def test_name_with_parameter(self) -> None:
        placeholder = parse_placeholder("${json-unit.matches:between}1,5")
        assert placeholder is not None
        assert placeholder.argument == "between"
        assert placeholder.parameter == "1,5"

    def test_parameter_may_contain_braces_and_newlines(self) -> None:
        placeholder = parse_placeholder("${json-unit.matches:m}{a}\nb")
        assert placeholder is not None
        assert placeholder.parameter == "{a}\nb"


class TestOrdinaryStrings:
    @pytest.mark.parametrize(
        "text",
        ["", "$", "hello", "${json-unit.ignore}", "${json-unit.unknown}", "x${json-unit.any-string}"],
    )
    def test_not_a_placeholder(self, text: str) -> None:
        assert parse_placeholder(text) is None
