"""Integration tests for JsonPathNgResolver (requires the jsonpath extra)."""

from __future__ import annotations

import pytest

pytest.importorskip("jsonpath_ng")

from json_unit_diff import Configuration, Diff, InvalidConfigurationError, Option, path, then
from json_unit_diff.integrations import JsonPathNgResolver

DOCUMENT = {
    "id": 1,
    "a": {"id": 2, "b": [{"id": 3, "v": 1}, {"id": 4, "v": 2}]},
    "list": [10, 20, 30],
}


class TestResolve:
    def test_recursive_descent(self) -> None:
        resolved = JsonPathNgResolver().resolve(DOCUMENT, "$..id")
        assert sorted(resolved) == ["a.b[0].id", "a.b[1].id", "a.id", "id"]

    def test_slice(self) -> None:
        assert JsonPathNgResolver().resolve(DOCUMENT, "$.list[0:2]") == ["list[0]", "list[1]"]

    def test_negative_index_counts_from_end(self) -> None:
        assert JsonPathNgResolver().resolve(DOCUMENT, "$.list[-1]") == ["list[2]"]
        assert JsonPathNgResolver().resolve(DOCUMENT, "$.a.b[-2].id") == ["a.b[0].id"]

    def test_no_match(self) -> None:
        assert JsonPathNgResolver().resolve(DOCUMENT, "$..missing") == []

    def test_invalid_expression_raises(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            JsonPathNgResolver().resolve(DOCUMENT, "$[[")


class TestDiffWithResolver:
    def test_ignore_recursive_ids(self) -> None:
        config = (
            Configuration.empty()
            .with_json_path_resolver(JsonPathNgResolver())
            .when_ignoring_paths("$..id")
        )
        expected = {
            "id": 9,
            "a": {"id": 9, "b": [{"id": 9, "v": 1}, {"id": 9, "v": 2}]},
            "list": [10, 20, 30],
        }
        assert Diff.create(expected, DOCUMENT, configuration=config).similar()

    def test_path_option_on_slice(self) -> None:
        config = (
            Configuration.empty()
            .with_json_path_resolver(JsonPathNgResolver())
            .when(path("$.list[0:2]"), then(Option.IGNORING_VALUES))
        )
        expected = dict(DOCUMENT, list=[0, 0, 30])
        assert Diff.create(expected, DOCUMENT, configuration=config).similar()
        expected = dict(DOCUMENT, list=[0, 0, 0])
        assert not Diff.create(expected, DOCUMENT, configuration=config).similar()

    def test_ignore_last_element(self) -> None:
        config = (
            Configuration.empty()
            .with_json_path_resolver(JsonPathNgResolver())
            .when_ignoring_paths("$.list[-1]")
        )
        expected = dict(DOCUMENT, list=[10, 20, 99])
        assert Diff.create(expected, DOCUMENT, configuration=config).similar()
        expected = dict(DOCUMENT, list=[99, 20, 30])
        assert not Diff.create(expected, DOCUMENT, configuration=config).similar()
