"""json-unit-diff - structural comparison of JSON documents for test assertions."""

from __future__ import annotations

from json_unit_diff.algorithm.conditions import (
    path,
    paths,
    root_path,
    then,
    then_ignore,
    then_not,
)
from json_unit_diff.algorithm.config import Configuration, Option, PathOption
from json_unit_diff.algorithm.diff import Diff
from json_unit_diff.api import compare, differences, is_similar
from json_unit_diff.errors import InvalidConfigurationError, JsonAssertError
from json_unit_diff.listeners import JsonDiffPatchListener, RecordingDifferenceListener
from json_unit_diff.result import Difference, DifferenceContext, DifferenceType
from json_unit_diff.tree.builder import from_json, to_node
from json_unit_diff.tree.path import Path

__version__: str = "0.1.0"
__all__: list[str] = [
    "Configuration",
    "Diff",
    "Difference",
    "DifferenceContext",
    "DifferenceType",
    "InvalidConfigurationError",
    "JsonAssertError",
    "JsonDiffPatchListener",
    "Option",
    "Path",
    "PathOption",
    "RecordingDifferenceListener",
    "compare",
    "differences",
    "from_json",
    "is_similar",
    "path",
    "paths",
    "root_path",
    "then",
    "then_ignore",
    "then_not",
    "to_node",
]
