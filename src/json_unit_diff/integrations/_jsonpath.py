"""JSONPath resolver backed by jsonpath-ng.

Expands patterns the built-in matcher cannot handle locally (recursive
descent, slices, unions, filters) into the concrete paths they select in the
actual document.  Requires the optional dependency::

    pip install json-unit-diff[jsonpath]

Example::

    from json_unit_diff import Configuration, Diff
    from json_unit_diff.integrations import JsonPathNgResolver

    config = (
        Configuration.empty()
        .with_json_path_resolver(JsonPathNgResolver())
        .when_ignoring_paths("$..id")
    )
    Diff.create({"a": {"id": 1}}, {"a": {"id": 2}}, configuration=config).similar()  # True
"""

from __future__ import annotations

from typing import Any

from jsonpath_ng import Child, Fields, Index, Root, This
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.ext import parse

from json_unit_diff.errors import InvalidConfigurationError
from json_unit_diff.tree.path import Path, Segment

__all__ = ["JsonPathNgResolver"]


def _segments(expression: Any) -> list[Segment]:
    if isinstance(expression, Child):
        return _segments(expression.left) + _segments(expression.right)
    if isinstance(expression, Fields):
        return list(expression.fields)
    if isinstance(expression, Index):
        return [int(index) for index in expression.indices]
    if isinstance(expression, (Root, This)):
        return []
    msg = f"Unsupported JSONPath step in match: {expression!r}"
    raise InvalidConfigurationError(msg)


def _concrete_path(document: Any, steps: list[Segment]) -> str:
    """Render ``steps`` as a path, counting negative indices from the end."""
    segments: list[Segment] = []
    current = document
    for step in steps:
        if isinstance(step, int) and step < 0:
            step += len(current)
        segments.append(step)
        current = current[step]
    return str(Path(tuple(segments)))


class JsonPathNgResolver:
    """``JsonPathResolver`` implementation using ``jsonpath_ng.ext.parse``.

    Parsed expressions are kept per instance, so one resolver can be shared
    by many configurations.
    """

    def __init__(self) -> None:
        self._parsed: dict[str, Any] = {}

    def resolve(self, document: Any, expression: str) -> list[str]:
        """Return the dot/bracket paths of every node ``expression`` selects.

        Raises:
            InvalidConfigurationError: If ``expression`` is not valid JSONPath.
        """
        parsed = self._parsed.get(expression)
        if parsed is None:
            try:
                parsed = parse(expression)
            except (JsonPathLexerError, JsonPathParserError) as exc:
                msg = f'Invalid JSONPath expression "{expression}": {exc}'
                raise InvalidConfigurationError(msg) from exc
            self._parsed[expression] = parsed
        return [
            _concrete_path(document, _segments(match.full_path))
            for match in parsed.find(document)
        ]
