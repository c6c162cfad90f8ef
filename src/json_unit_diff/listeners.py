"""Ready-made difference listeners.

- ``RecordingDifferenceListener`` keeps every difference and the last context.
- ``JsonDiffPatchListener`` additionally renders the differences as a
  jsondiffpatch-format delta (https://github.com/benjamine/jsondiffpatch):

      DIFFERENT -> [expected, actual]
      MISSING   -> [expected, 0, 0]
      EXTRA     -> [actual]

  Arrays along the way are marked with ``"_t": "a"`` and their elements are
  keyed by the index rendered as a string.

Example::

    listener = JsonDiffPatchListener()
    config = Configuration.empty().with_difference_listener(listener)
    Diff.create({"a": [1]}, {"a": [2]}, configuration=config).similar()
    listener.json_patch()   # {"a": {"_t": "a", "0": [1, 2]}}
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from json_unit_diff.result import Difference, DifferenceContext, DifferenceType

__all__ = ["JsonDiffPatchListener", "RecordingDifferenceListener"]


class RecordingDifferenceListener:
    """Collects differences in the order they are reported."""

    def __init__(self) -> None:
        self._differences: list[Difference] = []
        self._context: DifferenceContext | None = None

    def diff(self, difference: Difference, context: DifferenceContext) -> None:
        self._differences.append(difference)
        self._context = context

    @property
    def differences(self) -> list[Difference]:
        return list(self._differences)

    @property
    def context(self) -> DifferenceContext | None:
        """Context of the most recent difference, or None before the first one."""
        return self._context

    def clear(self) -> None:
        self._differences.clear()
        self._context = None


def _patch_entry(difference: Difference) -> list[Any]:
    if difference.type == DifferenceType.DIFFERENT:
        return [difference.expected, difference.actual]
    if difference.type == DifferenceType.MISSING:
        return [difference.expected, 0, 0]
    return [difference.actual]


def _decimal_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonDiffPatchListener(RecordingDifferenceListener):
    """Records differences and renders them as a jsondiffpatch delta."""

    def json_patch(self) -> Any:
        """Return the delta as plain Python values.

        A difference at the document root makes the whole delta a list.
        """
        delta: dict[str, Any] = {}
        for difference in self._differences:
            path = (
                difference.expected_path
                if difference.type == DifferenceType.MISSING
                else difference.actual_path
            )
            segments = path.segments if path is not None else ()
            if not segments:
                return _patch_entry(difference)

            if isinstance(segments[0], int):
                delta["_t"] = "a"
            current = delta
            for position, segment in enumerate(segments):
                key = str(segment)
                if position == len(segments) - 1:
                    current[key] = _patch_entry(difference)
                    break
                child = current.setdefault(key, {})
                if isinstance(segments[position + 1], int):
                    child["_t"] = "a"
                current = child
        return delta

    def json_patch_text(self) -> str:
        """Return ``json_patch()`` serialized as compact JSON text."""
        return json.dumps(
            self.json_patch(), default=_decimal_default, separators=(",", ":")
        )
