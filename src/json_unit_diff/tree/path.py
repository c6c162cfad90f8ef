"""Path: an addressable location inside a JSON document.

Paths use dot + bracket notation::

    ""              the root
    "a.b"           field b of field a
    "a[0].b"        field b of the first element of array a
    "[1][-1]"       last element of the second element of a root array
    "a\\.b"         the single field named "a.b"

Negative indices count from the end of the array and are only meaningful
when navigating a concrete document with ``Path.resolve``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from json_unit_diff.errors import InvalidConfigurationError
from json_unit_diff.tree.nodes import MISSING_NODE, Node

__all__ = ["Path", "escape_field", "split_segments"]

Segment = str | int

# A dot not preceded by a backslash separates two steps.
_UNESCAPED_DOT = re.compile(r"(?<!\\)\.")

# One step: optional field name followed by zero or more [index] suffixes.
_STEP = re.compile(r"^(?P<field>(?:\\.|[^\[\]])*)(?P<indices>(?:\[-?\d+\])*)$")
_INDEX = re.compile(r"\[(-?\d+)\]")


def escape_field(name: str) -> str:
    """Escape literal dots in a field name for path rendering."""
    return name.replace(".", "\\.")


def split_segments(text: str) -> list[str]:
    """Split path text on unescaped dots, keeping the escapes in place."""
    return _UNESCAPED_DOT.split(text)


@dataclass(frozen=True, slots=True)
class Path:
    """Immutable sequence of field-name and array-index segments.

    Attributes:
        segments: Field names (``str``) and array indices (``int``), root first.
    """

    segments: tuple[Segment, ...] = ()

    @classmethod
    def root(cls) -> Path:
        return _ROOT

    @classmethod
    def parse(cls, text: str) -> Path:
        """Parse dot/bracket path text into a Path.

        Raises:
            InvalidConfigurationError: If ``text`` is not a valid path.
        """
        if text == "":
            return _ROOT
        segments: list[Segment] = []
        for position, step in enumerate(split_segments(text)):
            match = _STEP.match(step)
            if match is None:
                raise InvalidConfigurationError(f'Invalid path "{text}"')
            field_name = match.group("field")
            indices = match.group("indices")
            if field_name:
                segments.append(field_name.replace("\\.", "."))
            elif position > 0 or not indices:
                # Only a leading step may start with an index ("[0].a").
                raise InvalidConfigurationError(f'Invalid path "{text}"')
            segments.extend(int(i) for i in _INDEX.findall(indices))
        return cls(tuple(segments))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def to_field(self, name: str) -> Path:
        """Construct the path to field ``name`` of this node."""
        return Path((*self.segments, name))

    def to_element(self, index: int) -> Path:
        """Construct the path to array element ``index`` of this node."""
        return Path((*self.segments, index))

    @property
    def is_root(self) -> bool:
        return not self.segments

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def resolve(self, root: Node) -> Node:
        """Return the node at this path in ``root``, or MISSING_NODE."""
        node = root
        for segment in self.segments:
            if node.is_missing:
                return MISSING_NODE
            if isinstance(segment, int):
                node = node.element(segment)
            else:
                node = node.get(segment)
        return node

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append("." + escape_field(segment))
            else:
                parts.append(escape_field(segment))
        return "".join(parts)


_ROOT = Path()
