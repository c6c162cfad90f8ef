"""Placeholder macros recognized in expected string values.

Reserved forms (``$`` or ``#`` prefix)::

    ${json-unit.any-boolean}       actual must be a boolean
    ${json-unit.any-number}        actual must be a number
    ${json-unit.any-string}        actual must be a string
    ${json-unit.ignore-element}    array element left out of the comparison
    ${json-unit.regex}<pattern>    actual must be a string fully matching <pattern>
    ${json-unit.matches:<name>}    actual must satisfy the named matcher;
    ${json-unit.matches:<name>}<p> ... parametrized with the literal suffix <p>

The ignore placeholder is configurable and handled by
``Configuration.is_ignore_placeholder``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum, auto

from json_unit_diff.cache import PatternCache
from json_unit_diff.errors import InvalidConfigurationError
from json_unit_diff.tree.nodes import NodeType

__all__ = ["Placeholder", "PlaceholderKind", "compile_regex", "parse_placeholder"]

_IGNORE_ELEMENT = re.compile(r"^[$#]\{json-unit\.ignore-element\}$")
_ANY_TYPE = re.compile(r"^[$#]\{json-unit\.any-(boolean|number|string)\}$")
_REGEX = re.compile(r"^[$#]\{json-unit\.regex\}(.*)$", re.DOTALL)
_MATCHES = re.compile(r"^[$#]\{json-unit\.matches:(.+?)\}(.*)$", re.DOTALL)


class PlaceholderKind(StrEnum):
    ANY_BOOLEAN = auto()
    ANY_NUMBER = auto()
    ANY_STRING = auto()
    REGEX = auto()
    MATCHES = auto()
    IGNORE_ELEMENT = auto()


_ANY_KINDS = {
    "boolean": PlaceholderKind.ANY_BOOLEAN,
    "number": PlaceholderKind.ANY_NUMBER,
    "string": PlaceholderKind.ANY_STRING,
}

_REQUIRED_TYPES = {
    PlaceholderKind.ANY_BOOLEAN: (NodeType.BOOLEAN, "a boolean"),
    PlaceholderKind.ANY_NUMBER: (NodeType.NUMBER, "a number"),
    PlaceholderKind.ANY_STRING: (NodeType.STRING, "a string"),
}


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A parsed placeholder macro.

    Attributes:
        kind: Which macro this is.
        argument: The regex for REGEX, the matcher name for MATCHES, else "".
        parameter: The literal suffix after a MATCHES macro, or None.
    """

    kind: PlaceholderKind
    argument: str = ""
    parameter: str | None = None

    @property
    def required_type(self) -> NodeType | None:
        """Node type an any-* macro demands; None for the other kinds."""
        entry = _REQUIRED_TYPES.get(self.kind)
        return entry[0] if entry else None

    @property
    def type_description(self) -> str:
        entry = _REQUIRED_TYPES.get(self.kind)
        return entry[1] if entry else ""


def parse_placeholder(text: str) -> Placeholder | None:
    """Return the macro ``text`` spells, or None for an ordinary string."""
    if len(text) < 2 or text[1] != "{" or text[0] not in "$#":
        return None
    if _IGNORE_ELEMENT.match(text):
        return Placeholder(PlaceholderKind.IGNORE_ELEMENT)
    match = _ANY_TYPE.match(text)
    if match is not None:
        return Placeholder(_ANY_KINDS[match.group(1)])
    match = _REGEX.match(text)
    if match is not None:
        return Placeholder(PlaceholderKind.REGEX, argument=match.group(1))
    match = _MATCHES.match(text)
    if match is not None:
        return Placeholder(
            PlaceholderKind.MATCHES,
            argument=match.group(1),
            parameter=match.group(2) or None,
        )
    return None


def _compile_user_regex(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        msg = f'Invalid regular expression "{pattern}" in json-unit.regex placeholder'
        raise InvalidConfigurationError(msg) from exc


_regex_cache = PatternCache(compiler=_compile_user_regex)


def compile_regex(pattern: str) -> re.Pattern[str]:
    """Return the compiled regex of a REGEX placeholder (memoized).

    Raises:
        InvalidConfigurationError: If ``pattern`` is not a valid regex.
    """
    return _regex_cache.get(pattern)
