"""PathMatcher: wildcard matching of concrete paths against path patterns.

Pattern syntax extends the path syntax (see ``json_unit_diff.tree.path``):

- ``*`` as a whole field segment matches exactly one field name.
- ``[*]`` matches exactly one array index.
- Everything else matches literally; pattern and path must have the same
  number of segments (no prefix matching).
- Negative indices (``a[-1]``) are rejected; compared paths never contain them.

Patterns starting with ``$`` are JSONPath expressions.  Plain ones
(``$.a.b``, ``$['a'].b``, ``$.a[*].b``, ``$[0]``) are normalized locally.
Recursive descent (``..``), slices, unions, negative indices and filters
need a ``JsonPathResolver`` to expand them into concrete paths against the
actual document first; see ``Configuration.resolve_json_paths``.

Compiled patterns are memoized in a module-level ``PatternCache``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from json_unit_diff.cache import PatternCache
from json_unit_diff.errors import InvalidConfigurationError
from json_unit_diff.tree.path import escape_field, split_segments

__all__ = [
    "PathMatcher",
    "compile_pattern",
    "is_json_path",
    "matches",
    "needs_resolver",
    "normalize_json_path",
    "validate_pattern",
]

_STEP = re.compile(
    r"^(?P<field>(?:\\.|[^\[\]])*)(?P<indices>(?:\[(?:\*|-?\d+)\])*)$"
)
_INDEX = re.compile(r"\[(\*|-?\d+)\]")

# Regex fragments used when compiling a pattern.
_ANY_FIELD = r"(?:\\\.|[^.\[\]])+"
_ANY_INDEX = r"\[\d+\]"

# JSONPath bracket-quoted member names: ['name'] or ["name"].
_QUOTED_MEMBER = re.compile(r"""\[\s*(?:'((?:\\.|[^'])*)'|"((?:\\.|[^"])*)")\s*\]""")
_BRACKET = re.compile(r"\[([^\]]*)\]")
_LOCAL_INDEX = re.compile(r"\*|\d+")


# ---------------------------------------------------------------------------
# JSONPath handling
# ---------------------------------------------------------------------------


def is_json_path(pattern: str) -> bool:
    return pattern.startswith("$")


def needs_resolver(pattern: str) -> bool:
    """Return True if a JSONPath pattern cannot be matched without a resolver."""
    if not is_json_path(pattern):
        return False
    stripped = _QUOTED_MEMBER.sub(".m", pattern)
    if ".." in stripped:
        return True
    return any(
        not _LOCAL_INDEX.fullmatch(content.strip())
        for content in _BRACKET.findall(stripped)
    )


def normalize_json_path(pattern: str) -> str:
    """Turn a plain JSONPath expression into dot/bracket pattern syntax.

    ``"$.a['b.c'][*]"`` becomes ``"a.b\\.c[*]"``.  Non-JSONPath patterns are
    returned unchanged.
    """
    if not is_json_path(pattern):
        return pattern

    def _member(match: re.Match[str]) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        return "." + escape_field(name)

    normalized = _QUOTED_MEMBER.sub(_member, pattern[1:])
    return normalized[1:] if normalized.startswith(".") else normalized


# ---------------------------------------------------------------------------
# Validation and compilation
# ---------------------------------------------------------------------------


def validate_pattern(pattern: str) -> None:
    """Fail fast on malformed patterns.

    Raises:
        InvalidConfigurationError: If ``pattern`` is not a valid path pattern.
    """
    if not isinstance(pattern, str):
        raise InvalidConfigurationError(
            f"Path pattern must be a string, got {type(pattern)!r}"
        )
    if needs_resolver(pattern):
        if pattern.count("[") != pattern.count("]"):
            raise InvalidConfigurationError(f'Invalid JSONPath pattern "{pattern}"')
        return
    _parse_steps(normalize_json_path(pattern), original=pattern)


def _parse_steps(pattern: str, original: str) -> list[tuple[str, list[str]]]:
    if pattern == "":
        return []
    steps: list[tuple[str, list[str]]] = []
    for position, step in enumerate(split_segments(pattern)):
        match = _STEP.match(step)
        if match is None:
            raise InvalidConfigurationError(f'Invalid path pattern "{original}"')
        field_name = match.group("field")
        indices = _INDEX.findall(match.group("indices"))
        if not field_name and (position > 0 or not indices):
            raise InvalidConfigurationError(f'Invalid path pattern "{original}"')
        if any(index.startswith("-") for index in indices):
            # Compared paths always carry non-negative indices.
            raise InvalidConfigurationError(
                f'Negative index in path pattern "{original}"; use a JSONPath '
                "pattern with a JsonPathResolver instead"
            )
        steps.append((field_name, indices))
    return steps


def _compile(pattern: str) -> re.Pattern[str]:
    if needs_resolver(pattern):
        raise InvalidConfigurationError(
            f'Path pattern "{pattern}" needs a JsonPathResolver to be expanded'
        )
    parts: list[str] = []
    for position, (field_name, indices) in enumerate(
        _parse_steps(normalize_json_path(pattern), original=pattern)
    ):
        if position > 0:
            parts.append(r"\.")
        if field_name == "*":
            parts.append(_ANY_FIELD)
        else:
            parts.append(re.escape(field_name))
        for index in indices:
            parts.append(_ANY_INDEX if index == "*" else re.escape(f"[{index}]"))
    return re.compile("".join(parts))


_pattern_cache = PatternCache(compiler=_compile)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Return the compiled regex for ``pattern`` (memoized)."""
    return _pattern_cache.get(pattern)


def matches(candidate_path: str, pattern: str) -> bool:
    """Return True if the rendered ``candidate_path`` matches ``pattern``."""
    return compile_pattern(pattern).fullmatch(candidate_path) is not None


class PathMatcher:
    """Matches a concrete path against any of a set of patterns.

    An empty matcher never matches.  All patterns are compiled up front, so a
    malformed or unresolved pattern fails when the matcher is built rather
    than in the middle of a comparison.

    Example::

        matcher = PathMatcher(["a[*].id", "meta.*"])
        matcher.matches("a[3].id")      # True
        matcher.matches("meta.created") # True
        matcher.matches("a.id")         # False
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._patterns = tuple(patterns)
        self._compiled = [compile_pattern(pattern) for pattern in self._patterns]

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def matches(self, path: str) -> bool:
        return any(regex.fullmatch(path) is not None for regex in self._compiled)

    def __bool__(self) -> bool:
        return bool(self._compiled)

    def __repr__(self) -> str:
        return f"PathMatcher({list(self._patterns)!r})"
