"""Path-condition DSL for ``Configuration.when``.

Examples::

    from json_unit_diff import Configuration, Option
    from json_unit_diff.algorithm.conditions import path, paths, root_path, then, then_ignore, then_not

    # Ignore order only in the array at a.b
    Configuration.empty().when(path("a.b"), then(Option.IGNORING_ARRAY_ORDER))

    # Fully ignore several paths
    Configuration.empty().when(paths("[*].b", "[*].c"), then_ignore())

    # Ignore array order everywhere except under [*].b
    (
        Configuration.empty()
        .when(Option.IGNORING_ARRAY_ORDER)
        .when(path("[*].b"), then_not(Option.IGNORING_ARRAY_ORDER))
    )

Options passed with a path apply to the matched node and its whole subtree.
For TREATING_NULL_AS_ABSENT and IGNORING_VALUES the path names the field that
may be absent / whose value is ignored; for the other options it names the
object or array whose children are relaxed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from json_unit_diff.algorithm.config import Option, PathOption

if TYPE_CHECKING:
    from json_unit_diff.algorithm.config import Configuration

__all__ = [
    "ApplicableForPath",
    "PathsParam",
    "path",
    "paths",
    "root_path",
    "then",
    "then_ignore",
    "then_not",
]


@dataclass(frozen=True, slots=True)
class PathsParam:
    """The path patterns a ``when`` condition applies to."""

    paths: tuple[str, ...]


class ApplicableForPath(Protocol):
    """An action ``Configuration.when`` applies to a ``PathsParam``."""

    def apply_for_paths(
        self, configuration: Configuration, paths_param: PathsParam
    ) -> Configuration: ...


@dataclass(frozen=True, slots=True)
class _OptionsParam:
    options: frozenset[Option]
    included: bool

    def apply_for_paths(
        self, configuration: Configuration, paths_param: PathsParam
    ) -> Configuration:
        return configuration.with_path_option(
            PathOption(paths_param.paths, self.options, self.included)
        )


@dataclass(frozen=True, slots=True)
class _IgnoredParam:
    def apply_for_paths(
        self, configuration: Configuration, paths_param: PathsParam
    ) -> Configuration:
        return configuration.when_ignoring_paths(*paths_param.paths)


def path(pattern: str) -> PathsParam:
    return PathsParam((pattern,))


def paths(*patterns: str) -> PathsParam:
    return PathsParam(tuple(patterns))


def root_path() -> PathsParam:
    return path("")


def then(first: Option, *rest: Option) -> ApplicableForPath:
    """Add options for the matched paths.  Use ``then_not`` to remove them."""
    return _OptionsParam(frozenset((first, *rest)), included=True)


def then_not(first: Option, *rest: Option) -> ApplicableForPath:
    """Remove options for the matched paths."""
    return _OptionsParam(frozenset((first, *rest)), included=False)


def then_ignore() -> ApplicableForPath:
    """Ignore the matched paths completely."""
    return _IgnoredParam()
