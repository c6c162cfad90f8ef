"""Configuration, Option and PathOption: the comparison policy.

Configuration is a frozen (immutable) dataclass.  Every ``with_*`` / ``when*``
method returns a new instance, so a configuration can be built once, shared
between threads and reused across comparisons.

Example::

    from json_unit_diff import Configuration, Option
    from json_unit_diff.algorithm.conditions import path, then

    config = (
        Configuration.empty()
        .with_tolerance("0.01")
        .when(Option.IGNORING_EXTRA_FIELDS)
        .when(path("items"), then(Option.IGNORING_ARRAY_ORDER))
    )
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import StrEnum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from json_unit_diff.algorithm.numbers import DefaultNumberComparator
from json_unit_diff.errors import InvalidConfigurationError
from json_unit_diff.protocols import (
    DifferenceListener,
    JsonPathResolver,
    NamedMatcher,
    NumberComparator,
)
from json_unit_diff.tree.pattern import needs_resolver, validate_pattern

if TYPE_CHECKING:
    from json_unit_diff.algorithm.conditions import ApplicableForPath, PathsParam

__all__ = [
    "DEFAULT_IGNORE_PLACEHOLDER",
    "ALTERNATIVE_IGNORE_PLACEHOLDER",
    "Configuration",
    "Option",
    "PathOption",
    "PredicateMatcher",
]

DEFAULT_IGNORE_PLACEHOLDER = "${json-unit.ignore}"
ALTERNATIVE_IGNORE_PLACEHOLDER = "#{json-unit.ignore}"


class Option(StrEnum):
    """Comparison relaxations.

    - TREATING_NULL_AS_ABSENT:    ``null`` and an absent field are equivalent.
    - IGNORING_ARRAY_ORDER:       arrays are compared as multisets.
    - IGNORING_EXTRA_FIELDS:      fields present only in actual are fine.
    - IGNORING_EXTRA_ARRAY_ITEMS: elements present only in actual are fine.
    - IGNORING_VALUES:            scalar leaves only need the same type.
    """

    TREATING_NULL_AS_ABSENT = auto()
    IGNORING_ARRAY_ORDER = auto()
    IGNORING_EXTRA_FIELDS = auto()
    IGNORING_EXTRA_ARRAY_ITEMS = auto()
    IGNORING_VALUES = auto()


@dataclass(frozen=True, slots=True)
class PathOption:
    """Options added (``included``) or removed for nodes matching ``paths``.

    The change applies to the matched node and its whole subtree.

    Attributes:
        paths: Path patterns (see ``json_unit_diff.tree.pattern``).
        options: Options to add or remove.
        included: True to add the options, False to remove them.
    """

    paths: tuple[str, ...]
    options: frozenset[Option]
    included: bool = True

    def __post_init__(self) -> None:
        if not self.options:
            msg = "PathOption needs at least one option"
            raise InvalidConfigurationError(msg)
        for pattern in self.paths:
            validate_pattern(pattern)

    def apply_to(self, options: frozenset[Option]) -> frozenset[Option]:
        if self.included:
            return options | self.options
        return options - self.options


class PredicateMatcher:
    """Adapts a plain ``Callable[[Any], bool]`` to the NamedMatcher protocol."""

    def __init__(self, name: str, predicate: Callable[[Any], bool]) -> None:
        self._name = name
        self._predicate = predicate

    def matches(self, actual: Any) -> bool:
        return bool(self._predicate(actual))

    def describe_mismatch(self, actual: Any) -> str:
        return f"{actual!r} does not satisfy matcher {self._name!r}"

    def __repr__(self) -> str:
        return f"PredicateMatcher({self._name!r}, {self._predicate!r})"


def _to_tolerance(value: Decimal | float | int | str | None) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, bool):
        msg = f"Tolerance must be a number, got {value!r}"
        raise InvalidConfigurationError(msg)
    try:
        tolerance = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        msg = f"Tolerance must be a number, got {value!r}"
        raise InvalidConfigurationError(msg) from exc
    if not tolerance.is_finite() or tolerance < 0:
        msg = f"Tolerance must be a finite number >= 0, got {value!r}"
        raise InvalidConfigurationError(msg)
    return tolerance


@dataclass(frozen=True, slots=True)
class Configuration:
    """Immutable comparison policy.

    Attributes:
        tolerance: Numeric tolerance, or None for exact numeric equality.
        options: Options active for the whole document.
        ignore_placeholder: Expected string that matches anything.
        matchers: Named matchers for ``${json-unit.matches:<name>}``.
        path_options: Path-scoped option overlays, applied in order.
        paths_to_ignore: Patterns of paths that are not compared at all.
        difference_listener: Receives every difference, or None.
        number_comparator: Decides numeric equality.
        json_path_resolver: Expands JSONPath patterns that cannot be matched
            locally (``$..a``, ``$.a[0:2]``, filters).
    """

    tolerance: Decimal | None = None
    options: frozenset[Option] = frozenset()
    ignore_placeholder: str = DEFAULT_IGNORE_PLACEHOLDER
    matchers: Mapping[str, NamedMatcher] = field(default_factory=dict, hash=False)
    path_options: tuple[PathOption, ...] = ()
    paths_to_ignore: tuple[str, ...] = ()
    difference_listener: DifferenceListener | None = None
    number_comparator: NumberComparator = field(default_factory=DefaultNumberComparator)
    json_path_resolver: JsonPathResolver | None = None

    def __post_init__(self) -> None:
        if not self.ignore_placeholder:
            msg = "Ignore placeholder must not be empty"
            raise InvalidConfigurationError(msg)
        # frozen: normalized values go in through object.__setattr__
        object.__setattr__(self, "tolerance", _to_tolerance(self.tolerance))
        object.__setattr__(self, "matchers", MappingProxyType(dict(self.matchers)))
        for pattern in self.paths_to_ignore:
            validate_pattern(pattern)

    @classmethod
    def empty(cls) -> Configuration:
        return _EMPTY

    # ------------------------------------------------------------------
    # Fluent builders
    # ------------------------------------------------------------------

    def with_tolerance(self, tolerance: Decimal | float | int | str | None) -> Configuration:
        """Return a copy comparing numbers with ``|expected - actual| <= tolerance``.

        Floats are converted through ``str`` so ``0.1`` means ``Decimal("0.1")``.
        ``None`` switches back to exact comparison.

        Raises:
            InvalidConfigurationError: If the tolerance is negative or not a number.
        """
        return dataclasses.replace(self, tolerance=_to_tolerance(tolerance))

    def with_options(self, *options: Option) -> Configuration:
        """Return a copy with ``options`` added to the global option set."""
        return dataclasses.replace(self, options=self.options | frozenset(options))

    def without_options(self, *options: Option) -> Configuration:
        return dataclasses.replace(self, options=self.options - frozenset(options))

    def when(
        self,
        first: Option | PathsParam,
        *rest: Any,
    ) -> Configuration:
        """Add global options, or apply an action to specific paths.

        Two call shapes::

            config.when(Option.IGNORING_ARRAY_ORDER, Option.IGNORING_EXTRA_FIELDS)
            config.when(path("a.b"), then(Option.IGNORING_ARRAY_ORDER))

        Raises:
            InvalidConfigurationError: If the arguments match neither shape.
        """
        if isinstance(first, Option):
            if not all(isinstance(option, Option) for option in rest):
                msg = f"Expected Option values, got {rest!r}"
                raise InvalidConfigurationError(msg)
            return self.with_options(first, *rest)
        if len(rest) != 1 or not hasattr(rest[0], "apply_for_paths"):
            msg = "when(paths, action) expects exactly one action such as then(...)"
            raise InvalidConfigurationError(msg)
        action: ApplicableForPath = rest[0]
        return action.apply_for_paths(self, first)

    def with_ignore_placeholder(self, placeholder: str) -> Configuration:
        return dataclasses.replace(self, ignore_placeholder=placeholder)

    def with_matcher(
        self, name: str, matcher: NamedMatcher | Callable[[Any], bool]
    ) -> Configuration:
        """Register ``matcher`` under ``name``.

        Plain callables returning a truthy value on match are wrapped in a
        ``PredicateMatcher``.

        Raises:
            InvalidConfigurationError: If ``name`` is empty or contains ``}``.
        """
        if not name or "}" in name:
            msg = f"Invalid matcher name {name!r}"
            raise InvalidConfigurationError(msg)
        if not isinstance(matcher, NamedMatcher):
            if not callable(matcher):
                msg = f"Matcher {name!r} must be a NamedMatcher or a callable"
                raise InvalidConfigurationError(msg)
            matcher = PredicateMatcher(name, matcher)
        return dataclasses.replace(self, matchers={**self.matchers, name: matcher})

    def when_ignoring_paths(self, *patterns: str) -> Configuration:
        return dataclasses.replace(
            self, paths_to_ignore=self.paths_to_ignore + tuple(patterns)
        )

    def with_path_option(self, path_option: PathOption) -> Configuration:
        return dataclasses.replace(
            self, path_options=(*self.path_options, path_option)
        )

    def with_difference_listener(
        self, listener: DifferenceListener | None
    ) -> Configuration:
        return dataclasses.replace(self, difference_listener=listener)

    def with_number_comparator(self, comparator: NumberComparator) -> Configuration:
        return dataclasses.replace(self, number_comparator=comparator)

    def with_json_path_resolver(self, resolver: JsonPathResolver | None) -> Configuration:
        return dataclasses.replace(self, json_path_resolver=resolver)

    # ------------------------------------------------------------------
    # Queries used by Diff
    # ------------------------------------------------------------------

    def is_ignore_placeholder(self, value: str) -> bool:
        if value == self.ignore_placeholder:
            return True
        return (
            self.ignore_placeholder == DEFAULT_IGNORE_PLACEHOLDER
            and value == ALTERNATIVE_IGNORE_PLACEHOLDER
        )

    def get_matcher(self, name: str) -> NamedMatcher | None:
        return self.matchers.get(name)

    def resolve_json_paths(self, document: Any) -> Configuration:
        """Expand JSONPath patterns that need a resolver into concrete paths.

        Args:
            document: The actual document as plain Python values.

        Returns:
            ``self`` when no pattern needs resolving, otherwise a copy whose
            patterns are all locally matchable.

        Raises:
            InvalidConfigurationError: If such a pattern exists and no
                ``json_path_resolver`` is configured.
        """
        pending = [
            pattern
            for pattern in (
                *self.paths_to_ignore,
                *(p for option in self.path_options for p in option.paths),
            )
            if needs_resolver(pattern)
        ]
        if not pending:
            return self
        resolver = self.json_path_resolver
        if resolver is None:
            msg = (
                f'Path pattern "{pending[0]}" needs a JsonPathResolver; '
                "configure one with with_json_path_resolver()"
            )
            raise InvalidConfigurationError(msg)

        def _expand(patterns: Iterable[str]) -> tuple[str, ...]:
            expanded: list[str] = []
            for pattern in patterns:
                if needs_resolver(pattern):
                    expanded.extend(resolver.resolve(document, pattern))
                else:
                    expanded.append(pattern)
            return tuple(expanded)

        # Same order as the fields: ignored paths first, then path options.
        paths_to_ignore = _expand(self.paths_to_ignore)
        path_options = tuple(
            dataclasses.replace(option, paths=_expand(option.paths))
            for option in self.path_options
        )
        return dataclasses.replace(
            self,
            paths_to_ignore=paths_to_ignore,
            path_options=path_options,
        )


_EMPTY = Configuration()
