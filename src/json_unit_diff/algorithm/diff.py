"""Diff: recursive comparison of an expected and an actual JSON tree.

``Diff.create`` materializes both documents into ``Node`` trees, navigates
the actual document to the start path and walks both trees together.  Every
discrepancy becomes a ``Difference`` record that is handed to the configured
listener and summarized as either a structural message (key sets, array
lengths, array content) or a value message (leaf values and types).

The comparison runs lazily on the first query and only once.

Per node the walker applies, in order:

    1. ignore placeholder / ignore-element macro / ignored path -> equal
    2. any-boolean / any-number / any-string macros
    3. regex macro
    4. named-matcher macro
    5. presence of the actual node
    6. dispatch on the node type (object, array, scalar)

Expected array elements spelling ${json-unit.ignore-element} are dropped
before the array is compared, so the remaining elements line up with actual.

Example::

    diff = Diff.create({"test": 1}, {"test": 2})
    diff.similar()   # False
    print(diff)
    # JSON documents have different values:
    # Different value found in node "test". Expected 1, got 2.
"""

from __future__ import annotations

import logging
from typing import Any

from json_unit_diff.algorithm.array_comparison import ArrayComparison
from json_unit_diff.algorithm.config import Configuration, Option, PathOption
from json_unit_diff.algorithm.placeholders import (
    Placeholder,
    PlaceholderKind,
    compile_regex,
    parse_placeholder,
)
from json_unit_diff.errors import InvalidConfigurationError, JsonAssertError
from json_unit_diff.protocols import ParametrizedMatcher
from json_unit_diff.result import Difference, DifferenceContext, DifferenceType
from json_unit_diff.tree.builder import to_node
from json_unit_diff.tree.nodes import Node, NodeType
from json_unit_diff.tree.path import Path
from json_unit_diff.tree.pattern import PathMatcher

__all__ = ["Diff"]

diff_logger = logging.getLogger("json_unit_diff.difference.diff")
values_logger = logging.getLogger("json_unit_diff.difference.values")

SAME_VALUE = "JSON documents have the same value."
SAME_STRUCTURE = "JSON documents have the same structure."
_STRUCTURES_HEADER = "JSON documents have different structures:\n"
_VALUES_HEADER = "JSON documents have different values:\n"


class _PathRules:
    """Compiled ``paths_to_ignore`` and ``path_options`` of a configuration."""

    def __init__(self, configuration: Configuration) -> None:
        self._ignored = PathMatcher(configuration.paths_to_ignore)
        self._overlays: list[tuple[PathMatcher, PathOption]] = [
            (PathMatcher(option.paths), option) for option in configuration.path_options
        ]

    def is_ignored(self, path_text: str) -> bool:
        return self._ignored.matches(path_text)

    def effective(self, inherited: frozenset[Option], path_text: str) -> frozenset[Option]:
        options = inherited
        for matcher, path_option in self._overlays:
            if matcher.matches(path_text):
                options = path_option.apply_to(options)
        return options


def _format_keys(keys: list[str]) -> str:
    return "[" + ", ".join(keys) + "]"


def _format_nodes(nodes: list[Node]) -> str:
    return "[" + ", ".join(node.to_json() for node in nodes) + "]"


def _is_ignore_element(node: Node) -> bool:
    if node.node_type != NodeType.STRING:
        return False
    placeholder = parse_placeholder(node.value)
    return placeholder is not None and placeholder.kind == PlaceholderKind.IGNORE_ELEMENT


def _kept_elements(array: Node) -> list[tuple[int, Node]]:
    """Expected elements with their original indices, minus ignore-element macros."""
    return [
        (index, element)
        for index, element in enumerate(array.elements)
        if not _is_ignore_element(element)
    ]


class Diff:
    """Comparison of two JSON documents under a ``Configuration``.

    Use ``Diff.create`` rather than the constructor.
    """

    def __init__(
        self,
        expected_root: Node,
        actual_root: Node,
        start_path: Path,
        configuration: Configuration,
        *,
        quiet: bool = False,
        rules: _PathRules | None = None,
    ) -> None:
        self._expected_root = expected_root
        self._actual_root = actual_root
        self._start_path = start_path
        self._configuration = configuration
        self._quiet = quiet
        self._rules = rules if rules is not None else _PathRules(configuration)
        self._differences: list[Difference] = []
        self._structure_messages: list[str] = []
        self._value_messages: list[str] = []
        self._context: DifferenceContext | None = None
        self._compared = False

    @classmethod
    def create(
        cls,
        expected: Any,
        actual: Any,
        path: str | Path = "",
        configuration: Configuration | None = None,
    ) -> Diff:
        """Prepare a comparison of ``expected`` with ``actual``.

        Args:
            expected: Python JSON value or ``Node``; compared as is (strings
                are JSON strings, not JSON text).
            actual: Python JSON value or ``Node``.
            path: Start path in the actual document that ``expected``
                describes.  ``""`` compares whole documents.
            configuration: Comparison policy; ``Configuration.empty()`` if None.

        Returns:
            A ``Diff``; nothing is compared until it is queried.

        Raises:
            TypeError: If either document holds non-JSON values.
            InvalidConfigurationError: If ``path`` is malformed or a JSONPath
                pattern needs a resolver that is not configured.
        """
        configuration = configuration if configuration is not None else Configuration.empty()
        expected_root = to_node(expected)
        actual_root = to_node(actual)
        start_path = path if isinstance(path, Path) else Path.parse(path)
        configuration = configuration.resolve_json_paths(actual_root.to_python())
        return cls(expected_root, actual_root, start_path, configuration)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def differences(self) -> list[Difference]:
        """All differences, in depth-first ascending key/index order."""
        self._compare()
        return list(self._differences)

    def similar(self) -> bool:
        self._compare()
        result = not self._differences
        self._log_differences(result)
        return result

    def similar_structure(self) -> bool:
        self._compare()
        result = not self._structure_messages
        self._log_differences(result)
        return result

    def summary(self) -> str:
        if self.similar():
            return SAME_VALUE
        return self._format_messages()

    def structure_summary(self) -> str:
        if self.similar_structure():
            return SAME_STRUCTURE
        return _STRUCTURES_HEADER + "".join(f"{m}\n" for m in self._structure_messages)

    def fail_if_different(self, description: str = "") -> None:
        """Raise ``JsonAssertError`` if the documents are not similar.

        The message is::

            [description] JSON documents have different structures:
            <one structural message per line>
            JSON documents have different values:
            <one value message per line>

        Empty sections are left out; the prefix only appears for a non-empty
        ``description``.

        Raises:
            JsonAssertError: If any difference was found.
        """
        if self.similar():
            return
        prefix = f"[{description}] " if description else ""
        raise JsonAssertError(prefix + self._format_messages(), self.differences)

    def __str__(self) -> str:
        return self.summary()

    def __repr__(self) -> str:
        return f"Diff(start_path={str(self._start_path)!r}, compared={self._compared})"

    def _format_messages(self) -> str:
        message = ""
        if self._structure_messages:
            message += _STRUCTURES_HEADER + "".join(
                f"{m}\n" for m in self._structure_messages
            )
        if self._value_messages:
            message += _VALUES_HEADER + "".join(f"{m}\n" for m in self._value_messages)
        return message

    def _log_differences(self, similar: bool) -> None:
        if similar or self._quiet:
            return
        if diff_logger.isEnabledFor(logging.DEBUG):
            diff_logger.debug(self._format_messages().strip())
        if values_logger.isEnabledFor(logging.DEBUG):
            values_logger.debug(
                "Comparing expected:\n%s\n------------\nwith actual:\n%s\n",
                self._expected_root.to_json(),
                self._start_path.resolve(self._actual_root).to_json(),
            )

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def _notify(self, difference: Difference) -> None:
        self._differences.append(difference)
        listener = self._configuration.difference_listener
        if listener is None or self._quiet:
            return
        if self._context is None:
            self._context = DifferenceContext(
                configuration=self._configuration,
                actual_source=self._actual_root.to_python(),
                expected_source=self._expected_root.to_python(),
            )
        listener.diff(difference, self._context)

    def _report_different(
        self,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
        message: str,
    ) -> None:
        difference = Difference(
            DifferenceType.DIFFERENT,
            actual_path=actual_path,
            expected_path=expected_path,
            actual=actual.to_python(),
            expected=expected.to_python(),
        )
        self._notify(difference)
        self._value_messages.append(message)

    def _record_missing(self, expected: Node, expected_path: Path) -> None:
        self._notify(
            Difference(
                DifferenceType.MISSING,
                actual_path=None,
                expected_path=expected_path,
                expected=expected.to_python(),
            )
        )

    def _record_extra(self, actual: Node, actual_path: Path) -> None:
        self._notify(
            Difference(
                DifferenceType.EXTRA,
                actual_path=actual_path,
                expected_path=None,
                actual=actual.to_python(),
            )
        )

    # ------------------------------------------------------------------
    # Walker
    # ------------------------------------------------------------------

    def _compare(self) -> None:
        if self._compared:
            return
        self._compared = True
        start_node = self._start_path.resolve(self._actual_root)
        self._compare_nodes(
            self._expected_root,
            start_node,
            self._start_path,
            self._start_path,
            self._configuration.options,
        )

    def _is_equal(
        self,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
        inherited: frozenset[Option],
    ) -> bool:
        nested = Diff(
            expected,
            actual,
            actual_path,
            self._configuration,
            quiet=True,
            rules=self._rules,
        )
        nested._compared = True
        nested._compare_nodes(expected, actual, expected_path, actual_path, inherited)
        return not nested._differences

    def _compare_nodes(
        self,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
        inherited: frozenset[Option],
    ) -> None:
        path_text = str(actual_path)
        options = self._rules.effective(inherited, path_text)

        if self._is_ignored(expected, path_text):
            return

        if expected.node_type == NodeType.STRING:
            placeholder = parse_placeholder(expected.value)
            if placeholder is not None:
                self._check_placeholder(
                    placeholder, expected, actual, expected_path, actual_path
                )
                return

        if actual.is_missing:
            if expected.is_null and Option.TREATING_NULL_AS_ABSENT in options:
                return
            self._record_missing(expected, expected_path)
            self._structure_messages.append(f'Missing node in path "{path_text}".')
            return

        if expected.node_type != actual.node_type:
            self._report_different(
                expected,
                actual,
                expected_path,
                actual_path,
                f'Different value found in node "{path_text}". '
                f"Expected '{expected.to_json()}', got '{actual.to_json()}'.",
            )
            return

        node_type = expected.node_type
        if node_type == NodeType.OBJECT:
            self._compare_objects(expected, actual, expected_path, actual_path, options)
        elif node_type == NodeType.ARRAY:
            if Option.IGNORING_ARRAY_ORDER in options:
                self._compare_unordered(
                    expected, actual, expected_path, actual_path, options
                )
            else:
                self._compare_ordered(
                    expected, actual, expected_path, actual_path, options
                )
        elif Option.IGNORING_VALUES in options:
            return
        elif node_type == NodeType.NUMBER:
            self._compare_numbers(expected, actual, expected_path, actual_path)
        elif node_type in (NodeType.STRING, NodeType.BOOLEAN):
            if expected.value != actual.value:
                self._report_different(
                    expected,
                    actual,
                    expected_path,
                    actual_path,
                    f'Different value found in node "{path_text}". '
                    f"Expected {expected.to_json()}, got {actual.to_json()}.",
                )

    def _is_ignored(self, expected: Node, path_text: str) -> bool:
        if expected.node_type == NodeType.STRING and (
            self._configuration.is_ignore_placeholder(expected.value)
            or _is_ignore_element(expected)
        ):
            return True
        return self._rules.is_ignored(path_text)

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------

    def _check_placeholder(
        self,
        placeholder: Placeholder,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
    ) -> None:
        path_text = str(actual_path)
        required_type = placeholder.required_type
        if required_type is not None:
            if actual.node_type != required_type:
                self._report_different(
                    expected,
                    actual,
                    expected_path,
                    actual_path,
                    f'Different value found in node "{path_text}". '
                    f"Expected {placeholder.type_description}, got {actual.to_json()}.",
                )
            return

        if placeholder.kind == PlaceholderKind.REGEX:
            regex = compile_regex(placeholder.argument)
            if actual.node_type != NodeType.STRING or regex.fullmatch(actual.value) is None:
                actual_text = (
                    actual.value if actual.node_type == NodeType.STRING else actual.to_json()
                )
                self._report_different(
                    expected,
                    actual,
                    expected_path,
                    actual_path,
                    f'Different value found in node "{path_text}". '
                    f'Pattern "{placeholder.argument}" did not match "{actual_text}".',
                )
            return

        name = placeholder.argument
        matcher = self._configuration.get_matcher(name)
        if matcher is None:
            msg = f'Matcher "{name}" not found.'
            raise InvalidConfigurationError(msg)
        if placeholder.parameter is not None and isinstance(matcher, ParametrizedMatcher):
            matcher = matcher.with_parameter(placeholder.parameter)
        actual_value = None if actual.is_missing else actual.to_python()
        if not matcher.matches(actual_value):
            self._report_different(
                expected,
                actual,
                expected_path,
                actual_path,
                f'Matcher "{name}" does not match value {actual.to_json()} in node '
                f'"{path_text}". {matcher.describe_mismatch(actual_value)}',
            )

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _compare_numbers(
        self,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
    ) -> None:
        tolerance = self._configuration.tolerance
        comparator = self._configuration.number_comparator
        if comparator.compare(expected.value, actual.value, tolerance):
            return
        path_text = str(actual_path)
        if tolerance is not None:
            message = (
                f'Different value found in node "{path_text}". '
                f"Expected {expected.to_json()}, got {actual.to_json()}, "
                f"difference is {abs(expected.value - actual.value)}, "
                f"tolerance is {tolerance}"
            )
        else:
            message = (
                f'Different value found in node "{path_text}". '
                f"Expected {expected.to_json()}, got {actual.to_json()}."
            )
        self._report_different(expected, actual, expected_path, actual_path, message)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _missing_key_tolerated(
        self, child: Node, child_path: Path, options: frozenset[Option]
    ) -> bool:
        child_text = str(child_path)
        if self._is_ignored(child, child_text):
            return True
        return child.is_null and Option.TREATING_NULL_AS_ABSENT in self._rules.effective(
            options, child_text
        )

    def _extra_key_tolerated(
        self, child: Node, child_path: Path, options: frozenset[Option]
    ) -> bool:
        if Option.IGNORING_EXTRA_FIELDS in options:
            return True
        child_text = str(child_path)
        if self._rules.is_ignored(child_text):
            return True
        return child.is_null and Option.TREATING_NULL_AS_ABSENT in self._rules.effective(
            options, child_text
        )

    def _compare_objects(
        self,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
        options: frozenset[Option],
    ) -> None:
        expected_keys = set(expected.fields)
        actual_keys = set(actual.fields)

        missing_keys = {
            key
            for key in expected_keys - actual_keys
            if not self._missing_key_tolerated(
                expected.fields[key], actual_path.to_field(key), options
            )
        }
        extra_keys = {
            key
            for key in actual_keys - expected_keys
            if not self._extra_key_tolerated(
                actual.fields[key], actual_path.to_field(key), options
            )
        }

        if missing_keys or extra_keys:
            parts = []
            if missing_keys:
                parts.append(
                    "Missing: "
                    + ",".join(f'"{actual_path.to_field(k)}"' for k in sorted(missing_keys))
                )
            if extra_keys:
                parts.append(
                    "Extra: "
                    + ",".join(f'"{actual_path.to_field(k)}"' for k in sorted(extra_keys))
                )
            self._structure_messages.append(
                f'Different keys found in node "{actual_path}". '
                f"Expected {_format_keys(sorted(expected_keys))}, "
                f"got {_format_keys(sorted(actual_keys))}. " + " ".join(parts)
            )

        for key in sorted(expected_keys | actual_keys):
            if key in missing_keys:
                self._record_missing(expected.fields[key], expected_path.to_field(key))
            elif key in extra_keys:
                self._record_extra(actual.fields[key], actual_path.to_field(key))
            elif key in expected_keys and key in actual_keys:
                self._compare_nodes(
                    expected.fields[key],
                    actual.fields[key],
                    expected_path.to_field(key),
                    actual_path.to_field(key),
                    options,
                )

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _compare_ordered(
        self,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
        options: frozenset[Option],
    ) -> None:
        kept = _kept_elements(expected)
        expected_size = len(kept)
        actual_size = actual.size()
        ignoring_extra = Option.IGNORING_EXTRA_ARRAY_ITEMS in options
        if expected_size != actual_size and not (
            ignoring_extra and actual_size > expected_size
        ):
            self._structure_messages.append(
                f'Array "{actual_path}" has different length. '
                f"Expected {expected_size}, got {actual_size}."
            )

        for position, (index, element) in enumerate(kept[:actual_size]):
            self._compare_nodes(
                element,
                actual.elements[position],
                expected_path.to_element(index),
                actual_path.to_element(position),
                options,
            )
        for index, element in kept[actual_size:]:
            self._record_missing(element, expected_path.to_element(index))
        if not ignoring_extra:
            for index in range(expected_size, actual_size):
                self._record_extra(actual.elements[index], actual_path.to_element(index))

    def _compare_unordered(
        self,
        expected: Node,
        actual: Node,
        expected_path: Path,
        actual_path: Path,
        options: frozenset[Option],
    ) -> None:
        kept = _kept_elements(expected)

        def equals(expected_position: int, actual_index: int) -> bool:
            index, element = kept[expected_position]
            return self._is_equal(
                element,
                actual.elements[actual_index],
                expected_path.to_element(index),
                actual_path.to_element(actual_index),
                options,
            )

        result = ArrayComparison(
            [element for _, element in kept], actual.elements, equals
        ).compare()
        extra = () if Option.IGNORING_EXTRA_ARRAY_ITEMS in options else result.extra
        if not result.missing and not extra:
            return

        self._structure_messages.append(
            f'Array "{actual_path}" has different content. '
            f"Missing values {_format_nodes([m.node for m in result.missing])}, "
            f"extra values {_format_nodes([e.node for e in extra])}."
        )
        for missing in result.missing:
            self._record_missing(
                missing.node, expected_path.to_element(kept[missing.index][0])
            )
        for unmatched in extra:
            self._record_extra(unmatched.node, actual_path.to_element(unmatched.index))
