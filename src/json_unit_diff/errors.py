"""Exception types raised by json-unit-diff.

Comparison mismatches are never exceptions inside the walker; they are
``Difference`` records.  Only two things raise:

- ``InvalidConfigurationError``: a programming error in the comparison setup
  (malformed path pattern, unknown matcher, negative tolerance, ...).
- ``JsonAssertError``: raised by ``Diff.fail_if_different`` when the
  documents differ.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from json_unit_diff.result import Difference

__all__ = ["InvalidConfigurationError", "JsonAssertError"]


class InvalidConfigurationError(ValueError):
    """The comparison configuration is invalid and cannot be used."""


class JsonAssertError(AssertionError):
    """Two JSON documents were expected to be equal but differ.

    Attributes:
        differences: Every difference found, in traversal order.
    """

    def __init__(self, message: str, differences: list[Difference]) -> None:
        super().__init__(message)
        self.differences = differences
