"""algorithm subpackage: public API for the comparison engine.

Provides the ``Diff`` walker, its ``Configuration`` and the path-condition
DSL.  Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_unit_diff.algorithm import Configuration, Diff, Option, path, then

    config = Configuration.empty().when(path("tags"), then(Option.IGNORING_ARRAY_ORDER))
    diff = Diff.create({"tags": ["a", "b"]}, {"tags": ["b", "a"]}, configuration=config)
    diff.similar()  # True
"""

from __future__ import annotations

from json_unit_diff.algorithm.array_comparison import (
    ArrayComparison,
    ArrayComparisonResult,
    NodeWithIndex,
)
from json_unit_diff.algorithm.conditions import (
    PathsParam,
    path,
    paths,
    root_path,
    then,
    then_ignore,
    then_not,
)
from json_unit_diff.algorithm.config import Configuration, Option, PathOption
from json_unit_diff.algorithm.diff import Diff
from json_unit_diff.algorithm.numbers import DefaultNumberComparator

__all__ = [
    "ArrayComparison",
    "ArrayComparisonResult",
    "Configuration",
    "DefaultNumberComparator",
    "Diff",
    "NodeWithIndex",
    "Option",
    "PathOption",
    "PathsParam",
    "path",
    "paths",
    "root_path",
    "then",
    "then_ignore",
    "then_not",
]
