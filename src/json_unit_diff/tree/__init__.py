"""Tree subpackage: the JSON value and location model.

Re-exports the public API for the tree module:
- Node: read-only view over one JSON value
- NodeType: StrEnum of the seven node kinds (OBJECT ... NULL, MISSING)
- NodeBuilder / to_node / from_json: materialize Python values or JSON text
- Path: addressable location inside a document
- PathMatcher: wildcard matching of paths against patterns
"""

from json_unit_diff.tree.builder import NodeBuilder, from_json, to_node
from json_unit_diff.tree.nodes import MISSING_NODE, Node, NodeType
from json_unit_diff.tree.path import Path
from json_unit_diff.tree.pattern import PathMatcher

__all__ = [
    "MISSING_NODE",
    "Node",
    "NodeBuilder",
    "NodeType",
    "Path",
    "PathMatcher",
    "from_json",
    "to_node",
]
