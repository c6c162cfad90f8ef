"""Integrations subpackage for json-unit-diff.

Contains adapters for optional third-party libraries:
- JSONPath resolver backed by jsonpath-ng (JsonPathNgResolver)

Adapters are imported conditionally; a missing optional dependency does not
prevent the package from loading.
"""

from __future__ import annotations

__all__: list[str] = []

# jsonpath-ng is optional (pip install json-unit-diff[jsonpath]).
try:
    from json_unit_diff.integrations._jsonpath import JsonPathNgResolver

    __all__.append("JsonPathNgResolver")
except ImportError:
    pass

__all__ = sorted(__all__)
