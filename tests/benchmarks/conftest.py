"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: 10-key flat, 100-key nested, 500- and 200-element arrays.
The array tier provides both an ordered pair and a reversed pair for
order-insensitive matching, which is quadratic in the array length.
"""

from __future__ import annotations

from typing import Any

import pytest


def generate_flat_object(num_keys: int, prefix: str = "key") -> dict[str, Any]:
    """Generate a flat dict with deterministic mixed values."""
    return {
        f"{prefix}_{i}": i if i % 3 == 0 else (f"value_{i}" if i % 3 == 1 else i % 2 == 0)
        for i in range(num_keys)
    }


def _make_nested_100() -> dict[str, Any]:
    """10 sections x (9 leaf keys each) = 100 total keys."""
    return {
        f"section_{i}": {f"field_{i}_{j}": f"value_{i}_{j}" for j in range(9)}
        for i in range(10)
    }


def _make_records(count: int) -> list[dict[str, Any]]:
    return [{"id": i, "name": f"item_{i}", "price": i * 1.25} for i in range(count)]


@pytest.fixture
def pair_10key_equal() -> tuple[dict[str, Any], dict[str, Any]]:
    """10-key flat equal pair."""
    return generate_flat_object(10), generate_flat_object(10)


@pytest.fixture
def pair_100key_different() -> tuple[dict[str, Any], dict[str, Any]]:
    """100-key nested pair where every leaf value differs."""
    left = _make_nested_100()
    right = {
        section: {key: value + "_changed" for key, value in fields.items()}
        for section, fields in _make_nested_100().items()
    }
    return left, right


@pytest.fixture
def pair_500_ordered() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """500 records in the same order."""
    return _make_records(500), _make_records(500)


@pytest.fixture
def pair_200_reversed() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """200 records, the actual side in reverse order."""
    return _make_records(200), list(reversed(_make_records(200)))
