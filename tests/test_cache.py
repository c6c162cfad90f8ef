"""Unit tests for PatternCache.

Tests cover:
- Cache hits (a cached pattern bypasses the compiler on the second get())
- LRU eviction (silent eviction at max_size; evicted patterns recompile)
- Failed compilations are not cached
- Instance isolation (separate PatternCache instances do not share state)
- Properties (max_size and curr_size return correct values)
"""

from __future__ import annotations

import re

import pytest

from json_unit_diff.cache import PatternCache

# ---------------------------------------------------------------------------
# Spy helper
# ---------------------------------------------------------------------------


def _make_spy_compiler() -> tuple[PatternCache, list[str]]:
    """Return a cache whose compiler records every pattern it compiles."""
    call_log: list[str] = []

    def spy_compile(pattern: str) -> re.Pattern[str]:
        call_log.append(pattern)
        return re.compile(pattern)

    return PatternCache(compiler=spy_compile, max_size=2), call_log


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCacheHits:
    def test_second_get_does_not_recompile(self) -> None:
        cache, call_log = _make_spy_compiler()
        first = cache.get("a+")
        second = cache.get("a+")
        assert first is second
        assert call_log == ["a+"]

    def test_contains_after_get(self) -> None:
        cache, _ = _make_spy_compiler()
        assert "a+" not in cache
        cache.get("a+")
        assert "a+" in cache


class TestEviction:
    def test_least_recently_used_is_evicted(self) -> None:
        cache, call_log = _make_spy_compiler()
        cache.get("a")
        cache.get("b")
        cache.get("a")  # refresh "a"
        cache.get("c")  # evicts "b"
        assert "b" not in cache
        assert "a" in cache
        cache.get("b")
        assert call_log == ["a", "b", "c", "b"]

    def test_curr_size_never_exceeds_max_size(self) -> None:
        cache, _ = _make_spy_compiler()
        for pattern in ["a", "b", "c", "d"]:
            cache.get(pattern)
        assert cache.curr_size == cache.max_size == 2


class TestFailures:
    def test_compiler_error_propagates_and_is_not_cached(self) -> None:
        cache = PatternCache(compiler=re.compile)
        with pytest.raises(re.error):
            cache.get("(")
        assert "(" not in cache
        assert cache.curr_size == 0


class TestIsolationAndClear:
    def test_instances_do_not_share_state(self) -> None:
        first = PatternCache(compiler=re.compile)
        second = PatternCache(compiler=re.compile)
        first.get("x")
        assert "x" not in second

    def test_clear_empties_cache(self) -> None:
        cache = PatternCache(compiler=re.compile)
        cache.get("x")
        cache.clear()
        assert cache.curr_size == 0

    def test_default_max_size(self) -> None:
        assert PatternCache(compiler=re.compile).max_size == 256
