"""PatternCache: LRU-backed cache of compiled path patterns.

Path patterns (``"a[*].b"``, ``"*.id"``, ...) are compiled to regular
expressions once and then matched against every path visited during a
comparison.  The same handful of patterns is typically reused across many
comparisons, so compiled expressions are kept in a bounded ``LRUCache``.
LRU eviction occurs silently when ``max_size`` is exceeded; no error is
raised.

Each ``PatternCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two separate instances never interfere with
each other.  ``json_unit_diff.tree.pattern`` keeps one module-level
instance for all path matchers.

Example::

    from json_unit_diff.cache import PatternCache

    cache = PatternCache(compiler=re.compile, max_size=128)
    regex = cache.get(r"a\\.b")     # compiled on first use
    regex is cache.get(r"a\\.b")    # True, served from memory
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable

from cachetools import LRUCache

__all__ = ["PatternCache"]


class PatternCache:
    """LRU-backed memo of ``pattern text -> compiled regex``.

    Safe to share across threads: lookups and inserts are serialized with a
    lock, and compiling the same pattern twice under contention is harmless.

    Args:
        compiler: Callable turning pattern text into a compiled ``re.Pattern``.
            Any exception it raises propagates and nothing is cached.
        max_size: Maximum number of compiled patterns to hold in memory.
            Defaults to 256.  When exceeded, the least-recently-used entry
            is silently evicted.
    """

    def __init__(
        self,
        compiler: Callable[[str], re.Pattern[str]],
        max_size: int = 256,
    ) -> None:
        self._compiler = compiler
        self._cache: LRUCache[str, re.Pattern[str]] = LRUCache(maxsize=max_size)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, pattern: str) -> re.Pattern[str]:
        """Return the compiled form of ``pattern``, compiling it on a miss."""
        with self._lock:
            compiled = self._cache.get(pattern)
        if compiled is not None:
            return compiled

        compiled = self._compiler(pattern)
        with self._lock:
            self._cache[pattern] = compiled
        return compiled

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._cache

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
