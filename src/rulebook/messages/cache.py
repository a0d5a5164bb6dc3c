"""Process-wide resolution cache, partitioned by resolver identity."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Mapping


logger = logging.getLogger(__name__)

# Option keys that take part in the cache key; all others are ignored
CACHE_KEYS: tuple[str, ...] = ("path", "message_type", "val_type", "arg_type", "locale")

_MISSING = object()


def cache_key(predicate: str, options: Mapping[str, Any]) -> tuple[str, frozenset]:
    """(predicate, options restricted to CACHE_KEYS)."""
    restricted = frozenset(
        (key, _hashable(options[key])) for key in CACHE_KEYS if key in options
    )
    return predicate, restricted


def _hashable(value: Any) -> Hashable:
    if isinstance(value, (list, tuple)):
        return tuple(_hashable(item) for item in value)
    if isinstance(value, dict):
        return frozenset((key, _hashable(item)) for key, item in value.items())
    if isinstance(value, (set, frozenset)):
        return frozenset(_hashable(item) for item in value)
    return value


@dataclass
class ResolutionCache:
    """
    Fetch-or-store map for one resolver identity.

    Entries are never evicted. Concurrent misses on the same key may each
    compute a value; setdefault keeps whichever lands first and every
    caller gets that stored value back. None is a cacheable result.
    Hit and miss counters are updated under a lock.
    """
    identity: Hashable

    _store: dict[Hashable, Any] = field(default_factory=dict, init=False)

    # Stats
    _hits: int = field(default=0, init=False)
    _misses: int = field(default=0, init=False)
    _stats_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def get(self, key: Hashable, default: Any = None) -> Any:
        value = self._store.get(key, _MISSING)
        return default if value is _MISSING else value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._store

    def fetch_or_store(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """
        Return the stored value for key, computing and storing it if absent.

        This is the primary pattern for resolution lookups.
        """
        # Fast path: cache hit
        value = self._store.get(key, _MISSING)
        if value is not _MISSING:
            with self._stats_lock:
                self._hits += 1
            return value

        # Slow path: compute, then insert if still absent
        with self._stats_lock:
            self._misses += 1
        value = compute()
        return self._store.setdefault(key, value)

    def clear(self) -> None:
        """Clear all entries."""
        self._store.clear()
        with self._stats_lock:
            self._hits = 0
            self._misses = 0

    @property
    def size(self) -> int:
        """Current number of entries."""
        return len(self._store)

    @property
    def stats(self) -> dict:
        """Cache statistics."""
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0

        return {
            "size": self.size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 2),
        }


_partitions: dict[Hashable, ResolutionCache] = {}
_partitions_lock = threading.Lock()


def partition(identity: Hashable) -> ResolutionCache:
    """The shared cache for a resolver identity, created on first use."""
    cache = _partitions.get(identity)
    if cache is not None:
        return cache
    with _partitions_lock:
        cache = _partitions.get(identity)
        if cache is None:
            cache = ResolutionCache(identity)
            _partitions[identity] = cache
            logger.debug(f"Created resolution cache partition ({len(_partitions)} total)")
        return cache


def clear_all() -> None:
    """Drop every partition. Intended for tests."""
    with _partitions_lock:
        _partitions.clear()
