"""
On-disk cache for description embeddings, backed by diskcache (SQLite).

Entries live under "<namespace>:<key>" and are tagged with their namespace,
so a whole namespace can be evicted without touching the others.
"""

import itertools
import logging
from collections import Counter
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, Optional

import diskcache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path("data/cache")
_cache: Optional["AppCache"] = None

# Description embeddings are small; 1 GB holds several hundred thousand
DEFAULT_CACHE_SIZE_LIMIT = 1024 * 1024 * 1024

SECONDS_PER_DAY = 86400


class AppCache:
    """Namespaced key/value cache with optional per-entry TTL."""

    def __init__(
        self,
        cache_dir: Path = DEFAULT_CACHE_DIR,
        timeout: float = 30.0,
        size_limit: int = DEFAULT_CACHE_SIZE_LIMIT,
    ):
        """
        Args:
            cache_dir: Directory holding the SQLite database (created if missing)
            timeout: Seconds to wait for the database lock
            size_limit: Maximum size in bytes (0 for unlimited)
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._store = diskcache.Cache(str(self.cache_dir), timeout=timeout, size_limit=size_limit)

    @staticmethod
    def _full_key(namespace: str, key: str) -> str:
        return f"{namespace}:{key}"

    def _iter_keys(self, namespace: str | None = None) -> Iterator[str]:
        prefix = f"{namespace}:" if namespace else ""
        return (k for k in self._store.iterkeys() if k.startswith(prefix))

    def get(self, namespace: str, key: str) -> Any | None:
        return self._store.get(self._full_key(namespace, key))

    def set(self, namespace: str, key: str, value: Any, ttl_days: int | None = None) -> None:
        """Store a value; ttl_days of None (or 0) keeps it until evicted."""
        expire = ttl_days * SECONDS_PER_DAY if ttl_days else None
        self._store.set(self._full_key(namespace, key), value, expire=expire, tag=namespace)

    def get_or_compute(
        self,
        namespace: str,
        key: str,
        compute: Callable[[], Any],
        ttl_days: int | None = None,
    ) -> Any | None:
        """
        Return the cached value, computing and storing it on a miss.

        None results are not stored, so failed computations are retried.
        """
        value = self.get(namespace, key)
        if value is None:
            value = compute()
            if value is not None:
                self.set(namespace, key, value, ttl_days=ttl_days)
        return value

    def delete(self, namespace: str, key: str) -> bool:
        return bool(self._store.delete(self._full_key(namespace, key)))

    def clear_namespace(self, namespace: str) -> int:
        """Evict every entry in a namespace; returns how many were removed."""
        removed = self._store.evict(namespace)
        logger.debug(f"Evicted {removed} entries from {namespace}")
        return removed

    def count(self, namespace: str | None = None) -> int:
        if namespace is None:
            return len(self._store)
        return sum(1 for _ in self._iter_keys(namespace))

    def stats(self) -> dict:
        """Entry counts per namespace plus on-disk size."""
        by_namespace = Counter(
            k.partition(":")[0] if ":" in k else "unknown" for k in self._iter_keys()
        )
        size_limit = self._store.size_limit
        return {
            "total": len(self._store),
            "by_namespace": dict(by_namespace),
            "size_mb": round(self._store.volume() / (1024 * 1024), 2),
            "size_limit_mb": round(size_limit / (1024 * 1024), 2) if size_limit else None,
            "cache_dir": str(self.cache_dir),
        }

    def keys(self, namespace: str | None = None, limit: int = 100) -> list[str]:
        """Up to limit keys; namespace prefixes are stripped when filtering."""
        strip = len(namespace) + 1 if namespace else 0
        return [k[strip:] for k in itertools.islice(self._iter_keys(namespace), limit)]

    def close(self):
        self._store.close()


def get_cache(cache_dir: Path = DEFAULT_CACHE_DIR, timeout: float = 30.0) -> AppCache:
    """Process-wide cache instance (the first caller's directory wins)."""
    global _cache
    if _cache is None:
        _cache = AppCache(cache_dir, timeout=timeout)
    return _cache
