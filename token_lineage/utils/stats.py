"""
Thread-safe statistics tracking for parallel execution.

Provides a simple counter set shared between worker threads.
"""

from threading import Lock


class ExecutionStats:
    """
    Thread-safe statistics tracker.

    Example:
        stats = ExecutionStats(matched=0, unlinked=0)
        stats.increment("matched")
        stats.increment("method:direct")
    """

    def __init__(self, **initial_values: int):
        """
        Initialize stats with any number of counters.

        Args:
            **initial_values: Initial values for stat counters (default: 0)
        """
        self._lock = Lock()
        self._counters: dict[str, int] = dict(initial_values)

    def increment(self, key: str, amount: int = 1) -> None:
        """Thread-safe increment of a counter."""
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def get(self, key: str, default: int = 0) -> int:
        """Get counter value."""
        return self._counters.get(key, default)

    def with_prefix(self, prefix: str) -> dict[str, int]:
        """Counters whose key starts with prefix, with the prefix stripped."""
        with self._lock:
            return {
                key[len(prefix) :]: value
                for key, value in self._counters.items()
                if key.startswith(prefix)
            }

    def to_dict(self) -> dict[str, int]:
        """Get all counters as a dictionary."""
        with self._lock:
            return self._counters.copy()

    def __getitem__(self, key: str) -> int:
        """Allow dict-like access: stats['matched']."""
        return self._counters.get(key, 0)

    def __repr__(self) -> str:
        with self._lock:
            items = ", ".join(f"{k}={v}" for k, v in sorted(self._counters.items()))
            return f"ExecutionStats({items})"
