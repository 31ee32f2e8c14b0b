"""Generation-scoped memoization.

Values are stored against a (key, epoch) pair. An entry is only valid for the
epoch it was computed in; a lookup with any other epoch is a miss.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class GenerationCache:
    """Per-key memo table invalidated by epoch comparison."""

    def __init__(self):
        self._entries: dict[str, tuple[int, float]] = {}
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str, epoch: int) -> float | None:
        """Return the value stored for key in this epoch, or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry[0] != epoch:
                self.misses += 1
                return None
            self.hits += 1
            return entry[1]

    def put(self, key: str, epoch: int, value: float) -> None:
        """Store value for key, replacing any entry from an earlier epoch."""
        with self._lock:
            self._entries[key] = (epoch, value)

    def get_or_compute(self, key: str, epoch: int, compute: Callable[[], float]) -> float:
        """Return the cached value or compute, store and return it.

        The whole sequence holds the lock, so compute() runs at most once
        per key per epoch even with concurrent callers.
        """
        with self._lock:
            cached = self.get(key, epoch)
            if cached is not None:
                return cached
            value = compute()
            self.put(key, epoch, value)
            logger.debug(f"Computed {key} for epoch {epoch}: {value}")
            return value

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
