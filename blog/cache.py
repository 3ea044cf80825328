# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import threading
import time
from logging import getLogger
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

logger = getLogger(__name__)

# In-memory cache, one per worker process.
# If we were to scale this, we would use a shared cache like Redis or Memcached.

DEFAULT_MAX_ENTRIES = 1024
# Expired entries are swept after this many writes.
DEFAULT_SWEEP_INTERVAL = 64


class ResponseCache:
    """Read-through cache with a per-entry freshness window (in seconds).

    Expired entries are refetched on the next read. Nothing is cached when the
    loader raises, so failures are retried on the following request.

    Writes periodically sweep out expired entries, and the cache never holds
    more than `max_entries`; past that the oldest entry is evicted first.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic,
                 max_entries: int = DEFAULT_MAX_ENTRIES,
                 sweep_interval: int = DEFAULT_SWEEP_INTERVAL):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self.max_entries = max_entries
        self.sweep_interval = max(1, sweep_interval)
        self._writes = 0
        self.stats = {
            "hits": 0,
            "misses": 0,
            "evictions": 0,
        }

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value if it is still fresh, else None."""
        with self._lock:
            return self._get_locked(key)

    def _get_locked(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: Hashable, value: Any, ttl: float):
        if ttl <= 0:
            return
        with self._lock:
            self._writes += 1
            if self._writes % self.sweep_interval == 0 or len(self._entries) >= self.max_entries:
                self._purge_expired_locked()

            # re-inserting moves the key to the newest position
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                self.stats["evictions"] += 1
                logger.debug(f"Cache full, evicted: {oldest}")
            self._entries[key] = (self._clock() + ttl, value)

    def get_or_load(self, key: Hashable, ttl: float, loader: Callable[[], Any]) -> Any:
        with self._lock:
            value = self._get_locked(key)
            if value is not None:
                self.stats["hits"] += 1
            else:
                self.stats["misses"] += 1

        if value is not None:
            logger.debug(f"Cache hit: {key}")
            return value

        logger.debug(f"Cache miss: {key}")
        # Loaded outside the lock; two concurrent misses may both fetch.
        value = loader()
        self.set(key, value, ttl)
        return value

    def clear(self):
        with self._lock:
            self._entries.clear()

    def _purge_expired_locked(self) -> int:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def cleanup(self) -> int:
        """Drop expired entries. Returns how many were removed."""
        with self._lock:
            return self._purge_expired_locked()

    def __len__(self):
        with self._lock:
            return len(self._entries)
