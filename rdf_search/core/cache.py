"""
In-memory response cache for search results.

A time-boxed map: entries expire after a fixed TTL and the whole map is
wiped once it grows past a size bound. There is no LRU ordering and no
locking; callers run on a single event loop and only touch the cache from
synchronous code between awaits.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    timestamp: float
    value: Any


class ResponseCache:
    """
    Short-TTL memoization of search payloads.

    Args:
        ttl_seconds: Maximum age of an entry still served as a hit
        max_entries: Size above which the cache is cleared before an insert
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        max_entries: int = 300,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp > self.ttl_seconds:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        if len(self._entries) > self.max_entries:
            logger.info(f"Response cache exceeded {self.max_entries} entries, clearing")
            self._entries.clear()
        self._entries[key] = CacheEntry(timestamp=self._clock(), value=value)

    def __len__(self) -> int:
        return len(self._entries)
