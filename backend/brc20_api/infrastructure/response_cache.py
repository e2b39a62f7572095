"""Response Cache - in-process LRU store for gated ledger responses.

Invariants:
    - Holds at most max_entries entries; least recently used evicted first
    - set() never lowers the recorded position for a key (a slow writer cannot
      replace a newer entry with an older one)
    - Entries never expire by time; freshness is decided by core/cache_policy.py

Design Decisions:
    - Module-level singleton initialized on startup, like db_manager
      (single-process uvicorn; each worker keeps its own cache)
    - No lock: get/set never await, so they are atomic on the event loop
"""

import logging
from collections import OrderedDict

from brc20_api.core.cache_policy import CacheEntry

logger = logging.getLogger(__name__)


class InMemoryResponseCache:
    """LRU response cache keyed by route+query signature."""

    def __init__(self, max_entries: int = 10_000):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
        return entry

    async def set(self, key: str, entry: CacheEntry) -> None:
        current = self._entries.get(key)
        if current is not None and current.position > entry.position:
            return
        self._entries[key] = entry
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached response", extra={"cache_key": evicted})


# Singleton (initialized on startup); None when caching is disabled
response_cache: InMemoryResponseCache | None = None


def init_response_cache(enabled: bool = True, max_entries: int = 10_000):
    global response_cache
    response_cache = InMemoryResponseCache(max_entries) if enabled else None


def get_response_cache() -> InMemoryResponseCache | None:
    """FastAPI dependency for the response cache."""
    return response_cache
