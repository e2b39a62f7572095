"""Cache Invalidation Gate - serve cached responses only while the ledger has not moved.

Invariants:
    - The watermark is read BEFORE the handler runs, in its own snapshot
    - A cached entry is served iff entry.position >= current watermark (core/cache_policy.py)
    - New payloads are recorded with the watermark observed by the gate, never a later one
    - Cache or watermark failures degrade to a miss; they never fail the request
    - Unknown watermark -> nothing served, nothing recorded
"""

import logging
from dataclasses import dataclass
from typing import Any

from brc20_api.core.cache_policy import CacheEntry, is_fresh
from brc20_api.core.domain_types import Watermark
from brc20_api.core.errors import StoreError
from brc20_api.core.repository_protocols import LedgerStore, ResponseCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    """Outcome of the freshness check for one request."""
    signature: str
    watermark: Watermark | None
    cached: CacheEntry | None = None

    @property
    def hit(self) -> bool:
        return self.cached is not None


class CacheGate:
    """Freshness precondition for one request signature."""

    def __init__(self, store: LedgerStore, cache: ResponseCache | None):
        self._store = store
        self._cache = cache

    async def check(self, signature: str) -> GateDecision:
        watermark = await self._current_watermark()
        if self._cache is None or watermark is None:
            return GateDecision(signature, watermark)
        try:
            entry = await self._cache.get(signature)
        except Exception as e:
            logger.warning(
                f"Response cache lookup failed, treating as miss: {e}",
                extra={"cache_key": signature},
            )
            return GateDecision(signature, watermark)
        if is_fresh(entry, watermark):
            logger.debug(
                "Cache hit", extra={"cache_key": signature, "watermark": watermark},
            )
            return GateDecision(signature, watermark, entry)
        logger.debug(
            "Cache miss", extra={"cache_key": signature, "watermark": watermark},
        )
        return GateDecision(signature, watermark)

    async def record(self, decision: GateDecision, payload: Any) -> None:
        """Store a freshly computed payload under the watermark the gate observed."""
        if self._cache is None or decision.watermark is None:
            return
        try:
            await self._cache.set(
                decision.signature, CacheEntry(payload, decision.watermark),
            )
        except Exception as e:
            logger.warning(
                f"Response cache store failed: {e}",
                extra={"cache_key": decision.signature},
            )

    async def _current_watermark(self) -> Watermark | None:
        try:
            async with self._store.snapshot() as reader:
                return await reader.get_transfer_watermark()
        except StoreError as e:
            logger.warning(f"Transfer watermark unavailable, bypassing cache: {e}")
            return None
