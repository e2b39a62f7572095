"""Cache Hooks - FastAPI dependency wiring the Cache Invalidation Gate into BRC-20 routes.

Invariants:
    - Runs before the route handler body: a fresh cached payload short-circuits the handler
    - Only a fresh cached entry short-circuits: If-None-Match equal to the current
      watermark ETag -> 304, otherwise the cached 200. Requests that never produced
      a 200 (validation errors, 404s) always reach the handler
    - Every gated response carries ETag: "<watermark>" when the watermark is known
    - Only payloads handed to GatedRequest.remember() are cached (200 responses)

Design Decisions:
    - Short-circuit by raising CacheShortCircuit, rendered by a dedicated exception
      handler: dependencies cannot return a response directly
"""

from dataclasses import dataclass
from typing import Any

from fastapi import Depends, Request, Response

from brc20_api.core.cache_policy import cache_signature, etag_for, etag_matches
from brc20_api.core.repository_protocols import LedgerStore, ResponseCache
from brc20_api.infrastructure.ledger_store import get_ledger_store
from brc20_api.infrastructure.response_cache import get_response_cache
from brc20_api.services.cache_gate import CacheGate, GateDecision


class CacheShortCircuit(Exception):
    """Signals that the request is answered from cache (200) or not modified (304)."""

    def __init__(self, status_code: int, etag: str, payload: Any = None):
        super().__init__(f"cache short-circuit ({status_code})")
        self.status_code = status_code
        self.etag = etag
        self.payload = payload


@dataclass
class GatedRequest:
    """Handle given to route handlers to record their payload after a miss."""
    gate: CacheGate
    decision: GateDecision

    async def remember(self, payload: Any) -> Any:
        await self.gate.record(self.decision, payload)
        return payload


async def handle_transfers_cache(
    request: Request,
    response: Response,
    store: LedgerStore = Depends(get_ledger_store),
    cache: ResponseCache | None = Depends(get_response_cache),
) -> GatedRequest:
    """Precondition check for every BRC-20 route."""
    gate = CacheGate(store, cache)
    signature = cache_signature(
        request.url.path, request.query_params.multi_items(),
    )
    decision = await gate.check(signature)
    if decision.watermark is not None:
        etag = etag_for(decision.watermark)
        response.headers["ETag"] = etag
        if decision.hit:
            if etag_matches(request.headers.get("if-none-match"), decision.watermark):
                raise CacheShortCircuit(304, etag)
            raise CacheShortCircuit(200, etag, decision.cached.payload)
    return GatedRequest(gate, decision)
