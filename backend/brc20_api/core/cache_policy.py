"""Cache Policy - position-based freshness rules for cached ledger responses.

Invariants:
    - An entry is fresh iff its recorded position >= the current watermark
    - Unknown watermark (None) is never fresh: zero staleness tolerance
    - Signature is route path + sorted query pairs; repeated keys keep every value
    - ETag is the quoted watermark; weak validators (W/) compare equal to strong ones

Design Decisions:
    - Watermark comparison over TTL: ledger activity, not wall-clock time, makes data stale
"""

from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import urlencode

from brc20_api.core.domain_types import Watermark


@dataclass(frozen=True)
class CacheEntry:
    """A cached response payload tagged with the watermark observed at read time."""
    payload: Any
    position: Watermark


def cache_signature(path: str, query_items: Iterable[tuple[str, str]]) -> str:
    """Build the route+query cache key. Query pair order does not matter."""
    pairs = sorted(query_items)
    if not pairs:
        return path
    return f"{path}?{urlencode(pairs)}"


def is_fresh(entry: CacheEntry | None, watermark: Watermark | None) -> bool:
    if entry is None or watermark is None:
        return False
    return entry.position >= watermark


def etag_for(watermark: Watermark) -> str:
    return f'"{watermark}"'


def etag_matches(if_none_match: str | None, watermark: Watermark | None) -> bool:
    """True when the client's If-None-Match names the current watermark."""
    if not if_none_match or watermark is None:
        return False
    current = etag_for(watermark)
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate == "*":
            return True
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == current:
            return True
    return False
