"""Boundary Protocols - contracts between the query core and the ledger/cache shell.

Invariants:
    - Core NEVER imports from infrastructure - dependency arrows point inward only
    - Every read goes through a LedgerReader obtained from LedgerStore.snapshot();
      the reader IS the transaction handle and is unusable after the scope exits
    - Readers only surface holder/balance rows with a positive overall balance
    - get_token_holders returns None (not found) when the ticker was never deployed,
      and an empty RowPage when it exists but has no holders in range

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL store and test fakes share no base
    - snapshot() as async context manager: rollback on every exit path, cancellation included
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from brc20_api.core.cache_policy import CacheEntry
from brc20_api.core.domain_types import (
    Address, BalanceRow, HolderRow, RowPage, SupplyRow, Ticker, TokenRow, Watermark,
)
from brc20_api.core.pagination import PageWindow


class LedgerReader(Protocol):
    """Read operations bound to one consistent ledger snapshot."""
    async def get_tokens(
        self, tickers: list[Ticker] | None, page: PageWindow,
    ) -> RowPage[TokenRow]: ...
    async def get_token_supply(self, ticker: Ticker) -> SupplyRow | None: ...
    async def get_token_holders(
        self, ticker: Ticker, page: PageWindow,
    ) -> RowPage[HolderRow] | None: ...
    async def get_balances(
        self, address: Address, tickers: list[Ticker] | None, page: PageWindow,
    ) -> RowPage[BalanceRow]: ...
    async def get_transfer_watermark(self) -> Watermark: ...


class LedgerStore(Protocol):
    """Contract for the ledger system of record - implemented by shell."""
    def snapshot(self) -> AbstractAsyncContextManager[LedgerReader]: ...


class ResponseCache(Protocol):
    """Contract for the response cache - keyed by route+query signature."""
    async def get(self, key: str) -> CacheEntry | None: ...
    async def set(self, key: str, entry: CacheEntry) -> None: ...
