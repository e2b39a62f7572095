"""Ledger Queries - paginated token, holder and balance listings.

Invariants:
    - Filters are normalized BEFORE a snapshot is opened (validation never hits the store)
    - Each listing reads count and page inside one snapshot, so total matches results
    - /tokens and /balances never 404: unknown tickers simply do not match
    - Holders 404 only when the ticker was never deployed
"""

from brc20_api.core.domain_types import LedgerResource
from brc20_api.core.errors import ErrorContext, NotFoundError
from brc20_api.core.filters import (
    normalize_address, normalize_ticker, normalize_tickers,
)
from brc20_api.core.ledger_format import (
    format_balance, format_holder, format_token,
)
from brc20_api.core.pagination import PageWindow, build_envelope
from brc20_api.core.repository_protocols import LedgerStore


async def list_tokens(
    store: LedgerStore, raw_tickers: list[str] | None, page: PageWindow,
) -> dict:
    tickers = normalize_tickers(raw_tickers)
    async with store.snapshot() as reader:
        tokens = await reader.get_tokens(tickers, page)
    return build_envelope(page, tokens.total, [format_token(r) for r in tokens.rows])


async def list_token_holders(
    store: LedgerStore, raw_ticker: str, page: PageWindow,
) -> dict:
    ticker = normalize_ticker(raw_ticker)
    async with store.snapshot() as reader:
        holders = await reader.get_token_holders(ticker, page)
    if holders is None:
        raise NotFoundError(
            LedgerResource.TOKEN.value, ticker, ErrorContext(ticker=ticker),
        )
    return build_envelope(page, holders.total, [format_holder(r) for r in holders.rows])


async def list_balances(
    store: LedgerStore,
    raw_address: str,
    raw_tickers: list[str] | None,
    page: PageWindow,
) -> dict:
    address = normalize_address(raw_address)
    tickers = normalize_tickers(raw_tickers)
    async with store.snapshot() as reader:
        balances = await reader.get_balances(address, tickers, page)
    return build_envelope(
        page, balances.total, [format_balance(r) for r in balances.rows],
    )
