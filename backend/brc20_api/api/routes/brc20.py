"""BRC-20 Routes - tokens, token details, holders and balances.

Invariants:
    - Every route passes the cache gate (handle_transfers_cache) before doing any work
    - limit/offset validated by core/pagination.py (ValidationError -> 400), not by Query bounds,
      so the contract is identical for every view
    - /tokens and /balances/{address} return empty pages, never 404
    - /tokens/{ticker} and /tokens/{ticker}/holders return the fixed 404 body

Design Decisions:
    - Thin routes: normalization, snapshots and shaping live in services/
"""

from fastapi import APIRouter, Depends, Query

from brc20_api.api.cache_hooks import GatedRequest, handle_transfers_cache
from brc20_api.config import Settings, get_settings
from brc20_api.core.pagination import normalize_page
from brc20_api.core.repository_protocols import LedgerStore
from brc20_api.infrastructure.ledger_store import get_ledger_store
from brc20_api.schemas.brc20 import (
    BalanceResponse, HolderResponse, NotFoundResponse, PaginatedResponse,
    TokenDetailsResponse, TokenResponse,
)
from brc20_api.services.ledger_queries import (
    list_balances, list_token_holders, list_tokens,
)
from brc20_api.services.token_details import fetch_token_details

router = APIRouter(prefix="/ordinals/v1/brc-20", tags=["brc-20"])

_NOT_FOUND = {404: {"model": NotFoundResponse}}


@router.get(
    "/tokens",
    response_model=PaginatedResponse[TokenResponse],
    operation_id="getBrc20Tokens",
)
async def get_brc20_tokens(
    ticker: list[str] | None = Query(None),
    offset: int | None = Query(None),
    limit: int | None = Query(None),
    gated: GatedRequest = Depends(handle_transfers_cache),
    store: LedgerStore = Depends(get_ledger_store),
    settings: Settings = Depends(get_settings),
):
    """Retrieves information for BRC-20 tokens."""
    page = normalize_page(
        limit, offset, settings.api_default_limit, settings.api_max_limit,
    )
    return await gated.remember(await list_tokens(store, ticker, page))


@router.get(
    "/tokens/{ticker}",
    response_model=TokenDetailsResponse,
    responses=_NOT_FOUND,
    operation_id="getBrc20TokenDetails",
)
async def get_brc20_token_details(
    ticker: str,
    gated: GatedRequest = Depends(handle_transfers_cache),
    store: LedgerStore = Depends(get_ledger_store),
):
    """Retrieves information for a BRC-20 token including supply and holders."""
    return await gated.remember(await fetch_token_details(store, ticker))


@router.get(
    "/tokens/{ticker}/holders",
    response_model=PaginatedResponse[HolderResponse],
    responses=_NOT_FOUND,
    operation_id="getBrc20TokenHolders",
)
async def get_brc20_token_holders(
    ticker: str,
    offset: int | None = Query(None),
    limit: int | None = Query(None),
    gated: GatedRequest = Depends(handle_transfers_cache),
    store: LedgerStore = Depends(get_ledger_store),
    settings: Settings = Depends(get_settings),
):
    """Retrieves a list of holders and their balances for a BRC-20 token."""
    page = normalize_page(
        limit, offset, settings.api_default_limit, settings.api_max_limit,
    )
    return await gated.remember(await list_token_holders(store, ticker, page))


@router.get(
    "/balances/{address}",
    response_model=PaginatedResponse[BalanceResponse],
    operation_id="getBrc20Balances",
)
async def get_brc20_balances(
    address: str,
    ticker: list[str] | None = Query(None),
    offset: int | None = Query(None),
    limit: int | None = Query(None),
    gated: GatedRequest = Depends(handle_transfers_cache),
    store: LedgerStore = Depends(get_ledger_store),
    settings: Settings = Depends(get_settings),
):
    """Retrieves BRC-20 token balances for a Bitcoin address."""
    page = normalize_page(
        limit, offset, settings.api_default_limit, settings.api_max_limit,
    )
    return await gated.remember(await list_balances(store, address, ticker, page))
