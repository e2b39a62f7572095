"""Token Details - existence + supply lookup inside one ledger snapshot.

Invariants:
    - Token existence and supply are read through the SAME LedgerReader (one transaction)
    - Absent token -> NotFoundError(resource="token")
    - Token present but supply absent -> NotFoundError(resource="supply"), logged as an
      ingestion inconsistency; externally both render the same 404 body
    - Any StoreError aborts the whole lookup; a partial {token, supply} is never returned
    - The snapshot is closed (rolled back on error) before the response is built
"""

import logging

from brc20_api.core.domain_types import LedgerResource
from brc20_api.core.errors import ErrorContext, NotFoundError
from brc20_api.core.filters import normalize_ticker
from brc20_api.core.ledger_format import format_supply, format_token
from brc20_api.core.pagination import PageWindow
from brc20_api.core.repository_protocols import LedgerStore

logger = logging.getLogger(__name__)

_SINGLE_ROW = PageWindow(limit=1, offset=0)


async def fetch_token_details(store: LedgerStore, raw_ticker: str) -> dict:
    """Return {token, supply} for one ticker, both from the same snapshot."""
    ticker = normalize_ticker(raw_ticker)
    async with store.snapshot() as reader:
        tokens = await reader.get_tokens([ticker], _SINGLE_ROW)
        if not tokens.rows:
            raise NotFoundError(
                LedgerResource.TOKEN.value, ticker, ErrorContext(ticker=ticker),
            )
        supply = await reader.get_token_supply(ticker)
        if supply is None:
            logger.warning(
                f"Token '{ticker}' is deployed but has no supply record",
                extra={"ticker": ticker, "resource": LedgerResource.SUPPLY.value},
            )
            raise NotFoundError(
                LedgerResource.SUPPLY.value, ticker, ErrorContext(ticker=ticker),
            )
        token = tokens.rows[0]
    return {"token": format_token(token), "supply": format_supply(supply)}
