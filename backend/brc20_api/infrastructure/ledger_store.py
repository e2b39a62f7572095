"""SQL Ledger Store - LedgerStore/LedgerReader implementation over async SQLAlchemy.

Invariants:
    - Every reader is bound to one snapshot session; count and page run in it together
    - Holders and balances are ONE query over brc20_balances parameterized by the
      fixed dimension (token_id vs address); the total_balance > 0 filter lives only there
    - Orderings are total: tokens by id, holders by (total_balance DESC, address ASC),
      balances by ticker_lower ASC
    - Returned rows are frozen dataclasses; no ORM instance escapes the snapshot
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, AsyncGenerator

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from brc20_api.core.domain_types import (
    Address, BalanceRow, HolderRow, RowPage, SupplyRow, Ticker, TokenRow, Watermark,
)
from brc20_api.core.pagination import PageWindow
from brc20_api.infrastructure.database import DatabaseSessionManager, get_db_manager
from brc20_api.models.balance import Brc20Balance
from brc20_api.models.ledger_event import Brc20LedgerEvent
from brc20_api.models.supply import Brc20Supply
from brc20_api.models.token import Brc20Token


class SqlLedgerReader:
    """LedgerReader bound to a single snapshot session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_tokens(
        self, tickers: list[Ticker] | None, page: PageWindow,
    ) -> RowPage[TokenRow]:
        query = (
            select(Brc20Token, Brc20Supply.minted_supply, Brc20Supply.tx_count)
            .outerjoin(Brc20Supply, Brc20Supply.token_id == Brc20Token.id)
        )
        if tickers:
            query = query.where(Brc20Token.ticker_lower.in_(tickers))
        total = await self._count(query)
        if page.offset >= total:
            return RowPage(total=total)
        result = await self._db.execute(
            query.order_by(Brc20Token.id.asc())
            .limit(page.limit).offset(page.offset),
        )
        return RowPage(total=total, rows=[
            _token_row(token, minted, tx_count)
            for token, minted, tx_count in result.all()
        ])

    async def get_token_supply(self, ticker: Ticker) -> SupplyRow | None:
        result = await self._db.execute(
            select(Brc20Token, Brc20Supply.minted_supply)
            .join(Brc20Supply, Brc20Supply.token_id == Brc20Token.id)
            .where(Brc20Token.ticker_lower == ticker),
        )
        row = result.one_or_none()
        if row is None:
            return None
        token, minted = row
        holders = await self._count(
            self._positive_balances(Brc20Balance.token_id, token.id),
        )
        return SupplyRow(
            ticker=token.ticker,
            decimals=token.decimals,
            max_supply=token.max_supply,
            minted_supply=minted,
            holders=holders,
        )

    async def get_token_holders(
        self, ticker: Ticker, page: PageWindow,
    ) -> RowPage[HolderRow] | None:
        token_id = await self._db.scalar(
            select(Brc20Token.id).where(Brc20Token.ticker_lower == ticker),
        )
        if token_id is None:
            return None
        query = self._positive_balances(Brc20Balance.token_id, token_id)
        total = await self._count(query)
        if page.offset >= total:
            return RowPage(total=total)
        result = await self._db.execute(
            query.order_by(
                Brc20Balance.total_balance.desc(), Brc20Balance.address.asc(),
            ).limit(page.limit).offset(page.offset),
        )
        return RowPage(total=total, rows=[
            HolderRow(
                address=balance.address,
                decimals=decimals,
                overall_balance=balance.total_balance,
            )
            for balance, _, decimals in result.all()
        ])

    async def get_balances(
        self, address: Address, tickers: list[Ticker] | None, page: PageWindow,
    ) -> RowPage[BalanceRow]:
        query = self._positive_balances(Brc20Balance.address, address)
        if tickers:
            query = query.where(Brc20Token.ticker_lower.in_(tickers))
        total = await self._count(query)
        if page.offset >= total:
            return RowPage(total=total)
        result = await self._db.execute(
            query.order_by(Brc20Token.ticker_lower.asc())
            .limit(page.limit).offset(page.offset),
        )
        return RowPage(total=total, rows=[
            BalanceRow(
                ticker=ticker,
                decimals=decimals,
                available_balance=balance.avail_balance,
                transferrable_balance=balance.trans_balance,
                overall_balance=balance.total_balance,
            )
            for balance, ticker, decimals in result.all()
        ])

    async def get_transfer_watermark(self) -> Watermark:
        position = await self._db.scalar(
            select(func.coalesce(func.max(Brc20LedgerEvent.sequence), 0)),
        )
        return Watermark(int(position or 0))

    # ─── helpers ──────────────────────────────────────────────────

    @staticmethod
    def _positive_balances(
        fixed: InstrumentedAttribute, value: Any,
    ) -> Select:
        """Balance rows with the fixed dimension pinned; zero balances excluded."""
        return (
            select(Brc20Balance, Brc20Token.ticker, Brc20Token.decimals)
            .join(Brc20Token, Brc20Token.id == Brc20Balance.token_id)
            .where(fixed == value, Brc20Balance.total_balance > 0)
        )

    async def _count(self, query: Select) -> int:
        total = await self._db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        return int(total or 0)


def _token_row(token: Brc20Token, minted, tx_count) -> TokenRow:
    return TokenRow(
        ticker=token.ticker,
        inscription_id=token.inscription_id,
        inscription_number=token.inscription_number,
        block_height=token.block_height,
        tx_id=token.tx_id,
        address=token.address,
        max_supply=token.max_supply,
        mint_limit=token.mint_limit,
        decimals=token.decimals,
        deploy_timestamp=token.deploy_timestamp,
        minted_supply=minted if minted is not None else Decimal(0),
        tx_count=tx_count or 0,
        self_mint=token.self_mint,
    )


class SqlLedgerStore:
    """LedgerStore backed by the shared DatabaseSessionManager."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    @asynccontextmanager
    async def snapshot(self) -> AsyncGenerator[SqlLedgerReader, None]:
        async with self._manager.snapshot() as session:
            yield SqlLedgerReader(session)


def get_ledger_store() -> SqlLedgerStore:
    """FastAPI dependency for the ledger store."""
    return SqlLedgerStore(get_db_manager())
