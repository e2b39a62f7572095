"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - Ticker is always the canonical lower-case form produced by core/filters.py
    - Address is validated against the Bitcoin address grammar before it is wrapped
    - Watermark is the highest applied ledger event sequence (0 = empty log)
    - Ledger rows are immutable snapshots of store state, never mutated by the API

Design Decisions:
    - NewType for identifiers: zero runtime cost, full type-checker support
    - Frozen dataclasses for rows: the store returns values, not ORM objects,
      so nothing leaks out of the snapshot session
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, NewType, TypeVar


# ─── Identity Types ──────────────────────────────────────────────

Ticker = NewType("Ticker", str)
Address = NewType("Address", str)
Watermark = NewType("Watermark", int)


# ─── Enums ───────────────────────────────────────────────────────

class LedgerResource(str, Enum):
    """Resource kinds a lookup can fail to find. Logged, never rendered."""
    TOKEN = "token"
    SUPPLY = "supply"


class LedgerOperation(str, Enum):
    """Event kinds in the append-only ledger log."""
    DEPLOY = "deploy"
    MINT = "mint"
    TRANSFER = "transfer"
    TRANSFER_SEND = "transfer_send"


# ─── Ledger Rows ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TokenRow:
    """Deployed token metadata, immutable once deployed."""
    ticker: str
    inscription_id: str
    inscription_number: int
    block_height: int
    tx_id: str
    address: str
    max_supply: Decimal
    mint_limit: Decimal | None
    decimals: int
    deploy_timestamp: datetime
    minted_supply: Decimal
    tx_count: int
    self_mint: bool = False


@dataclass(frozen=True)
class SupplyRow:
    """Supply figures for one ticker."""
    ticker: str
    decimals: int
    max_supply: Decimal
    minted_supply: Decimal
    holders: int


@dataclass(frozen=True)
class HolderRow:
    """One address holding a positive balance of a ticker."""
    address: str
    decimals: int
    overall_balance: Decimal


@dataclass(frozen=True)
class BalanceRow:
    """Balance of one ticker held by an address."""
    ticker: str
    decimals: int
    available_balance: Decimal
    transferrable_balance: Decimal
    overall_balance: Decimal


T = TypeVar("T")


@dataclass(frozen=True)
class RowPage(Generic[T]):
    """A page of rows plus the count of every matching row in the snapshot."""
    total: int
    rows: list[T] = field(default_factory=list)
