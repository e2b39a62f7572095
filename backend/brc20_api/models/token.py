"""Token ORM - deployed BRC-20 tokens, immutable once deployed.

Invariants:
    - id increases in deploy order and is the stable pagination key for /tokens
    - ticker_lower is unique; lookups always compare against it
    - max_supply >= minted supply (enforced by ingestion, not here)

Design Decisions:
    - ticker kept as deployed for display, ticker_lower for case-insensitive matching
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    BigInteger, Boolean, DateTime, Integer, Numeric, SmallInteger, String,
)
from sqlalchemy.orm import Mapped, mapped_column

from brc20_api.db.base import Base

# 2^64-1 whole units with 18 decimals
AMOUNT = Numeric(40, 18)


class Brc20Token(Base):
    """Token deploy record."""
    __tablename__ = "brc20_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticker: Mapped[str] = mapped_column(String(16), nullable=False)
    ticker_lower: Mapped[str] = mapped_column(
        String(16), nullable=False, unique=True, index=True,
    )
    inscription_id: Mapped[str] = mapped_column(
        String(80), nullable=False, unique=True,
    )
    inscription_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    block_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
    tx_id: Mapped[str] = mapped_column(String(64), nullable=False)
    address: Mapped[str] = mapped_column(String(90), nullable=False)
    max_supply: Mapped[Decimal] = mapped_column(AMOUNT, nullable=False)
    mint_limit: Mapped[Decimal | None] = mapped_column(AMOUNT, nullable=True)
    decimals: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=18)
    self_mint: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deploy_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
