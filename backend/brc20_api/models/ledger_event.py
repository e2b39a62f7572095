"""Ledger Event ORM - the append-only deploy/mint/transfer log.

Invariants:
    - sequence strictly increases; max(sequence) is the transfer watermark
    - Rows are never updated or deleted
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from brc20_api.core.domain_types import LedgerOperation
from brc20_api.db.base import Base
from brc20_api.models.token import AMOUNT


class Brc20LedgerEvent(Base):
    """One applied ledger operation."""
    __tablename__ = "brc20_ledger_events"

    # SQLite only auto-increments INTEGER PRIMARY KEY
    sequence: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    token_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("brc20_tokens.id", ondelete="CASCADE"), nullable=False,
    )
    operation: Mapped[str] = mapped_column(
        String(16), nullable=False, default=LedgerOperation.TRANSFER.value,
    )
    inscription_id: Mapped[str] = mapped_column(String(80), nullable=False)
    address: Mapped[str] = mapped_column(String(90), nullable=False)
    amount: Mapped[Decimal] = mapped_column(AMOUNT, nullable=False, default=Decimal(0))
    block_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
