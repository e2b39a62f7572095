"""Balance ORM - the single (token, address) relation behind both holders and balances.

Invariants:
    - Primary key is (token_id, address)
    - total_balance = avail_balance + trans_balance
    - Rows with total_balance == 0 may exist in storage but are never surfaced
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from brc20_api.db.base import Base
from brc20_api.models.token import AMOUNT


class Brc20Balance(Base):
    """Balance of one token held by one address."""
    __tablename__ = "brc20_balances"

    token_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("brc20_tokens.id", ondelete="CASCADE"), primary_key=True,
    )
    address: Mapped[str] = mapped_column(String(90), primary_key=True)
    avail_balance: Mapped[Decimal] = mapped_column(
        AMOUNT, nullable=False, default=Decimal(0),
    )
    trans_balance: Mapped[Decimal] = mapped_column(
        AMOUNT, nullable=False, default=Decimal(0),
    )
    total_balance: Mapped[Decimal] = mapped_column(
        AMOUNT, nullable=False, default=Decimal(0),
    )

    __table_args__ = (
        Index("ix_brc20_balances_token_total", "token_id", "total_balance"),
        Index("ix_brc20_balances_address", "address"),
    )
