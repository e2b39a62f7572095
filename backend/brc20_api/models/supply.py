"""Supply ORM - minted supply and activity counters per token.

Invariants:
    - At most one row per token (token_id is the primary key)
    - minted_supply is monotonically non-decreasing, written only by ingestion
    - A deployed token without a supply row is an ingestion inconsistency
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from brc20_api.db.base import Base
from brc20_api.models.token import AMOUNT


class Brc20Supply(Base):
    """Supply record derived from the mint/transfer event log."""
    __tablename__ = "brc20_supplies"

    token_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("brc20_tokens.id", ondelete="CASCADE"), primary_key=True,
    )
    minted_supply: Mapped[Decimal] = mapped_column(
        AMOUNT, nullable=False, default=Decimal(0),
    )
    tx_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
