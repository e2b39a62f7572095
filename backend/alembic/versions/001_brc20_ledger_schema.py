"""BRC-20 ledger schema - tokens, supplies, balances, ledger events.

Revision ID: 001_brc20_ledger
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_brc20_ledger"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

AMOUNT = sa.Numeric(40, 18)


def upgrade() -> None:
    op.create_table(
        "brc20_tokens",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("ticker", sa.String(16), nullable=False),
        sa.Column("ticker_lower", sa.String(16), nullable=False),
        sa.Column("inscription_id", sa.String(80), nullable=False, unique=True),
        sa.Column("inscription_number", sa.BigInteger, nullable=False),
        sa.Column("block_height", sa.BigInteger, nullable=False),
        sa.Column("tx_id", sa.String(64), nullable=False),
        sa.Column("address", sa.String(90), nullable=False),
        sa.Column("max_supply", AMOUNT, nullable=False),
        sa.Column("mint_limit", AMOUNT, nullable=True),
        sa.Column("decimals", sa.SmallInteger, nullable=False, server_default="18"),
        sa.Column("self_mint", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("deploy_timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_brc20_tokens_ticker_lower", "brc20_tokens", ["ticker_lower"], unique=True,
    )

    op.create_table(
        "brc20_supplies",
        sa.Column("token_id", sa.Integer, sa.ForeignKey("brc20_tokens.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("minted_supply", AMOUNT, nullable=False, server_default="0"),
        sa.Column("tx_count", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "brc20_balances",
        sa.Column("token_id", sa.Integer, sa.ForeignKey("brc20_tokens.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("address", sa.String(90), primary_key=True),
        sa.Column("avail_balance", AMOUNT, nullable=False, server_default="0"),
        sa.Column("trans_balance", AMOUNT, nullable=False, server_default="0"),
        sa.Column("total_balance", AMOUNT, nullable=False, server_default="0"),
    )
    op.create_index(
        "ix_brc20_balances_token_total", "brc20_balances", ["token_id", "total_balance"],
    )
    op.create_index("ix_brc20_balances_address", "brc20_balances", ["address"])

    op.create_table(
        "brc20_ledger_events",
        sa.Column("sequence", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("token_id", sa.Integer, sa.ForeignKey("brc20_tokens.id", ondelete="CASCADE"), nullable=False),
        sa.Column("operation", sa.String(16), nullable=False),
        sa.Column("inscription_id", sa.String(80), nullable=False),
        sa.Column("address", sa.String(90), nullable=False),
        sa.Column("amount", AMOUNT, nullable=False, server_default="0"),
        sa.Column("block_height", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("brc20_ledger_events")
    op.drop_index("ix_brc20_balances_address", table_name="brc20_balances")
    op.drop_index("ix_brc20_balances_token_total", table_name="brc20_balances")
    op.drop_table("brc20_balances")
    op.drop_table("brc20_supplies")
    op.drop_index("ix_brc20_tokens_ticker_lower", table_name="brc20_tokens")
    op.drop_table("brc20_tokens")
