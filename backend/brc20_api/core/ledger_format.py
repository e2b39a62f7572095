"""Ledger Formatting - pure conversion from ledger rows to API response dicts.

Invariants:
    - Amounts render as decimal strings with exactly `decimals` fractional digits
    - mint_percentage renders with 4 fractional digits, "0.0000" when max_supply is 0
    - deploy_timestamp renders as epoch milliseconds (naive datetimes are UTC)
"""

from datetime import datetime, timedelta, timezone
from decimal import ROUND_DOWN, Context, Decimal

from brc20_api.core.domain_types import (
    BalanceRow, HolderRow, SupplyRow, TokenRow,
)

# BRC-20 amounts reach 2^64 with 18 decimals; the default 28-digit context is too small
_AMOUNT_CONTEXT = Context(prec=96, rounding=ROUND_DOWN)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_amount(value: Decimal, decimals: int) -> str:
    """Render a ledger amount with a fixed number of fractional digits."""
    exponent = Decimal(1).scaleb(-decimals)
    return f"{Decimal(value).quantize(exponent, context=_AMOUNT_CONTEXT):f}"


def mint_percentage(minted: Decimal, max_supply: Decimal) -> str:
    if max_supply <= 0:
        return "0.0000"
    ratio = _AMOUNT_CONTEXT.multiply(
        _AMOUNT_CONTEXT.divide(Decimal(minted), Decimal(max_supply)), Decimal(100),
    )
    return format_amount(ratio, 4)


def to_epoch_ms(ts: datetime) -> int:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (ts - _EPOCH) // timedelta(milliseconds=1)


def format_token(row: TokenRow) -> dict:
    return {
        "id": row.inscription_id,
        "number": row.inscription_number,
        "block_height": row.block_height,
        "tx_id": row.tx_id,
        "address": row.address,
        "ticker": row.ticker,
        "max_supply": format_amount(row.max_supply, row.decimals),
        "mint_limit": (
            format_amount(row.mint_limit, row.decimals)
            if row.mint_limit is not None else None
        ),
        "decimals": row.decimals,
        "deploy_timestamp": to_epoch_ms(row.deploy_timestamp),
        "minted_supply": format_amount(row.minted_supply, row.decimals),
        "tx_count": row.tx_count,
        "self_mint": row.self_mint,
    }


def format_supply(row: SupplyRow) -> dict:
    return {
        "max_supply": format_amount(row.max_supply, row.decimals),
        "minted_supply": format_amount(row.minted_supply, row.decimals),
        "holders": row.holders,
        "mint_percentage": mint_percentage(row.minted_supply, row.max_supply),
    }


def format_holder(row: HolderRow) -> dict:
    return {
        "address": row.address,
        "overall_balance": format_amount(row.overall_balance, row.decimals),
    }


def format_balance(row: BalanceRow) -> dict:
    return {
        "ticker": row.ticker,
        "available_balance": format_amount(row.available_balance, row.decimals),
        "transferrable_balance": format_amount(row.transferrable_balance, row.decimals),
        "overall_balance": format_amount(row.overall_balance, row.decimals),
    }
