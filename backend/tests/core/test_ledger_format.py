"""Ledger Formatting - amount strings, mint percentage, timestamps."""

from datetime import datetime, timezone
from decimal import Decimal

from brc20_api.core.domain_types import BalanceRow, HolderRow, SupplyRow, TokenRow
from brc20_api.core.ledger_format import (
    format_amount, format_balance, format_holder, format_supply, format_token,
    mint_percentage, to_epoch_ms,
)


def test_amount_has_exact_fraction_digits():
    assert format_amount(Decimal("500"), 18) == "500.000000000000000000"
    assert format_amount(Decimal("1.5"), 2) == "1.50"
    assert format_amount(Decimal("7"), 0) == "7"


def test_amount_truncates_extra_precision():
    assert format_amount(Decimal("1.239"), 2) == "1.23"


def test_max_u64_amount_keeps_all_digits():
    value = Decimal("18446744073709551615.123456789012345678")
    assert format_amount(value, 18) == "18446744073709551615.123456789012345678"


def test_mint_percentage():
    assert mint_percentage(Decimal("800"), Decimal("21000000")) == "0.0038"
    assert mint_percentage(Decimal("21000000"), Decimal("21000000")) == "100.0000"
    assert mint_percentage(Decimal("5"), Decimal("0")) == "0.0000"


def test_epoch_ms_treats_naive_as_utc():
    aware = datetime(2023, 3, 8, tzinfo=timezone.utc)
    assert to_epoch_ms(aware) == 1678233600000
    assert to_epoch_ms(aware.replace(tzinfo=None)) == 1678233600000


def test_format_token():
    row = TokenRow(
        ticker="ordi", inscription_id="abci0", inscription_number=348020,
        block_height=779832, tx_id="b" * 64, address="1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN2",
        max_supply=Decimal("21000000"), mint_limit=None, decimals=2,
        deploy_timestamp=datetime(2023, 3, 8, tzinfo=timezone.utc),
        minted_supply=Decimal("10"), tx_count=3,
    )
    assert format_token(row) == {
        "id": "abci0",
        "number": 348020,
        "block_height": 779832,
        "tx_id": "b" * 64,
        "address": "1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN2",
        "ticker": "ordi",
        "max_supply": "21000000.00",
        "mint_limit": None,
        "decimals": 2,
        "deploy_timestamp": 1678233600000,
        "minted_supply": "10.00",
        "tx_count": 3,
        "self_mint": False,
    }


def test_format_supply_holder_balance():
    supply = SupplyRow("ordi", 1, Decimal("100"), Decimal("25"), 4)
    assert format_supply(supply) == {
        "max_supply": "100.0",
        "minted_supply": "25.0",
        "holders": 4,
        "mint_percentage": "25.0000",
    }
    assert format_holder(HolderRow("addr", 1, Decimal("3"))) == {
        "address": "addr", "overall_balance": "3.0",
    }
    assert format_balance(BalanceRow("ordi", 0, Decimal("2"), Decimal("1"), Decimal("3"))) == {
        "ticker": "ordi",
        "available_balance": "2",
        "transferrable_balance": "1",
        "overall_balance": "3",
    }


def test_epoch_ms_is_exact_integer_millis():
    ts = datetime(2023, 3, 8, 0, 0, 0, 123000, tzinfo=timezone.utc)
    assert to_epoch_ms(ts) == 1678233600123
    assert to_epoch_ms(ts.replace(microsecond=999999)) == 1678233600999
