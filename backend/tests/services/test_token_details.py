"""Token Details - snapshot coordinator tests against the in-memory fake ledger.

Tests cover:
    - {token, supply} returned from one snapshot
    - Absent ticker -> NotFoundError(resource="token"); absent supply -> resource="supply"
    - Concurrent mutation between the existence and supply reads never tears the view
    - Store failure surfaces StoreError, rolls the snapshot back, returns nothing partial
    - Malformed ticker rejected before any snapshot is opened
"""

import asyncio

import pytest

from brc20_api.core.errors import NotFoundError, StoreError, ValidationError
from brc20_api.core.pagination import PageWindow
from brc20_api.services.token_details import fetch_token_details
from tests.services.fake_ledger import FakeLedger, make_token


@pytest.fixture
def ledger():
    ledger = FakeLedger()
    ledger.deploy(make_token("ordi", number=1), minted="0")
    ledger.credit("ordi", "addr-a", "500")
    ledger.credit("ordi", "addr-b", "300")
    return ledger


async def test_returns_token_and_supply(ledger):
    details = await fetch_token_details(ledger.store(), "ORDI")
    assert details["token"]["ticker"] == "ordi"
    assert details["token"]["minted_supply"] == "800.000000000000000000"
    assert details["supply"] == {
        "max_supply": "21000000.000000000000000000",
        "minted_supply": "800.000000000000000000",
        "holders": 2,
        "mint_percentage": "0.0038",
    }
    assert ledger.snapshots_opened == 1
    assert ledger.open_snapshots == 0


async def test_undeployed_ticker_is_token_not_found(ledger):
    with pytest.raises(NotFoundError) as exc_info:
        await fetch_token_details(ledger.store(), "zzzz")
    assert exc_info.value.resource == "token"
    assert exc_info.value.to_response() == {"error": "Not Found"}
    assert ledger.open_snapshots == 0


async def test_missing_supply_is_supply_not_found(ledger):
    ledger.deploy(make_token("sats", number=2), minted=None)
    with pytest.raises(NotFoundError) as exc_info:
        await fetch_token_details(ledger.store(), "sats")
    assert exc_info.value.resource == "supply"
    assert exc_info.value.http_status == 404
    assert ledger.rollbacks == 1


async def test_mutation_between_reads_does_not_tear_view(ledger):
    def ingest_during_lookup(name, live):
        if name == "get_tokens":
            live.credit("ordi", "addr-c", "200")

    ledger.on_read = ingest_during_lookup
    details = await fetch_token_details(ledger.store(), "ordi")

    # Both halves come from the snapshot opened before the concurrent write
    assert details["token"]["minted_supply"] == "800.000000000000000000"
    assert details["supply"]["minted_supply"] == "800.000000000000000000"
    assert details["supply"]["holders"] == 2
    # The write did land in the live ledger
    assert ledger.state.minted["ordi"] == 1000


async def test_supply_removed_mid_lookup_is_still_consistent(ledger):
    def drop_supply(name, live):
        if name == "get_tokens":
            live.state.minted.pop("ordi", None)

    ledger.on_read = drop_supply
    details = await fetch_token_details(ledger.store(), "ordi")
    assert details["supply"]["minted_supply"] == "800.000000000000000000"


async def test_without_snapshot_isolation_the_view_would_tear():
    """Control: a store with no isolation exposes the interleaved write."""
    ledger = FakeLedger(isolated=False)
    ledger.deploy(make_token("ordi"), minted="0")
    ledger.credit("ordi", "addr-a", "500")

    def ingest_during_lookup(name, live):
        if name == "get_tokens":
            live.credit("ordi", "addr-c", "200")

    ledger.on_read = ingest_during_lookup
    details = await fetch_token_details(ledger.store(), "ordi")
    assert details["token"]["minted_supply"] != details["supply"]["minted_supply"]


async def test_store_error_aborts_whole_lookup(ledger):
    ledger.fail_on = "get_token_supply"
    with pytest.raises(StoreError):
        await fetch_token_details(ledger.store(), "ordi")
    assert ledger.rollbacks == 1
    assert ledger.open_snapshots == 0


async def test_cancellation_rolls_back_open_snapshot(ledger):
    started = asyncio.Event()

    def signal_after_existence_check(name, live):
        if name == "get_tokens":
            started.set()

    ledger.on_read = signal_after_existence_check
    store = ledger.store()

    async def _lookup_then_stall():
        async with store.snapshot() as reader:
            await reader.get_tokens(["ordi"], PageWindow(limit=1, offset=0))
            await asyncio.sleep(10)

    task = asyncio.create_task(_lookup_then_stall())
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert ledger.rollbacks == 1
    assert ledger.open_snapshots == 0


async def test_malformed_ticker_never_opens_snapshot(ledger):
    with pytest.raises(ValidationError):
        await fetch_token_details(ledger.store(), "a b")
    assert ledger.snapshots_opened == 0
