"""Service test fixtures - async DB + FastAPI test client + ledger seeding.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager patched so get_ledger_store() and readiness probes use the test DB
    - get_response_cache overridden with a fresh cache per test (no cross-test hits)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL isolation levels are not exercised here; the fake ledger covers them)
    - Snapshot factory shares the plain session factory: SQLite has no REPEATABLE READ
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import brc20_api.models  # noqa: F401
from brc20_api.db.base import Base
from brc20_api.infrastructure.database import DatabaseSessionManager
from brc20_api.infrastructure.ledger_store import SqlLedgerStore
from brc20_api.infrastructure.response_cache import (
    InMemoryResponseCache, get_response_cache,
)
import brc20_api.infrastructure.database as db_module
from brc20_api.main import app
from tests.services.ledger_seed import LedgerSeeder


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    manager._snapshot_factory = test_session_factory
    return manager


@pytest.fixture
def ledger_store(test_manager):
    return SqlLedgerStore(test_manager)


@pytest.fixture
def response_cache():
    return InMemoryResponseCache(max_entries=100)


@pytest.fixture
async def client(test_manager, response_cache):
    """FastAPI test client bound to the test DB and a fresh response cache."""
    app.dependency_overrides[get_response_cache] = lambda: response_cache

    # get_ledger_store() and the readiness probe read db_manager directly
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seed_ledger(test_db):
    return LedgerSeeder(test_db)
