"""Root conftest - shared test configuration."""

import os

# Ensure tests never reach a real ledger database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("SNAPSHOT_ISOLATION_LEVEL", "")
