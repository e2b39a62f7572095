"""BRC-20 Ledger Query API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerApiError and cache short-circuits to responses
    - CORS configured from settings (not hardcoded)
    - Database and response cache initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brc20_api.api.error_handlers import register_error_handlers
from brc20_api.api.routes import brc20, health
from brc20_api.config import get_settings
from brc20_api.infrastructure import database
from brc20_api.infrastructure.response_cache import init_response_cache
from brc20_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        snapshot_isolation_level=settings.snapshot_isolation_level,
    )
    init_response_cache(
        settings.response_cache_enabled, settings.response_cache_max_entries,
    )
    logger.info("BRC-20 API started")
    yield
    logger.info("BRC-20 API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="BRC-20 Ledger Query API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["ETag"],
)

app.include_router(health.router)
app.include_router(brc20.router)

register_error_handlers(app)
