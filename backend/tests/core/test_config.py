"""Settings - environment parsing and limit consistency."""

import pytest
from pydantic import ValidationError as SettingsError

from brc20_api.config import Settings


def test_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/brc20")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/brc20"


def test_pagination_defaults():
    settings = Settings()
    assert settings.api_default_limit == 20
    assert settings.api_max_limit == 60


def test_default_limit_must_not_exceed_max():
    with pytest.raises(SettingsError):
        Settings(api_default_limit=61, api_max_limit=60)


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("API_MAX_LIMIT", "100")
    monkeypatch.setenv("RESPONSE_CACHE_ENABLED", "false")
    settings = Settings()
    assert settings.api_max_limit == 100
    assert settings.response_cache_enabled is False
