"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) - single instance per process
    - api_default_limit <= api_max_limit

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://brc20:brc20@db:5432/brc20"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Snapshot reads - empty string disables the explicit isolation level (SQLite)
    snapshot_isolation_level: str = "REPEATABLE READ"

    # Pagination
    api_default_limit: int = 20
    api_max_limit: int = 60

    # Response cache
    response_cache_enabled: bool = True
    response_cache_max_entries: int = 10_000

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def check_limits(self):
        if not 1 <= self.api_default_limit <= self.api_max_limit:
            raise ValueError("api_default_limit must be between 1 and api_max_limit")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
