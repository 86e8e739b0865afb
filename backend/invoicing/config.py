"""Invoicing Settings — database, invoice rules, API and logging knobs from the environment.

Invariants:
    - Every field has a default: an unconfigured checkout runs against ./invoices.db
    - DATABASE_URL in postgresql:// form is rewritten to the asyncpg driver
    - INVOICE_MAX_FUTURE_DAYS bounds header updates only; creation has no date bound
    - service_version is the installed distribution's version unless SERVICE_VERSION overrides it
    - get_settings() is cached (lru_cache): read once per process, cleared only by tests

Design Decisions:
    - pydantic-settings with .env support, case-insensitive names
    - Version read from package metadata so pyproject.toml stays the single source
"""

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DISTRIBUTION_NAME = "invoicing-service"


def _distribution_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # Running from a source tree without `pip install -e .`
        return "0.0.0+source"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service identity (health payload, OpenAPI)
    service_name: str = "invoicing-api"
    service_version: str = Field(default_factory=_distribution_version)

    # Database
    database_url: str = "sqlite+aiosqlite:///./invoices.db"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Invoice rules
    invoice_max_future_days: int = 30

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging (LOG_FORMAT=text for local runs)
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
