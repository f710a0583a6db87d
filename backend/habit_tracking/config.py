"""Application Configuration — habit service settings read from the environment.

Invariants:
    - get_settings() is cached (lru_cache): one Settings per process
    - habit_repository picks the persistence adapter; only "sql" needs database_url
    - database_url always names an async driver (postgresql:// is rewritten)

Design Decisions:
    - pydantic-settings with .env support; every field has a local-dev default
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RepositoryKind = Literal["sql", "memory"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Persistence
    habit_repository: RepositoryKind = "sql"
    database_url: str = "postgresql+asyncpg://habits:habits@db:5432/habits"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # HTTP
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql://; the engine needs asyncpg."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def uses_sql(self) -> bool:
        return self.habit_repository == "sql"


@lru_cache
def get_settings() -> Settings:
    return Settings()
