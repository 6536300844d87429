"""Punchlines settings, read from the environment and an optional .env file.

Invariants:
    - get_settings() is cached (lru_cache): one Settings per process
    - Game-rule knobs (code length, hand size, retry budgets) are validated ranges,
      so a bad env value fails at startup rather than mid-game
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://punchlines:punchlines@db:5432/punchlines"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs use postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Game rules
    game_code_length: int = Field(6, ge=4, le=12)
    game_code_max_attempts: int = Field(10, ge=1)
    hand_size: int = Field(10, ge=3)

    # Concurrency: optimistic version-check retries per operation
    save_max_retries: int = Field(5, ge=1)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
