"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All connection strings come from environment variables or .env
    - get_settings() is cached (lru_cache): single instance per process
    - Retry delays are milliseconds, cache TTL is seconds

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults for every setting: works out of the box with docker-compose
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.infrastructure.retry import RetryPolicy


def async_database_url(url: str) -> str:
    """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://empstatus:empstatus@db:5432/empstatus"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return async_database_url(v) if isinstance(v, str) else v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Cache
    redis_url: str = "redis://localhost:6379/0"
    redis_connect_timeout_seconds: float = 2.0
    redis_socket_timeout_seconds: float = 2.0
    cache_ttl_seconds: int = Field(3600, gt=0)

    # Retry
    retry_max_attempts: int = Field(3, ge=1)
    retry_initial_delay_ms: int = Field(1000, ge=0)
    retry_db_initial_delay_ms: int = Field(500, ge=0)
    retry_backoff_multiplier: float = Field(2.0, ge=1.0)
    retry_max_delay_ms: int = Field(10_000, ge=0)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def retry_policy(self) -> RetryPolicy:
        """General-purpose policy."""
        return RetryPolicy(
            max_attempts=self.retry_max_attempts,
            initial_delay_ms=self.retry_initial_delay_ms,
            backoff_multiplier=self.retry_backoff_multiplier,
            max_delay_ms=self.retry_max_delay_ms,
        )

    def db_retry_policy(self) -> RetryPolicy:
        """Policy for record store calls (shorter first delay)."""
        return self.retry_policy().for_data_store(self.retry_db_initial_delay_ms)


@lru_cache
def get_settings() -> Settings:
    return Settings()
