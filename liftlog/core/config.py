"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Liftlog API"
    debug: bool = False
    environment: str = "development"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database. A full URL wins over the individual parts (handy for SQLite).
    database_url: str = ""
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "liftlog"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "liftlog"
    database_ssl_mode: str = "prefer"

    # Pool (ignored for SQLite)
    database_pool_size: int = 5
    database_max_overflow: int = 10
    sqlite_busy_timeout_seconds: float = 30.0

    # Ledger compare-and-write attempts before surfacing a conflict
    ledger_max_attempts: int = Field(default=4, ge=1, le=10)

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=prefer") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def sync_database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        if self.database_url:
            return self.database_url.replace("+aiosqlite", "").replace("+asyncpg", "")
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for the application (asyncpg / aiosqlite driver)."""
        if self.database_url:
            url = self.sync_database_url
            if url.startswith("sqlite://"):
                return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
            if url.startswith("postgresql://"):
                return url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
