"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All credentials come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - database_url is always an async driver URL once validated

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - POSTGRES_* parts assembled into a URL unless DATABASE_URL overrides them
      (ADR: tests point DATABASE_URL at SQLite without touching POSTGRES_*)
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "users"
    postgres_user: str = "postgres"
    postgres_password: str = ""
    database_url: str | None = None
    database_pool_size: int = 20
    database_max_overflow: int = 10

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Runtime
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def assemble_database_url(self) -> "Settings":
        if not self.database_url:
            self.database_url = URL.create(
                "postgresql+asyncpg",
                username=self.postgres_user,
                password=self.postgres_password or None,
                host=self.postgres_host,
                port=self.postgres_port,
                database=self.postgres_db,
            ).render_as_string(hide_password=False)
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def safe_database_target(self) -> dict:
        """Connection target for logs — never includes the password."""
        url = make_url(self.database_url)
        return {
            "driver": url.drivername,
            "host": url.host,
            "port": url.port,
            "database": url.database,
            "user": url.username,
            "ssl": self.is_production,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
