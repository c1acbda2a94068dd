"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Routes receive settings through Depends(get_settings), so tests
      override it instead of mutating the environment

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box
      with docker-compose
    - admin_password has no default: admin login stays closed until set
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://teamsignup:teamsignup@db:5432/teamsignup"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Admin
    admin_password: str | None = None

    # Sessions
    session_cookie_name: str = "teamsignup_sid"
    session_cookie_secure: bool = False
    session_max_age_seconds: int = 60 * 60 * 24 * 30

    # Startup
    seed_default_projects: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
