from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./rolegate.db"
    DB_ECHO: bool = False
    DB_INIT_MAX_RETRIES: int = 10
    DB_INIT_RETRY_INTERVAL: float = 2.0

    # Logging
    LOG_LEVEL: str = "INFO"

    # Dynamic predicates
    # When enabled, "..._on" predicates called without a scope raise instead of denying.
    STRICT_SCOPED_PREDICATES: bool = False

    # Optional bootstrap role assigned by scripts/admin when creating users
    DEFAULT_ROLE_SLUG: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
