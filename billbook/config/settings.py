"""
Application settings.

Every group reads its own environment prefix (``STORAGE_``, ``API_``,
``AUTH_``, ``REPORT_``); top-level fields and a ``.env`` file are read by
``Settings`` itself.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET = "change-me"


class StorageSettings(BaseSettings):
    """SQLite location and pool."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "billbook.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0)  # ms a writer waits for the lock

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]


class AuthSettings(BaseSettings):
    """Bearer token verification."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    secret_key: str = DEFAULT_SECRET
    algorithm: str = "HS256"
    token_expire_minutes: int = Field(default=60 * 24, gt=0)


class ReportSettings(BaseSettings):
    """Figures used by reports and the dashboard."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    gst_rate: float = Field(default=0.18, ge=0, le=1)
    cost_ratio: float = Field(default=0.70, ge=0, le=1)  # assumed cost share of an item amount
    low_stock_threshold: int = Field(default=20, ge=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "billbook"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["auto", "console", "json"] = "auto"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)

    @model_validator(mode="after")
    def require_real_secret_in_production(self) -> "Settings":
        if self.environment == "production" and self.auth.secret_key == DEFAULT_SECRET:
            raise ValueError("AUTH_SECRET_KEY must be set in production")
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Load settings once and reuse them."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
