"""Runtime configuration from environment variables and ``.env``."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATABASE_FILENAME = "stock-monitor.db"


def get_default_data_dir() -> Path:
    return Path.home() / ".stockwatch"


class Settings(BaseSettings):
    """
    Application configuration.

    Every field can be set from the environment by its upper-case name,
    e.g. ``MARKET_DATA_PROVIDER=stub`` or ``QUOTE_CACHE_TTL_SECONDS=30``.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Stock Watch"
    log_level: str = "INFO"

    # Storage: database_url wins over data_dir when both are set
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    # Upstream market data
    market_data_provider: Literal["yahoo", "stub"] = "yahoo"
    quote_cache_ttl_seconds: int = Field(default=60, ge=0)
    ticker_cache_ttl_seconds: int = Field(default=86400, ge=0)
    fetch_timeout_seconds: float = Field(default=10.0, gt=0)
    max_fetch_workers: int = Field(default=8, ge=1)

    # Lookback for technical indicators (covers the 52-week range)
    history_days: int = Field(default=365, ge=1)

    def get_data_dir(self) -> Path:
        """Data directory, created on first use."""
        path = self.data_dir or get_default_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def get_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.get_data_dir() / DATABASE_FILENAME}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Current settings, loaded from the environment on first access."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Forget the current settings so the next access reloads them."""
    global _settings
    _settings = None
