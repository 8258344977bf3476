"""Application configuration using pydantic-settings."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Historical feed
    feed_base_url: str = "http://ichart.finance.yahoo.com/table.csv"
    http_timeout: Optional[float] = None  # None -> httpx default (5s)

    # Storage
    duckdb_path: str = "./data/ohlc.db"

    # Downloader
    buffer_size: int = 50
    default_days_back: int = 30

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty disables the file handler
    debug_mode: bool = False  # Extra debug logging for feed requests (DEBUG_MODE=1)

    @property
    def duckdb_path_obj(self) -> Path:
        """Get DuckDB path as Path object."""
        path = Path(self.duckdb_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_file_obj(self) -> Optional[Path]:
        """Get log file path as Path object, or None when file logging is off."""
        if not self.log_file:
            return None
        path = Path(self.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path


settings = Settings()
