"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "PriceLens Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    frontend_url: str = "http://localhost:3000"
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Indicator defaults (bars)
    indicator_sma_short: int = 20
    indicator_sma_long: int = 50
    indicator_rsi_period: int = 14
    indicator_macd_fast: int = 12
    indicator_macd_slow: int = 26
    indicator_macd_signal: int = 9
    indicator_bollinger_period: int = 20
    indicator_bollinger_std_dev: float = 2.0

    # Request limits
    max_bars_per_request: int = 5000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
