"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "SUSE Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 4000

    # CORS (any http://localhost:<port> is always allowed)
    allowed_origins: list[str] = []

    # Indicator defaults
    rsi_period: int = 14
    ema_periods: list[int] = [20, 50, 200]
    bollinger_period: int = 20
    bollinger_k: float = 2.0
    atr_period: int = 14
    volume_lookback: int = 20

    # Classification thresholds
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    rsi_slope_tolerance: float = 0.01
    volatility_threshold: float = 0.10  # Bollinger bandwidth
    volume_high_threshold: float = 1.2
    volume_low_threshold: float = 0.8

    # Decision
    confidence_floor: float = 0.6

    # Input cap (newest candles kept)
    max_candles: int = 1000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
