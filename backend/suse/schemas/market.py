"""
CONTRACT 1: Market Data

Input: RawCandle list (untrusted caller data)
Output: Candle list (normalized) and MarketData (latest bar summary)

Candles are repaired by the normalizer, never rejected one by one.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "M1"
    M5 = "M5"
    M15 = "M15"
    M30 = "M30"
    H1 = "H1"
    H4 = "H4"
    D1 = "D1"
    W1 = "W1"


# =============================================================================
# INPUT: RawCandle
# =============================================================================


class RawCandle(BaseModel):
    """
    Candle as received from a caller.
    Prices may be negative, inconsistent or missing; timestamp may be epoch ms
    or ISO. Missing fields are repaired by the normalizer.
    """

    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None
    timestamp: Optional[Union[int, float, str, datetime]] = Field(
        default=None,
        description="Epoch milliseconds or ISO-8601 date string",
    )


# =============================================================================
# OUTPUT: Candle / MarketData
# =============================================================================


class Candle(BaseModel):
    """
    Normalized OHLCV bar.

    Invariants: every price and volume >= 0, high >= open, low <= open.
    """

    open: float = Field(..., ge=0)
    high: float = Field(..., ge=0)
    low: float = Field(..., ge=0)
    close: float = Field(..., ge=0)
    volume: float = Field(..., ge=0)
    timestamp: int = Field(..., description="Epoch milliseconds")

    class Config:
        frozen = True


class OHLC(BaseModel):
    """Prices of the latest candle."""

    open: float
    high: float
    low: float
    close: float


class MarketData(BaseModel):
    """Current market state taken from the newest candle."""

    symbol: str
    timeframe: Timeframe
    timestamp: str = Field(..., description="ISO-8601 time of the latest candle")
    ohlc: OHLC
    volume: float
    spread: float = 0.0

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "EUR/USD",
                "timeframe": "M5",
                "timestamp": "2024-02-04T10:30:00+00:00",
                "ohlc": {
                    "open": 1.0862,
                    "high": 1.0871,
                    "low": 1.0858,
                    "close": 1.0867,
                },
                "volume": 1234,
                "spread": 0.8,
            }
        }
