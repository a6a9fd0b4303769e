"""
CONTRACT 2: Indicator Engine

Input: list[Candle] (normalized) + AnalysisConfig
Output: TechnicalAnalysis

This module performs ALL mathematical calculations.
Pure Python/NumPy - every value is recomputed per call.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Interpretation(str, Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class RSIZone(str, Enum):
    OVERSOLD = "OVERSOLD"
    NEUTRAL = "NEUTRAL"
    OVERBOUGHT = "OVERBOUGHT"


class Slope(str, Enum):
    RISING = "RISING"
    FALLING = "FALLING"
    FLAT = "FLAT"


class MarketTrend(str, Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    LATERAL = "LATERAL"
    HIGH_VOLATILITY = "HIGH_VOLATILITY"


class BandPosition(str, Enum):
    ABOVE_UPPER = "ABOVE_UPPER"
    ABOVE_MIDDLE = "ABOVE_MIDDLE"
    BELOW_MIDDLE = "BELOW_MIDDLE"
    BELOW_LOWER = "BELOW_LOWER"


class VolatilityZone(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    EXTREME = "EXTREME"


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class IndicatorValue(BaseModel):
    """A single indicator reading with its qualitative meaning."""

    name: str
    value: float
    interpretation: Interpretation
    description: Optional[str] = None


class RSIAnalysis(IndicatorValue):
    """RSI reading plus zone and direction."""

    value: float = Field(..., ge=0, le=100)
    slope: Slope
    zone: RSIZone


class EMAAnalysis(BaseModel):
    """
    EMA family (fast, medium, slow) and where price sits against each.

    Keys follow the configured periods, e.g. "ema20" and "aboveEMA20".
    """

    periods: list[int] = Field(..., min_length=3, max_length=3)
    values: dict[str, float]
    price_relation: dict[str, bool]
    fast: float
    medium: float
    slow: float


class BollingerBandsData(BaseModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float
    bandwidth: float = Field(..., ge=0, description="Band width as ratio of middle")
    price_position: BandPosition


class FibonacciData(BaseModel):
    """Retracement levels between the window's highest high and lowest low."""

    level_0: float
    level_236: float
    level_382: float
    level_500: float
    level_618: float
    level_786: float
    level_1000: float
    nearest_level: str = Field(..., description="Label of closest level, e.g. 61.8%")
    distance_to_nearest: float = Field(
        ..., ge=0, description="Distance to nearest level as a fraction of price"
    )


# =============================================================================
# OUTPUT: TechnicalAnalysis (Complete Response)
# =============================================================================


class TechnicalAnalysis(BaseModel):
    """
    Every indicator derived from one candle window.
    Returned by: Indicator Service
    Consumed by: Decision Engine, Analysis Assembler
    """

    close: float = Field(..., ge=0, description="Latest close the analysis refers to")
    rsi: RSIAnalysis
    ema: EMAAnalysis
    vwap: IndicatorValue
    atr: IndicatorValue
    volatility_zone: VolatilityZone
    bollinger_bands: BollingerBandsData
    fibonacci: FibonacciData
    volume_analysis: IndicatorValue
    trend: MarketTrend

    class Config:
        json_schema_extra = {
            "example": {
                "close": 1.0867,
                "rsi": {
                    "name": "RSI (14)",
                    "value": 38,
                    "interpretation": "BULLISH",
                    "description": "RSI rising in neutral zone",
                    "slope": "RISING",
                    "zone": "NEUTRAL",
                },
                "ema": {
                    "periods": [20, 50, 200],
                    "values": {"ema20": 1.0862, "ema50": 1.0848, "ema200": 1.0792},
                    "price_relation": {
                        "aboveEMA20": True,
                        "aboveEMA50": True,
                        "aboveEMA200": True,
                    },
                    "fast": 1.0862,
                    "medium": 1.0848,
                    "slow": 1.0792,
                },
                "vwap": {
                    "name": "VWAP",
                    "value": 1.0855,
                    "interpretation": "BULLISH",
                    "description": "Price above VWAP",
                },
                "atr": {
                    "name": "ATR (14)",
                    "value": 0.0045,
                    "interpretation": "NEUTRAL",
                    "description": "Low volatility (ATR 0.41% of price)",
                },
                "volatility_zone": "LOW",
                "bollinger_bands": {
                    "upper": 1.0912,
                    "middle": 1.0867,
                    "lower": 1.0822,
                    "bandwidth": 0.0083,
                    "price_position": "ABOVE_MIDDLE",
                },
                "fibonacci": {
                    "level_0": 1.0950,
                    "level_236": 1.0911,
                    "level_382": 1.0887,
                    "level_500": 1.0867,
                    "level_618": 1.0847,
                    "level_786": 1.0820,
                    "level_1000": 1.0784,
                    "nearest_level": "50%",
                    "distance_to_nearest": 0.0,
                },
                "volume_analysis": {
                    "name": "Relative Volume (20)",
                    "value": 1.23,
                    "interpretation": "BULLISH",
                    "description": "Volume 23% above the 20-candle average",
                },
                "trend": "BULLISH",
            }
        }
