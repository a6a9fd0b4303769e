"""
Indicator State Classification

Maps raw indicator numbers to qualitative states.
Every threshold is a parameter; defaults come from AnalysisConfig.
"""

from typing import Optional

from suse.schemas.indicators import (
    BandPosition,
    Interpretation,
    MarketTrend,
    RSIZone,
    Slope,
    VolatilityZone,
)
from suse.services.indicators.calculations import BollingerValues


def classify_rsi_zone(
    value: float, oversold: float = 30.0, overbought: float = 70.0
) -> RSIZone:
    if value < oversold:
        return RSIZone.OVERSOLD
    if value > overbought:
        return RSIZone.OVERBOUGHT
    return RSIZone.NEUTRAL


def classify_slope(
    current: float, previous: Optional[float], tolerance: float = 0.01
) -> Slope:
    """Direction of a value against its reading one period back."""
    if previous is None:
        return Slope.FLAT
    change = current - previous
    if change > tolerance:
        return Slope.RISING
    if change < -tolerance:
        return Slope.FALLING
    return Slope.FLAT


def interpret_rsi(zone: RSIZone, slope: Slope) -> Interpretation:
    """Extreme zones read as reversal setups; otherwise momentum follows slope."""
    if zone == RSIZone.OVERSOLD:
        return Interpretation.BULLISH
    if zone == RSIZone.OVERBOUGHT:
        return Interpretation.BEARISH
    if slope == Slope.RISING:
        return Interpretation.BULLISH
    if slope == Slope.FALLING:
        return Interpretation.BEARISH
    return Interpretation.NEUTRAL


def price_above(close: float, ema_values: dict[int, float]) -> dict[int, bool]:
    """Strict price-above-EMA flag for each period, independently."""
    return {period: close > value for period, value in ema_values.items()}


def classify_trend(
    close: float,
    ema_values: list[float],
    bandwidth: float,
    volatility_threshold: float = 0.10,
) -> MarketTrend:
    """
    Overall market trend.

    HIGH_VOLATILITY wins whenever bandwidth exceeds the threshold; otherwise
    price above every EMA is BULLISH, below every EMA is BEARISH, and a mixed
    alignment is LATERAL.
    """
    if bandwidth > volatility_threshold:
        return MarketTrend.HIGH_VOLATILITY
    if all(close > value for value in ema_values):
        return MarketTrend.BULLISH
    if all(close < value for value in ema_values):
        return MarketTrend.BEARISH
    return MarketTrend.LATERAL


def classify_band_position(close: float, bands: BollingerValues) -> BandPosition:
    if close > bands.upper:
        return BandPosition.ABOVE_UPPER
    if close >= bands.middle:
        return BandPosition.ABOVE_MIDDLE
    if close >= bands.lower:
        return BandPosition.BELOW_MIDDLE
    return BandPosition.BELOW_LOWER


def interpret_volume(
    ratio: float, high_threshold: float = 1.2, low_threshold: float = 0.8
) -> Interpretation:
    if ratio > high_threshold:
        return Interpretation.BULLISH
    if ratio < low_threshold:
        return Interpretation.BEARISH
    return Interpretation.NEUTRAL


def interpret_vwap(close: float, vwap_value: float) -> Interpretation:
    if close > vwap_value:
        return Interpretation.BULLISH
    if close < vwap_value:
        return Interpretation.BEARISH
    return Interpretation.NEUTRAL


def classify_volatility(atr_value: float, close: float) -> VolatilityZone:
    """Volatility zone from ATR as % of price."""
    atr_pct = (atr_value / close) * 100 if close > 0 else 0.0
    if atr_pct < 1.0:
        return VolatilityZone.LOW
    elif atr_pct < 2.5:
        return VolatilityZone.NORMAL
    elif atr_pct < 4.0:
        return VolatilityZone.HIGH
    else:
        return VolatilityZone.EXTREME
