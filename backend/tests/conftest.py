"""
Shared fixtures for the SUSE test suite.
"""

from typing import Optional, Sequence

import pytest

from suse.schemas.analysis import AnalysisConfig
from suse.schemas.indicators import (
    BandPosition,
    BollingerBandsData,
    EMAAnalysis,
    FibonacciData,
    IndicatorValue,
    Interpretation,
    MarketTrend,
    RSIAnalysis,
    RSIZone,
    Slope,
    TechnicalAnalysis,
    VolatilityZone,
)
from suse.schemas.market import Candle

BASE_TIMESTAMP = 1_704_067_200_000  # 2024-01-01T00:00:00Z
ONE_MINUTE_MS = 60_000


def build_candle(
    index: int,
    close: float,
    open_price: Optional[float] = None,
    high: Optional[float] = None,
    low: Optional[float] = None,
    volume: float = 1000.0,
) -> Candle:
    """Consistent candle; high/low default to 0.1% around open/close."""
    if open_price is None:
        open_price = close
    if high is None:
        high = max(open_price, close) * 1.001
    if low is None:
        low = min(open_price, close) * 0.999
    return Candle(
        open=open_price,
        high=high,
        low=low,
        close=close,
        volume=volume,
        timestamp=BASE_TIMESTAMP + index * ONE_MINUTE_MS,
    )


def build_series(
    closes: Sequence[float], volumes: Optional[Sequence[float]] = None
) -> list[Candle]:
    volumes = volumes if volumes is not None else [1000.0] * len(closes)
    return [
        build_candle(i, float(close), volume=float(volume))
        for i, (close, volume) in enumerate(zip(closes, volumes))
    ]


# 9 drops of 1, 4 flat closes, then +3: RSI(14) = 3 / (3 + 9) * 100 = 25
OVERSOLD_BOUNCE_CLOSES = [100 - i for i in range(10)] + [91, 91, 91, 91, 94]

# Mirror image: RSI(14) = 75 and the last close falls back under EMA(10)
OVERBOUGHT_DROP_CLOSES = [100 + i for i in range(10)] + [109, 109, 109, 109, 106]


@pytest.fixture
def candle_factory():
    return build_candle


@pytest.fixture
def series_factory():
    return build_series


@pytest.fixture
def small_config() -> AnalysisConfig:
    """Periods that fit a 15-candle window."""
    return AnalysisConfig(emaPeriods=[5, 10, 15], bollingerPeriod=10, volumeLookback=10)


@pytest.fixture
def oversold_bounce() -> list[Candle]:
    return build_series(OVERSOLD_BOUNCE_CLOSES)


@pytest.fixture
def overbought_drop() -> list[Candle]:
    return build_series(OVERBOUGHT_DROP_CLOSES)


@pytest.fixture
def falling_series() -> list[Candle]:
    """15 strictly decreasing closes from 1.10 to 1.08."""
    closes = [1.10 - i * (0.02 / 14) for i in range(15)]
    return build_series(closes)


@pytest.fixture
def analysis_factory():
    """Hand-built TechnicalAnalysis for exercising the decision rules."""

    def _make(
        rsi: float = 50.0,
        zone: RSIZone = RSIZone.NEUTRAL,
        close: float = 100.0,
        fast: float = 100.0,
        medium: float = 100.0,
        slow: float = 100.0,
        trend: MarketTrend = MarketTrend.LATERAL,
        price_position: BandPosition = BandPosition.ABOVE_MIDDLE,
        bandwidth: float = 0.05,
        volatility_zone: VolatilityZone = VolatilityZone.NORMAL,
    ) -> TechnicalAnalysis:
        return TechnicalAnalysis(
            close=close,
            rsi=RSIAnalysis(
                name="RSI (14)",
                value=rsi,
                interpretation=Interpretation.NEUTRAL,
                description="test",
                slope=Slope.FLAT,
                zone=zone,
            ),
            ema=EMAAnalysis(
                periods=[20, 50, 200],
                values={"ema20": fast, "ema50": medium, "ema200": slow},
                price_relation={
                    "aboveEMA20": close > fast,
                    "aboveEMA50": close > medium,
                    "aboveEMA200": close > slow,
                },
                fast=fast,
                medium=medium,
                slow=slow,
            ),
            vwap=IndicatorValue(
                name="VWAP",
                value=close,
                interpretation=Interpretation.NEUTRAL,
                description="Price at VWAP",
            ),
            atr=IndicatorValue(
                name="ATR (14)",
                value=1.5,
                interpretation=Interpretation.NEUTRAL,
                description="Normal volatility (ATR 1.50% of price)",
            ),
            volatility_zone=volatility_zone,
            bollinger_bands=BollingerBandsData(
                upper=close * 1.05,
                middle=close,
                lower=close * 0.95,
                bandwidth=bandwidth,
                price_position=price_position,
            ),
            fibonacci=FibonacciData(
                level_0=110.0,
                level_236=107.64,
                level_382=106.18,
                level_500=105.0,
                level_618=103.82,
                level_786=102.14,
                level_1000=100.0,
                nearest_level="100%",
                distance_to_nearest=0.0,
            ),
            volume_analysis=IndicatorValue(
                name="Relative Volume (20)",
                value=1.0,
                interpretation=Interpretation.NEUTRAL,
                description="Volume in line with the 20-candle average",
            ),
            trend=trend,
        )

    return _make
