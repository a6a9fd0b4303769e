"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic; smoothing accumulators live only inside each call.
"""

import numpy as np
from typing import Optional, Sequence, Union
from dataclasses import dataclass

from suse.schemas.market import Candle
from suse.services.base import InsufficientDataError


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_candles(cls, candles: Sequence[Candle]) -> "OHLCVData":
        """Convert a Candle list to numpy arrays."""
        return cls(
            timestamps=np.array([c.timestamp for c in candles], dtype=np.int64),
            opens=np.array([c.open for c in candles], dtype=float),
            highs=np.array([c.high for c in candles], dtype=float),
            lows=np.array([c.low for c in candles], dtype=float),
            closes=np.array([c.close for c in candles], dtype=float),
            volumes=np.array([c.volume for c in candles], dtype=float),
        )

    def __len__(self) -> int:
        return len(self.closes)


Series = Union[OHLCVData, Sequence[Candle]]


@dataclass(frozen=True)
class BollingerValues:
    upper: float
    middle: float
    lower: float
    bandwidth: float


@dataclass(frozen=True)
class FibonacciLevels:
    high: float
    low: float
    levels: dict[str, float]  # label -> price, 0% (high) to 100% (low)
    nearest_level: str
    distance_to_nearest: float  # fraction of the latest close


FIBONACCI_RATIOS: tuple[tuple[float, str], ...] = (
    (0.0, "0%"),
    (0.236, "23.6%"),
    (0.382, "38.2%"),
    (0.5, "50%"),
    (0.618, "61.8%"),
    (0.786, "78.6%"),
    (1.0, "100%"),
)


def _as_ohlcv(series: Series) -> OHLCVData:
    if isinstance(series, OHLCVData):
        return series
    return OHLCVData.from_candles(series)


def _require(indicator: str, required: int, available: int) -> None:
    if available < required:
        raise InsufficientDataError(indicator, required, available)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def ema(series: Series, period: int) -> float:
    """
    Exponential Moving Average of close.

    Seeded with the oldest close, then smoothed left to right with
    multiplier 2 / (period + 1).
    """
    data = _as_ohlcv(series)
    _require(f"EMA({period})", period, len(data))

    multiplier = 2 / (period + 1)
    value = data.closes[0]
    for close in data.closes[1:]:
        value = (close - value) * multiplier + value

    return float(value)


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    """RSI with its degenerate cases pinned to boundary values."""
    if avg_loss == 0 and avg_gain == 0:
        return 50.0
    if avg_loss == 0:
        return 100.0
    if avg_gain == 0:
        return 0.0
    rs = avg_gain / avg_loss
    return float(100 - (100 / (1 + rs)))


def _wilder_rsi(closes: np.ndarray, period: int) -> float:
    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average over the first `period` deltas
    avg_gain = gains[:period].sum() / period
    avg_loss = losses[:period].sum() / period

    # Wilder smoothing for the rest
    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    return _rsi_from_averages(avg_gain, avg_loss)


def rsi(series: Series, period: int = 14) -> float:
    """
    Relative Strength Index (Wilder).

    100 when the window has no losses, 0 when it has no gains,
    50 when it has neither.
    """
    data = _as_ohlcv(series)
    _require(f"RSI({period})", period + 1, len(data))
    return _wilder_rsi(data.closes, period)


def rsi_with_previous(
    series: Series, period: int = 14
) -> tuple[float, Optional[float]]:
    """
    Current RSI and the RSI one candle back.

    The previous value is None when dropping the latest candle leaves
    too few closes.
    """
    data = _as_ohlcv(series)
    current = rsi(data, period)
    if len(data) - 1 < period + 1:
        return current, None
    return current, _wilder_rsi(data.closes[:-1], period)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(data: OHLCVData) -> np.ndarray:
    """True Range for every candle after the first."""
    prev_close = data.closes[:-1]
    highs = data.highs[1:]
    lows = data.lows[1:]
    return np.maximum.reduce(
        [highs - lows, np.abs(highs - prev_close), np.abs(lows - prev_close)]
    )


def atr(series: Series, period: int = 14) -> float:
    """Average True Range, Wilder-smoothed like RSI."""
    data = _as_ohlcv(series)
    _require(f"ATR({period})", period + 1, len(data))

    tr = true_range(data)
    value = tr[:period].mean()
    for r in tr[period:]:
        value = (value * (period - 1) + r) / period

    return float(value)


def bollinger_bands(
    series: Series, period: int = 20, k: float = 2.0
) -> BollingerValues:
    """
    Bollinger Bands over the latest `period` closes.

    Population standard deviation; bandwidth is 0 when the middle band is 0.
    """
    data = _as_ohlcv(series)
    _require(f"Bollinger Bands({period})", period, len(data))

    window = data.closes[-period:]
    middle = float(np.mean(window))
    std = float(np.std(window))

    upper = middle + k * std
    lower = middle - k * std
    bandwidth = (upper - lower) / middle if middle > 0 else 0.0

    return BollingerValues(upper=upper, middle=middle, lower=lower, bandwidth=bandwidth)


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def vwap(series: Series) -> float:
    """
    Volume Weighted Average Price of the typical price over the window.

    Falls back to the mean typical price when total volume is 0.
    """
    data = _as_ohlcv(series)
    _require("VWAP", 1, len(data))

    typical_price = (data.highs + data.lows + data.closes) / 3
    total_volume = data.volumes.sum()
    if total_volume == 0:
        return float(np.mean(typical_price))

    return float(np.sum(typical_price * data.volumes) / total_volume)


def relative_volume(series: Series, lookback: int = 20) -> float:
    """
    Latest volume divided by the mean of the `lookback` volumes before it.

    1.0 when that baseline is 0.
    """
    data = _as_ohlcv(series)
    _require(f"Relative Volume({lookback})", lookback + 1, len(data))

    baseline = float(np.mean(data.volumes[-lookback - 1 : -1]))
    if baseline == 0:
        return 1.0

    return float(data.volumes[-1] / baseline)


# =============================================================================
# SUPPORT/RESISTANCE
# =============================================================================


def fibonacci_levels(series: Series) -> FibonacciLevels:
    """
    Fibonacci retracement from the window's highest high to its lowest low.

    The nearest level is the one closest to the latest close; ties go to the
    smaller ratio.
    """
    data = _as_ohlcv(series)
    _require("Fibonacci", 1, len(data))

    high = float(np.max(data.highs))
    low = float(np.min(data.lows))
    price_range = high - low
    close = float(data.closes[-1])

    levels = {label: high - ratio * price_range for ratio, label in FIBONACCI_RATIOS}

    nearest_level = min(levels, key=lambda label: abs(levels[label] - close))
    distance = abs(levels[nearest_level] - close)

    return FibonacciLevels(
        high=high,
        low=low,
        levels=levels,
        nearest_level=nearest_level,
        distance_to_nearest=distance / close if close > 0 else 0.0,
    )
