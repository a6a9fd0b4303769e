"""
Indicator Engine Service Implementation

Calculates all technical indicators from normalized candles and
classifies them into the states the decision engine reads.
"""

import logging
from typing import Optional

from suse.schemas.market import Candle
from suse.schemas.analysis import AnalysisConfig
from suse.schemas.indicators import (
    BollingerBandsData,
    EMAAnalysis,
    FibonacciData,
    IndicatorValue,
    Interpretation,
    RSIAnalysis,
    RSIZone,
    TechnicalAnalysis,
    VolatilityZone,
)
from suse.services.indicators.interface import IndicatorInput, IndicatorServiceInterface
from suse.services.indicators.calculations import (
    OHLCVData,
    atr,
    bollinger_bands,
    ema,
    fibonacci_levels,
    relative_volume,
    rsi_with_previous,
    vwap,
)
from suse.services.indicators.classification import (
    classify_band_position,
    classify_rsi_zone,
    classify_slope,
    classify_trend,
    classify_volatility,
    interpret_rsi,
    interpret_volume,
    interpret_vwap,
    price_above,
)

logger = logging.getLogger(__name__)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for market analysis.
    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    def execute(self, input_data: IndicatorInput) -> TechnicalAnalysis:
        """Calculate indicators for one candle window."""
        return self.calculate(input_data.candles, input_data.config)

    def calculate(
        self, candles: list[Candle], config: Optional[AnalysisConfig] = None
    ) -> TechnicalAnalysis:
        """Calculate and classify every indicator for a single window."""
        config = config or AnalysisConfig()
        data = OHLCVData.from_candles(candles)
        close = float(data.closes[-1]) if len(data) else 0.0

        rsi_analysis = self._calculate_rsi(data, config)
        ema_analysis = self._calculate_emas(data, close, config)
        vwap_value = self._calculate_vwap(data, close)
        atr_value, volatility_zone = self._calculate_atr(data, close, config)
        bands = self._calculate_bollinger(data, close, config)
        fibonacci = self._calculate_fibonacci(data)
        volume = self._calculate_volume(data, config)

        trend = classify_trend(
            close,
            [ema_analysis.fast, ema_analysis.medium, ema_analysis.slow],
            bands.bandwidth,
            config.volatility_threshold,
        )

        logger.debug(
            f"Indicators: close={close} rsi={rsi_analysis.value:.2f} "
            f"trend={trend.value} bandwidth={bands.bandwidth:.4f}"
        )

        return TechnicalAnalysis(
            close=close,
            rsi=rsi_analysis,
            ema=ema_analysis,
            vwap=vwap_value,
            atr=atr_value,
            volatility_zone=volatility_zone,
            bollinger_bands=bands,
            fibonacci=fibonacci,
            volume_analysis=volume,
            trend=trend,
        )

    def _calculate_rsi(self, data: OHLCVData, config: AnalysisConfig) -> RSIAnalysis:
        current, previous = rsi_with_previous(data, config.rsi_period)
        zone = classify_rsi_zone(current, config.rsi_oversold, config.rsi_overbought)
        slope = classify_slope(current, previous, config.rsi_slope_tolerance)

        if zone == RSIZone.OVERSOLD:
            description = f"Oversold (below {config.rsi_oversold:g})"
        elif zone == RSIZone.OVERBOUGHT:
            description = f"Overbought (above {config.rsi_overbought:g})"
        else:
            description = f"Neutral zone, {slope.value.lower()}"

        return RSIAnalysis(
            name=f"RSI ({config.rsi_period})",
            value=current,
            interpretation=interpret_rsi(zone, slope),
            description=description,
            slope=slope,
            zone=zone,
        )

    def _calculate_emas(
        self, data: OHLCVData, close: float, config: AnalysisConfig
    ) -> EMAAnalysis:
        by_period = {period: ema(data, period) for period in config.ema_periods}
        above = price_above(close, by_period)

        return EMAAnalysis(
            periods=list(config.ema_periods),
            values={f"ema{period}": value for period, value in by_period.items()},
            price_relation={f"aboveEMA{period}": flag for period, flag in above.items()},
            fast=by_period[config.fast_ema],
            medium=by_period[config.medium_ema],
            slow=by_period[config.slow_ema],
        )

    def _calculate_vwap(self, data: OHLCVData, close: float) -> IndicatorValue:
        value = vwap(data)
        interpretation = interpret_vwap(close, value)
        description = {
            Interpretation.BULLISH: "Price above VWAP",
            Interpretation.BEARISH: "Price below VWAP",
            Interpretation.NEUTRAL: "Price at VWAP",
        }[interpretation]

        return IndicatorValue(
            name="VWAP",
            value=value,
            interpretation=interpretation,
            description=description,
        )

    def _calculate_atr(
        self, data: OHLCVData, close: float, config: AnalysisConfig
    ) -> tuple[IndicatorValue, VolatilityZone]:
        value = atr(data, config.atr_period)
        zone = classify_volatility(value, close)
        atr_pct = (value / close) * 100 if close > 0 else 0.0

        indicator = IndicatorValue(
            name=f"ATR ({config.atr_period})",
            value=value,
            interpretation=Interpretation.NEUTRAL,
            description=f"{zone.value.capitalize()} volatility (ATR {atr_pct:.2f}% of price)",
        )
        return indicator, zone

    def _calculate_bollinger(
        self, data: OHLCVData, close: float, config: AnalysisConfig
    ) -> BollingerBandsData:
        bands = bollinger_bands(data, config.bollinger_period, config.bollinger_k)

        return BollingerBandsData(
            upper=bands.upper,
            middle=bands.middle,
            lower=bands.lower,
            bandwidth=bands.bandwidth,
            price_position=classify_band_position(close, bands),
        )

    def _calculate_fibonacci(self, data: OHLCVData) -> FibonacciData:
        fib = fibonacci_levels(data)
        levels = list(fib.levels.values())

        return FibonacciData(
            level_0=levels[0],
            level_236=levels[1],
            level_382=levels[2],
            level_500=levels[3],
            level_618=levels[4],
            level_786=levels[5],
            level_1000=levels[6],
            nearest_level=fib.nearest_level,
            distance_to_nearest=fib.distance_to_nearest,
        )

    def _calculate_volume(
        self, data: OHLCVData, config: AnalysisConfig
    ) -> IndicatorValue:
        lookback = config.volume_lookback
        ratio = relative_volume(data, lookback)
        change_pct = (ratio - 1) * 100

        if abs(change_pct) < 0.5:
            description = f"Volume in line with the {lookback}-candle average"
        elif change_pct > 0:
            description = f"Volume {change_pct:.0f}% above the {lookback}-candle average"
        else:
            description = f"Volume {-change_pct:.0f}% below the {lookback}-candle average"

        return IndicatorValue(
            name=f"Relative Volume ({lookback})",
            value=ratio,
            interpretation=interpret_volume(
                ratio, config.volume_high_threshold, config.volume_low_threshold
            ),
            description=description,
        )


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
