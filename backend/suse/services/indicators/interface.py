"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from dataclasses import dataclass, field

from suse.services.base import BaseService
from suse.schemas.market import Candle
from suse.schemas.indicators import TechnicalAnalysis
from suse.schemas.analysis import AnalysisConfig


@dataclass
class IndicatorInput:
    """Normalized candles plus the configuration to analyse them with."""

    candles: list[Candle]
    config: AnalysisConfig = field(default_factory=AnalysisConfig)


class IndicatorServiceInterface(BaseService[IndicatorInput, TechnicalAnalysis]):
    """
    Indicator Engine Service Contract.

    INPUT: IndicatorInput
        - candles: normalized CandleSeries, oldest first
        - config: periods and classification thresholds

    OUTPUT: TechnicalAnalysis
        - RSI (value, zone, slope), EMA family and price relation, VWAP,
          ATR, Bollinger Bands, Fibonacci levels, relative volume, trend

    RAISES: InsufficientDataError when any lookback exceeds the candles.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    def execute(self, input_data: IndicatorInput) -> TechnicalAnalysis:
        """Calculate every indicator for the window."""
        pass
