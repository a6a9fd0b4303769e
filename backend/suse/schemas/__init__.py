"""
SUSE Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from suse.schemas.market import (
    RawCandle,
    Candle,
    MarketData,
    OHLC,
    Timeframe,
)
from suse.schemas.indicators import (
    IndicatorValue,
    RSIAnalysis,
    EMAAnalysis,
    BollingerBandsData,
    FibonacciData,
    TechnicalAnalysis,
    Interpretation,
    RSIZone,
    Slope,
    MarketTrend,
    BandPosition,
    VolatilityZone,
)
from suse.schemas.decision import (
    Decision,
    DecisionType,
    Probabilities,
)
from suse.schemas.analysis import (
    AnalysisConfig,
    AnalysisRequest,
    AnalysisResult,
    DecisionSummary,
)

__all__ = [
    # Market
    "RawCandle",
    "Candle",
    "MarketData",
    "OHLC",
    "Timeframe",
    # Indicators
    "IndicatorValue",
    "RSIAnalysis",
    "EMAAnalysis",
    "BollingerBandsData",
    "FibonacciData",
    "TechnicalAnalysis",
    "Interpretation",
    "RSIZone",
    "Slope",
    "MarketTrend",
    "BandPosition",
    "VolatilityZone",
    # Decision
    "Decision",
    "DecisionType",
    "Probabilities",
    # Analysis
    "AnalysisConfig",
    "AnalysisRequest",
    "AnalysisResult",
    "DecisionSummary",
]
