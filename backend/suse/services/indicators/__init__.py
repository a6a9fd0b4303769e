"""
Indicator Engine Service

CONTRACT:
    Input:  IndicatorInput (normalized candles + AnalysisConfig)
    Output: TechnicalAnalysis

RESPONSIBILITIES:
    - Calculate RSI, EMA family, VWAP, ATR, Bollinger Bands,
      Fibonacci retracements and relative volume
    - Classify RSI zone/slope, price vs EMAs, band position,
      volume and overall market trend

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from suse.services.indicators.interface import IndicatorInput, IndicatorServiceInterface
from suse.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorInput",
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
