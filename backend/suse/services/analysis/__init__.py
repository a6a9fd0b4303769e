"""
Analysis Service

CONTRACT:
    Input:  AnalysisRequest
    Output: AnalysisResult

RESPONSIBILITIES:
    - Reject missing or too-short candle arrays
    - Normalize → calculate indicators → decide
    - Assemble MarketData, TechnicalAnalysis and Decision into one result

Stateless: every call works on its own candles.
"""

from suse.services.analysis.interface import AnalysisServiceInterface
from suse.services.analysis.service import AnalysisService, get_analysis_service

__all__ = [
    "AnalysisServiceInterface",
    "AnalysisService",
    "get_analysis_service",
]
