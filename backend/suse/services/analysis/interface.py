"""
Analysis Service Interface

Orchestrates the complete analysis pipeline.
"""

from abc import abstractmethod

from suse.services.base import BaseService
from suse.schemas.analysis import AnalysisRequest, AnalysisResult


class AnalysisServiceInterface(BaseService[AnalysisRequest, AnalysisResult]):
    """
    Analysis Service Contract.

    This is the MAIN ORCHESTRATOR that runs the full pipeline.

    INPUT: AnalysisRequest
        - candles: raw OHLCV candles, oldest first
        - symbol / timeframe / spread: labels for MarketData
        - config: optional configuration bundle

    OUTPUT: AnalysisResult
        - market_data: latest candle summary
        - technical_analysis: every indicator and its state
        - decision: BUY / SELL / HOLD with confidence and reasons

    PIPELINE:
        ┌─────────────────┐
        │ AnalysisRequest │
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Normalizer      │ → list[Candle]
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Indicator Engine│ → TechnicalAnalysis
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Decision Engine │ → Decision
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ AnalysisResult  │
        └─────────────────┘
    """

    @property
    def name(self) -> str:
        return "AnalysisService"

    @abstractmethod
    def execute(self, input_data: AnalysisRequest) -> AnalysisResult:
        """Run the complete analysis pipeline."""
        pass
