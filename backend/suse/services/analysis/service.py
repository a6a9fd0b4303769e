"""
Analysis Service Implementation

Orchestrates the complete analysis pipeline:
    Validation → Normalizer → Indicators → Decision Engine → AnalysisResult

This is the main entry point for producing a recommendation.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, Optional

from suse.core.config import get_settings
from suse.schemas.analysis import AnalysisConfig, AnalysisRequest, AnalysisResult
from suse.schemas.market import Candle, MarketData, OHLC, Timeframe
from suse.services.base import InvalidInputError
from suse.services.analysis.interface import AnalysisServiceInterface
from suse.services.candles import normalize_candles
from suse.services.decision import get_decision_service
from suse.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)


def _iso_from_ms(timestamp_ms: int, fallback: datetime) -> str:
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return fallback.isoformat()


class AnalysisService(AnalysisServiceInterface):
    """
    Analysis Service.

    Runs the whole pipeline for one candle window. Any validation or
    insufficient-data error aborts the run; no partial result is returned.
    """

    def __init__(self):
        self._indicator_service = None
        self._decision_service = None

    @property
    def indicator_service(self):
        """Lazy load indicator service."""
        if self._indicator_service is None:
            self._indicator_service = get_indicator_service()
        return self._indicator_service

    @property
    def decision_service(self):
        """Lazy load decision service."""
        if self._decision_service is None:
            self._decision_service = get_decision_service()
        return self._decision_service

    @property
    def name(self) -> str:
        return "AnalysisService"

    def execute(self, input_data: AnalysisRequest) -> AnalysisResult:
        """Run the pipeline for a validated request body."""
        return self.analyze_candles(
            input_data.candles,
            config=input_data.config,
            symbol=input_data.symbol,
            timeframe=input_data.timeframe,
            spread=input_data.spread,
        )

    def analyze_candles(
        self,
        candles: Any,
        config: Optional[AnalysisConfig] = None,
        symbol: str = "UNKNOWN",
        timeframe: Timeframe = Timeframe.M5,
        spread: float = 0.0,
    ) -> AnalysisResult:
        """
        Run the pipeline on raw candles (mappings or RawCandle models).

        Raises:
            InvalidInputError: candles missing, not a sequence, or too short
            InsufficientDataError: an indicator lookback exceeds the window
        """
        config = config or AnalysisConfig()
        processed_at = datetime.now(timezone.utc)

        # =================================================================
        # STAGE 1: Validation
        # =================================================================
        window = self._validate(candles, config)
        logger.info(f"Starting analysis for {symbol} ({timeframe.value}): {len(window)} candles")

        # =================================================================
        # STAGE 2: Normalization
        # =================================================================
        logger.info("Stage 2: Normalization")
        normalized = normalize_candles(window)

        # =================================================================
        # STAGE 3: Indicator Engine
        # =================================================================
        logger.info("Stage 3: Indicator Calculation")
        technical_analysis = self.indicator_service.calculate(normalized, config)
        logger.info(
            f"Stage 3 complete: RSI={technical_analysis.rsi.value:.2f} "
            f"trend={technical_analysis.trend.value}"
        )

        # =================================================================
        # STAGE 4: Decision Engine
        # =================================================================
        logger.info("Stage 4: Decision")
        decision = self.decision_service.decide(
            technical_analysis, config, timestamp=processed_at
        )
        logger.info(
            f"Stage 4 complete: {decision.decision.value} "
            f"(confidence {decision.confidence:.2f})"
        )

        # =================================================================
        # Build Final Response
        # =================================================================
        return AnalysisResult(
            market_data=self._build_market_data(
                normalized[-1], symbol, timeframe, spread, processed_at
            ),
            technical_analysis=technical_analysis,
            decision=decision,
            processed_at=processed_at,
        )

    def _validate(self, candles: Any, config: AnalysisConfig) -> list:
        """Reject unusable input before any computation; cap oversized windows."""
        if candles is None:
            logger.warning("Rejected analysis: candle array missing")
            raise InvalidInputError(self.name, "Candle array is missing")

        if isinstance(candles, (str, bytes)) or not isinstance(candles, Sequence):
            logger.warning(f"Rejected analysis: candles of type {type(candles).__name__}")
            raise InvalidInputError(self.name, "Candles must be an array of OHLCV objects")

        required = config.required_candles
        if len(candles) < required:
            logger.warning(
                f"Rejected analysis: {len(candles)} candles, {required} required"
            )
            raise InvalidInputError(
                self.name,
                f"Insufficient data: provide at least {required} valid candles "
                f"(got {len(candles)})",
                details={"required": required, "available": len(candles)},
            )

        limit = max(get_settings().max_candles, required)
        if len(candles) > limit:
            logger.warning(f"Truncating {len(candles)} candles to the newest {limit}")
            return list(candles[-limit:])

        return list(candles)

    def _build_market_data(
        self,
        latest: Candle,
        symbol: str,
        timeframe: Timeframe,
        spread: float,
        processed_at: datetime,
    ) -> MarketData:
        return MarketData(
            symbol=symbol,
            timeframe=timeframe,
            timestamp=_iso_from_ms(latest.timestamp, processed_at),
            ohlc=OHLC(
                open=latest.open,
                high=latest.high,
                low=latest.low,
                close=latest.close,
            ),
            volume=latest.volume,
            spread=spread,
        )


# Singleton instance
_service_instance: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AnalysisService()
    return _service_instance
