"""
CONTRACT 4: Analysis Pipeline

Input: AnalysisRequest (raw candles + optional configuration bundle)
Output: AnalysisResult

The boundary consumed by the API layer and the UI.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from suse.core.config import get_settings
from suse.schemas.market import MarketData, RawCandle, Timeframe
from suse.schemas.indicators import TechnicalAnalysis
from suse.schemas.decision import Decision, DecisionType, Probabilities


# =============================================================================
# CONFIGURATION BUNDLE
# =============================================================================


class AnalysisConfig(BaseModel):
    """
    Per-request tuning. Every omitted option falls back to Settings.

    Accepts camelCase keys (rsiPeriod, emaPeriods, ...) or field names.
    """

    rsi_period: int = Field(
        default_factory=lambda: get_settings().rsi_period, ge=2, alias="rsiPeriod"
    )
    ema_periods: list[int] = Field(
        default_factory=lambda: list(get_settings().ema_periods),
        min_length=3,
        max_length=3,
        alias="emaPeriods",
        description="Fast, medium and slow EMA periods",
    )
    bollinger_period: int = Field(
        default_factory=lambda: get_settings().bollinger_period,
        ge=1,
        alias="bollingerPeriod",
    )
    bollinger_k: float = Field(
        default_factory=lambda: get_settings().bollinger_k, gt=0, alias="bollingerK"
    )
    atr_period: int = Field(
        default_factory=lambda: get_settings().atr_period, ge=1, alias="atrPeriod"
    )
    volume_lookback: int = Field(
        default_factory=lambda: get_settings().volume_lookback,
        ge=1,
        alias="volumeLookback",
    )
    confidence_floor: float = Field(
        default_factory=lambda: get_settings().confidence_floor,
        ge=0.0,
        le=1.0,
        alias="confidenceFloor",
    )
    volatility_threshold: float = Field(
        default_factory=lambda: get_settings().volatility_threshold,
        gt=0,
        alias="volatilityThreshold",
    )
    volume_high_threshold: float = Field(
        default_factory=lambda: get_settings().volume_high_threshold,
        gt=0,
        alias="volumeHighThreshold",
    )
    volume_low_threshold: float = Field(
        default_factory=lambda: get_settings().volume_low_threshold,
        gt=0,
        alias="volumeLowThreshold",
    )
    rsi_oversold: float = Field(
        default_factory=lambda: get_settings().rsi_oversold,
        ge=0,
        le=100,
        alias="rsiOversold",
    )
    rsi_overbought: float = Field(
        default_factory=lambda: get_settings().rsi_overbought,
        ge=0,
        le=100,
        alias="rsiOverbought",
    )
    rsi_slope_tolerance: float = Field(
        default_factory=lambda: get_settings().rsi_slope_tolerance,
        ge=0,
        alias="rsiSlopeTolerance",
    )

    class Config:
        populate_by_name = True
        frozen = True

    @model_validator(mode="after")
    def validate_thresholds(self) -> "AnalysisConfig":
        """Cross-field consistency."""
        if any(p < 1 for p in self.ema_periods):
            raise ValueError("EMA periods must be >= 1")
        if self.volume_low_threshold > self.volume_high_threshold:
            raise ValueError("volumeLowThreshold must not exceed volumeHighThreshold")
        if self.rsi_oversold >= self.rsi_overbought:
            raise ValueError("rsiOversold must be below rsiOverbought")
        return self

    @property
    def fast_ema(self) -> int:
        return self.ema_periods[0]

    @property
    def medium_ema(self) -> int:
        return self.ema_periods[1]

    @property
    def slow_ema(self) -> int:
        return self.ema_periods[2]

    @property
    def required_candles(self) -> int:
        """Smallest window that satisfies every indicator lookback."""
        return max(
            self.rsi_period + 1,
            max(self.ema_periods),
            self.bollinger_period,
            self.atr_period + 1,
            self.volume_lookback + 1,
        )


# =============================================================================
# INPUT: AnalysisRequest
# =============================================================================


class AnalysisRequest(BaseModel):
    """
    Request for one analysis.
    Sent by: API / library callers
    Received by: Analysis Service
    """

    candles: Optional[list[RawCandle]] = Field(
        default=None,
        description="OHLCV candles ordered oldest to newest",
    )
    symbol: str = Field(default="UNKNOWN", description="Instrument, e.g. EUR/USD")
    timeframe: Timeframe = Timeframe.M5
    spread: float = Field(default=0.0, ge=0)
    config: AnalysisConfig = Field(default_factory=AnalysisConfig)


# =============================================================================
# OUTPUT: AnalysisResult
# =============================================================================


class AnalysisResult(BaseModel):
    """
    Complete output of one pipeline run.
    Returned by: Analysis Service
    Consumed by: API layer / UI
    """

    market_data: MarketData
    technical_analysis: TechnicalAnalysis
    decision: Decision
    processed_at: datetime

    class Config:
        frozen = True


class DecisionSummary(BaseModel):
    """Flat decision view with the headline indicator numbers."""

    decision: DecisionType
    confidence: float = Field(..., ge=0.0, le=1.0)
    probabilities: Probabilities
    explanations: list[str]
    warnings: list[str]
    indicators: dict[str, float]

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "DecisionSummary":
        ta = result.technical_analysis
        indicators = {"rsi": ta.rsi.value}
        indicators.update(ta.ema.values)
        indicators.update(
            {
                "vwap": ta.vwap.value,
                "atr": ta.atr.value,
                "bollinger_upper": ta.bollinger_bands.upper,
                "bollinger_middle": ta.bollinger_bands.middle,
                "bollinger_lower": ta.bollinger_bands.lower,
                "relative_volume": ta.volume_analysis.value,
            }
        )
        decision = result.decision
        return cls(
            decision=decision.decision,
            confidence=decision.confidence,
            probabilities=decision.probabilities,
            explanations=list(decision.explanations),
            warnings=list(decision.warnings),
            indicators=indicators,
        )
