"""
Decision Rule Table

Ordered predicate -> outcome rules. The first matching DECISION_RULES entry
sets the base decision; CONTEXT_NOTES then append explanations and warnings
without touching decision or confidence.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from suse.schemas.analysis import AnalysisConfig
from suse.schemas.decision import DecisionType
from suse.schemas.indicators import (
    BandPosition,
    MarketTrend,
    RSIZone,
    TechnicalAnalysis,
    VolatilityZone,
)

Predicate = Callable[[TechnicalAnalysis, AnalysisConfig], bool]
Message = Callable[[TechnicalAnalysis, AnalysisConfig], Optional[str]]


@dataclass(frozen=True)
class DecisionRule:
    """One base-decision rule."""

    name: str
    predicate: Predicate
    decision: DecisionType
    confidence: float
    explanation: Message

    def matches(self, analysis: TechnicalAnalysis, config: AnalysisConfig) -> bool:
        return self.predicate(analysis, config)


@dataclass(frozen=True)
class ContextNote:
    """Supplementary explanation or warning; message returns None to skip."""

    name: str
    is_warning: bool
    message: Message


# =============================================================================
# BASE RULES (priority order)
# =============================================================================


def _oversold_reversal(ta: TechnicalAnalysis, config: AnalysisConfig) -> bool:
    return ta.rsi.zone == RSIZone.OVERSOLD and ta.close > ta.ema.fast


def _overbought_reversal(ta: TechnicalAnalysis, config: AnalysisConfig) -> bool:
    return ta.rsi.zone == RSIZone.OVERBOUGHT and ta.close < ta.ema.medium


DECISION_RULES: tuple[DecisionRule, ...] = (
    DecisionRule(
        name="oversold_reversal",
        predicate=_oversold_reversal,
        decision=DecisionType.BUY,
        confidence=0.75,
        explanation=lambda ta, config: (
            f"RSI below {config.rsi_oversold:g} signals oversold conditions; "
            f"price above EMA{config.fast_ema} suggests a bullish reversal"
        ),
    ),
    DecisionRule(
        name="overbought_reversal",
        predicate=_overbought_reversal,
        decision=DecisionType.SELL,
        confidence=0.75,
        explanation=lambda ta, config: (
            f"RSI above {config.rsi_overbought:g} signals overbought conditions; "
            f"price below EMA{config.medium_ema} suggests a bearish reversal"
        ),
    ),
    DecisionRule(
        name="neutral_conditions",
        predicate=lambda ta, config: True,
        decision=DecisionType.HOLD,
        confidence=0.5,
        explanation=lambda ta, config: (
            "Neutral or uncertain conditions; conservative HOLD recommendation"
        ),
    ),
)


# =============================================================================
# CONTEXT NOTES (appended in order)
# =============================================================================


def _trend_note(ta: TechnicalAnalysis, config: AnalysisConfig) -> Optional[str]:
    emas = ", ".join(f"EMA{p}" for p in config.ema_periods)
    if ta.trend == MarketTrend.BULLISH:
        return f"Price above {emas}: bullish trend"
    if ta.trend == MarketTrend.BEARISH:
        return f"Price below {emas}: bearish trend"
    if ta.trend == MarketTrend.LATERAL:
        return f"Mixed alignment against {emas}: lateral market"
    return None


def _vwap_note(ta: TechnicalAnalysis, config: AnalysisConfig) -> Optional[str]:
    return f"{ta.vwap.description} ({ta.vwap.value:.6g})"


def _volume_note(ta: TechnicalAnalysis, config: AnalysisConfig) -> Optional[str]:
    return ta.volume_analysis.description


def _fibonacci_note(ta: TechnicalAnalysis, config: AnalysisConfig) -> Optional[str]:
    fib = ta.fibonacci
    return (
        f"Price near the {fib.nearest_level} Fibonacci level "
        f"({fib.distance_to_nearest:.2%} away)"
    )


def _volatility_warning(ta: TechnicalAnalysis, config: AnalysisConfig) -> Optional[str]:
    if ta.trend != MarketTrend.HIGH_VOLATILITY:
        return None
    return (
        f"High volatility: Bollinger bandwidth {ta.bollinger_bands.bandwidth:.2%} "
        f"exceeds {config.volatility_threshold:.2%}"
    )


def _band_warning(ta: TechnicalAnalysis, config: AnalysisConfig) -> Optional[str]:
    position = ta.bollinger_bands.price_position
    if position == BandPosition.ABOVE_UPPER:
        return "Price above the upper Bollinger Band; pullback risk"
    if position == BandPosition.BELOW_LOWER:
        return "Price below the lower Bollinger Band; rebound risk"
    return None


def _atr_warning(ta: TechnicalAnalysis, config: AnalysisConfig) -> Optional[str]:
    if ta.volatility_zone in (VolatilityZone.HIGH, VolatilityZone.EXTREME):
        return f"ATR above normal: {ta.atr.description}"
    return None


CONTEXT_NOTES: tuple[ContextNote, ...] = (
    ContextNote("trend", is_warning=False, message=_trend_note),
    ContextNote("vwap", is_warning=False, message=_vwap_note),
    ContextNote("volume", is_warning=False, message=_volume_note),
    ContextNote("fibonacci", is_warning=False, message=_fibonacci_note),
    ContextNote("high_volatility", is_warning=True, message=_volatility_warning),
    ContextNote("bollinger_extreme", is_warning=True, message=_band_warning),
    ContextNote("atr_elevated", is_warning=True, message=_atr_warning),
)


def first_matching_rule(
    analysis: TechnicalAnalysis,
    config: AnalysisConfig,
    rules: tuple[DecisionRule, ...] = DECISION_RULES,
) -> DecisionRule:
    """First rule whose predicate holds. The last default rule always matches."""
    for rule in rules:
        if rule.matches(analysis, config):
            return rule
    raise LookupError("Rule table has no catch-all rule")
