"""
Decision Engine Implementation

Maps a TechnicalAnalysis to BUY / SELL / HOLD.
PURE PYTHON - rules are deterministic and auditable.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from suse.schemas.analysis import AnalysisConfig
from suse.schemas.decision import Decision, DecisionType, Probabilities
from suse.schemas.indicators import TechnicalAnalysis
from suse.services.decision.interface import DecisionInput, DecisionServiceInterface
from suse.services.decision.rules import (
    CONTEXT_NOTES,
    DECISION_RULES,
    DecisionRule,
    first_matching_rule,
)

logger = logging.getLogger(__name__)


def split_probabilities(
    decision: DecisionType, confidence: float, rsi_value: float
) -> Probabilities:
    """
    Distribution with `confidence` on the chosen outcome.

    The remaining mass goes to the other two outcomes in proportion to
    their proximity weights: buy = 1 - rsi/100, sell = rsi/100, hold = 0.5.
    Even split when both weights are 0.
    """
    rsi_ratio = min(max(rsi_value / 100, 0.0), 1.0)
    weights = {
        DecisionType.BUY: 1.0 - rsi_ratio,
        DecisionType.SELL: rsi_ratio,
        DecisionType.HOLD: 0.5,
    }

    remainder = 1.0 - confidence
    others = [outcome for outcome in DecisionType if outcome != decision]
    total_weight = sum(weights[outcome] for outcome in others)

    mass = {decision: confidence}
    for outcome in others:
        if total_weight > 0:
            mass[outcome] = remainder * weights[outcome] / total_weight
        else:
            mass[outcome] = remainder / len(others)

    return Probabilities(
        buy=mass[DecisionType.BUY],
        sell=mass[DecisionType.SELL],
        hold=mass[DecisionType.HOLD],
    )


class DecisionService(DecisionServiceInterface):
    """
    Decision Engine.

    Evaluates the rule table in priority order, appends context notes,
    then applies the confidence floor. Holds no state between calls.
    """

    def __init__(self, rules: tuple[DecisionRule, ...] = DECISION_RULES):
        self._rules = rules

    @property
    def name(self) -> str:
        return "DecisionService"

    def execute(self, input_data: DecisionInput) -> Decision:
        return self.decide(input_data.analysis, input_data.config)

    def decide(
        self,
        analysis: TechnicalAnalysis,
        config: Optional[AnalysisConfig] = None,
        timestamp: Optional[datetime] = None,
    ) -> Decision:
        """Produce the decision for one analysis."""
        config = config or AnalysisConfig()

        rule = first_matching_rule(analysis, config, self._rules)
        decision = rule.decision
        confidence = rule.confidence
        explanations: list[str] = [rule.explanation(analysis, config)]
        warnings: list[str] = []
        logger.info(f"Rule '{rule.name}' fired: {decision.value} @ {confidence:.2f}")

        for note in CONTEXT_NOTES:
            message = note.message(analysis, config)
            if message is None:
                continue
            if note.is_warning:
                warnings.append(message)
            else:
                explanations.append(message)

        # Confidence floor: decision forced to HOLD, confidence unchanged
        if confidence < config.confidence_floor:
            decision = DecisionType.HOLD
            warnings.append(
                f"Low confidence ({confidence:.0%} < {config.confidence_floor:.0%}): "
                f"forcing HOLD for capital protection"
            )
            logger.info(
                f"Confidence {confidence:.2f} below floor {config.confidence_floor:.2f}, "
                f"forcing HOLD"
            )

        return Decision(
            decision=decision,
            confidence=confidence,
            probabilities=split_probabilities(decision, confidence, analysis.rsi.value),
            explanations=explanations,
            warnings=warnings,
            timestamp=timestamp or datetime.now(timezone.utc),
        )


# Singleton instance
_service_instance: Optional[DecisionService] = None


def get_decision_service() -> DecisionService:
    """Get or create decision service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = DecisionService()
    return _service_instance
