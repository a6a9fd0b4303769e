"""
Decision Engine Service

CONTRACT:
    Input:  DecisionInput (TechnicalAnalysis + AnalysisConfig)
    Output: Decision

Ordered rule table; first match sets the base decision.
Confidence below the configured floor forces HOLD.
"""

from suse.services.decision.interface import DecisionInput, DecisionServiceInterface
from suse.services.decision.rules import (
    CONTEXT_NOTES,
    DECISION_RULES,
    ContextNote,
    DecisionRule,
    first_matching_rule,
)
from suse.services.decision.service import (
    DecisionService,
    get_decision_service,
    split_probabilities,
)

__all__ = [
    "DecisionInput",
    "DecisionServiceInterface",
    "CONTEXT_NOTES",
    "DECISION_RULES",
    "ContextNote",
    "DecisionRule",
    "first_matching_rule",
    "DecisionService",
    "get_decision_service",
    "split_probabilities",
]
