"""
Decision Engine Interface

Defines the contract for turning indicator state into a recommendation.
"""

from abc import abstractmethod
from dataclasses import dataclass, field

from suse.services.base import BaseService
from suse.schemas.analysis import AnalysisConfig
from suse.schemas.decision import Decision
from suse.schemas.indicators import TechnicalAnalysis


@dataclass
class DecisionInput:
    """Indicator state to decide on."""

    analysis: TechnicalAnalysis
    config: AnalysisConfig = field(default_factory=AnalysisConfig)


class DecisionServiceInterface(BaseService[DecisionInput, Decision]):
    """
    Decision Engine Contract.

    INPUT: DecisionInput
        - analysis: TechnicalAnalysis for one window
        - config: confidence floor and thresholds

    OUTPUT: Decision
        - decision (BUY/SELL/HOLD), confidence, probabilities,
          explanations and warnings in rule-firing order

    INVARIANT: confidence below the floor always yields HOLD.
    """

    @property
    def name(self) -> str:
        return "DecisionService"

    @abstractmethod
    def execute(self, input_data: DecisionInput) -> Decision:
        """Evaluate the rule table."""
        pass
