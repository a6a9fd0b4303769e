"""
CONTRACT 3: Decision Engine

Input: TechnicalAnalysis + AnalysisConfig
Output: Decision

Deterministic rule table. No model, no memory between calls.
"""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, model_validator


class DecisionType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class Probabilities(BaseModel):
    """Probability distribution over the three outcomes."""

    buy: float = Field(..., ge=0.0, le=1.0)
    sell: float = Field(..., ge=0.0, le=1.0)
    hold: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_total(self) -> "Probabilities":
        """Probabilities must sum to 1."""
        total = self.buy + self.sell + self.hold
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Probabilities must sum to 1, got {total}")
        return self


class Decision(BaseModel):
    """
    Final recommendation for one analysis.

    explanations and warnings keep the order in which rules fired.
    """

    decision: DecisionType
    confidence: float = Field(..., ge=0.0, le=1.0)
    probabilities: Probabilities
    explanations: list[str]
    warnings: list[str]
    timestamp: datetime

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "decision": "BUY",
                "confidence": 0.75,
                "probabilities": {"buy": 0.75, "sell": 0.03, "hold": 0.22},
                "explanations": [
                    "RSI below 30 signals oversold conditions; price above EMA20 "
                    "suggests a bullish reversal.",
                ],
                "warnings": [],
                "timestamp": "2024-02-04T10:30:00+00:00",
            }
        }
