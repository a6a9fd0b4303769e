"""
Analysis API Endpoints

Candle window in, explainable BUY / SELL / HOLD out.
"""

import logging

from fastapi import APIRouter, HTTPException

from suse.schemas.analysis import AnalysisRequest, AnalysisResult, DecisionSummary
from suse.services.analysis import get_analysis_service
from suse.services.base import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


def _run(request: AnalysisRequest) -> AnalysisResult:
    analysis_service = get_analysis_service()
    try:
        return analysis_service.execute(request)
    except ServiceError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception(f"Analysis failed for {request.symbol}")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {e}")


@router.post("/analyze", response_model=AnalysisResult)
def analyze(request: AnalysisRequest):
    """
    Analyze a candle window and produce a recommendation.

    Runs the full pipeline:
    1. Validate and normalize candles
    2. Calculate indicators (RSI, EMAs, VWAP, ATR, Bollinger, Fibonacci, volume)
    3. Evaluate the decision rules

    Returns market data, technical analysis and the decision.
    Rejects missing or too-short candle arrays with 400.
    """
    return _run(request)


@router.post("/decision", response_model=DecisionSummary)
def decision(request: AnalysisRequest):
    """
    Same pipeline as /analyze, flattened to the decision and headline
    indicator values.
    """
    return DecisionSummary.from_result(_run(request))
