"""
API tests for the analysis endpoints
"""

import pytest
from fastapi.testclient import TestClient

from suse.main import app

from conftest import OVERBOUGHT_DROP_CLOSES, OVERSOLD_BOUNCE_CLOSES, build_series

SMALL_CONFIG = {"emaPeriods": [5, 10, 15], "bollingerPeriod": 10, "volumeLookback": 10}


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


def request_body(closes, **extra):
    body = {
        "candles": [candle.model_dump() for candle in build_series(closes)],
        "symbol": "EUR/USD",
        "timeframe": "M5",
        "config": SMALL_CONFIG,
    }
    body.update(extra)
    return body


class TestAnalyze:
    def test_buy_recommendation(self, client):
        response = client.post("/api/v1/analysis/analyze", json=request_body(OVERSOLD_BOUNCE_CLOSES))

        assert response.status_code == 200
        data = response.json()
        assert data["decision"]["decision"] == "BUY"
        assert data["decision"]["confidence"] == 0.75
        assert data["market_data"]["symbol"] == "EUR/USD"
        assert data["technical_analysis"]["rsi"]["zone"] == "OVERSOLD"
        assert set(data["technical_analysis"]["ema"]["values"]) == {"ema5", "ema10", "ema15"}

    def test_sell_recommendation(self, client):
        response = client.post("/api/v1/analysis/analyze", json=request_body(OVERBOUGHT_DROP_CLOSES))

        assert response.status_code == 200
        assert response.json()["decision"]["decision"] == "SELL"

    def test_iso_timestamps_accepted(self, client):
        body = request_body(OVERSOLD_BOUNCE_CLOSES)
        for i, candle in enumerate(body["candles"]):
            candle["timestamp"] = f"2024-01-01T00:{i:02d}:00Z"

        response = client.post("/api/v1/analysis/analyze", json=body)

        assert response.status_code == 200
        assert response.json()["market_data"]["timestamp"].startswith("2024-01-01T00:14:00")

    def test_too_few_candles(self, client):
        response = client.post("/api/v1/analysis/analyze", json=request_body([100.0] * 10))

        assert response.status_code == 400
        assert "Insufficient data" in response.json()["detail"]

    def test_missing_candles(self, client):
        response = client.post("/api/v1/analysis/analyze", json={"symbol": "EUR/USD"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Candle array is missing"

    def test_unreadable_timestamp_still_analyzed(self, client):
        body = request_body(OVERSOLD_BOUNCE_CLOSES)
        body["candles"][3]["timestamp"] = "inf"

        response = client.post("/api/v1/analysis/analyze", json=body)

        assert response.status_code == 200
        assert response.json()["decision"]["decision"] == "BUY"

    def test_missing_candle_fields_are_repaired(self, client):
        body = request_body(OVERSOLD_BOUNCE_CLOSES)
        del body["candles"][0]["volume"]
        del body["candles"][1]["timestamp"]

        response = client.post("/api/v1/analysis/analyze", json=body)

        assert response.status_code == 200
        assert response.json()["decision"]["decision"] == "BUY"

    def test_invalid_config_rejected(self, client):
        body = request_body(OVERSOLD_BOUNCE_CLOSES, config={"emaPeriods": [5, 10]})
        response = client.post("/api/v1/analysis/analyze", json=body)

        assert response.status_code == 422


class TestDecisionSummary:
    def test_flat_view(self, client):
        response = client.post("/api/v1/analysis/decision", json=request_body(OVERSOLD_BOUNCE_CLOSES))

        assert response.status_code == 200
        data = response.json()
        assert data["decision"] == "BUY"
        assert sum(data["probabilities"].values()) == pytest.approx(1.0)
        assert set(data["indicators"]) == {
            "rsi",
            "ema5",
            "ema10",
            "ema15",
            "vwap",
            "atr",
            "bollinger_upper",
            "bollinger_middle",
            "bollinger_lower",
            "relative_volume",
        }
        assert data["explanations"]


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["services"] == {
            "AnalysisService": True,
            "IndicatorService": True,
            "DecisionService": True,
        }

    def test_root(self, client):
        assert client.get("/").json()["analyze"] == "/api/v1/analysis/analyze"
