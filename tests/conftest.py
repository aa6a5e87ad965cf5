"""
Pytest Configuration File
-------------------------
Defines global test fixtures and mock setup for the Claim Adjudication Engine.

- Isolates config values per test (monkeypatch is function-scoped)
- Blocks real outbound calls to the external risk service
- Provides a FastAPI TestClient and fixed-score helpers
"""

import pytest
import requests

from claim_adjudicator.config import config
from claim_adjudicator.fraud_engine.risk_analyzer import FallbackAnalyzer


# =========================================================
# 🧩 Test Config Fixture
# =========================================================
@pytest.fixture(scope="function")
def mock_test_config(monkeypatch):
    """
    Pins config values for each test so results never depend on the host environment.
    """
    monkeypatch.setenv("ENV", "test")

    monkeypatch.setattr(config, "ENV", "test", raising=False)
    monkeypatch.setattr(config, "RISK_SERVICE_URL", "http://risk-service.test/analyze", raising=False)
    monkeypatch.setattr(config, "RISK_SERVICE_API_KEY", None, raising=False)
    monkeypatch.setattr(config, "RISK_SERVICE_TIMEOUT", 0.5, raising=False)
    monkeypatch.setattr(config, "APPROVE_SCORE_BELOW", 30.0, raising=False)
    monkeypatch.setattr(config, "REJECT_SCORE_AT", 70.0, raising=False)
    monkeypatch.setattr(config, "FALLBACK_AMOUNT_CEILING", 10000.0, raising=False)
    monkeypatch.setattr(config, "SETTLEMENT_UNIT_SCALE", 10_000_000, raising=False)
    monkeypatch.setattr(config, "EXCHANGE_RATE_DIVISOR", 1_000_000, raising=False)

    yield config


# =========================================================
# 🛑 Global Auto-Mock for the External Risk Service
# =========================================================
@pytest.fixture(autouse=True)
def block_risk_service(monkeypatch):
    """
    Prevents real network calls during tests.
    Tests that need a live-looking service patch requests.post themselves.
    """
    def _offline(*args, **kwargs):
        raise requests.ConnectionError("Network disabled in tests")

    monkeypatch.setattr("claim_adjudicator.utils.risk_service.requests.post", _offline)
    yield


# =========================================================
# 🎯 Fixed Fallback Score
# =========================================================
@pytest.fixture
def fixed_fallback_score(monkeypatch):
    """Force the fallback analyzer to a chosen score: fixed_fallback_score(12.5)."""
    def _apply(score: float):
        monkeypatch.setattr(FallbackAnalyzer, "score", lambda self, policy_id, claim_amount: score)
        return score
    return _apply


# =========================================================
# 📄 Payloads
# =========================================================
@pytest.fixture
def valid_claim():
    return {
        "policyId": "POL-2024-0042",
        "userAddress": "GBRPYHIL2CI3FNQ4BXLFMNDLFJUNPU2HY3ZMFSHONUCEOASW7QC7OX2H",
        "claimAmount": 5000,
    }


# =========================================================
# 🌐 FastAPI Test Client (for API tests)
# =========================================================
@pytest.fixture(scope="function")
def client(mock_test_config):
    """
    Provides a FastAPI test client for API integration tests.
    """
    from fastapi.testclient import TestClient
    from claim_adjudicator.main import app

    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
