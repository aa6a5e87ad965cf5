"""
Integration Tests: /claims/submit Endpoint
------------------------------------------
Verifies end-to-end adjudication flow, including:
- Valid request returns score, status and transfer directive.
- Invalid input triggers 400; malformed JSON and internal errors trigger 500.
- External analyzer failures never change the response.
"""

import pytest
import requests
from unittest.mock import MagicMock, patch

from claim_adjudicator.api.dependencies import get_real_analyzer
from claim_adjudicator.fraud_engine.risk_analyzer import RealAnalyzer
from claim_adjudicator.main import app

RESPONSE_KEYS = {
    "success",
    "policyId",
    "userAddress",
    "claimAmount",
    "aggregateScore",
    "status",
    "requiresTransfer",
    "transferAmount",
}


# =========================================================
# ✅ Happy Path
# =========================================================
def test_submit_approved_claim(client, valid_claim, fixed_fallback_score):
    """claimAmount 5000 in the APPROVED band → 50000 settlement units."""
    fixed_fallback_score(10.0)

    response = client.post("/claims/submit", json=valid_claim)
    assert response.status_code == 200, response.text

    data = response.json()
    assert set(data) == RESPONSE_KEYS
    assert data["success"] is True
    assert data["policyId"] == valid_claim["policyId"]
    assert data["userAddress"] == valid_claim["userAddress"]
    assert data["claimAmount"] == 5000
    assert data["aggregateScore"] == 10.0
    assert data["status"] == "APPROVED"
    assert data["requiresTransfer"] is True
    assert data["transferAmount"] == 50000


def test_submit_rejected_claim(client, valid_claim, fixed_fallback_score):
    """claimAmount 5000 in the REJECTED band → no transfer."""
    fixed_fallback_score(91.0)

    data = client.post("/claims/submit", json=valid_claim).json()
    assert data["status"] == "REJECTED"
    assert data["requiresTransfer"] is False
    assert data["transferAmount"] == 0


def test_submit_pending_claim(client, valid_claim, fixed_fallback_score):
    fixed_fallback_score(50.0)

    data = client.post("/claims/submit", json=valid_claim).json()
    assert data["status"] == "PENDING"
    assert data["requiresTransfer"] is False
    assert data["transferAmount"] == 0


def test_fallback_score_is_stable_across_requests(client, valid_claim):
    first = client.post("/claims/submit", json=valid_claim).json()
    second = client.post("/claims/submit", json=valid_claim).json()
    assert first == second
    assert 0 <= first["aggregateScore"] <= 100


def test_original_field_names_accepted(client, fixed_fallback_score):
    fixed_fallback_score(10.0)
    payload = {"policyId": "POL-1", "userAddress": "GADDR", "claimAmountINR": 100}

    data = client.post("/claims/submit", json=payload).json()
    assert data["claimAmount"] == 100
    assert data["transferAmount"] == 1000


def test_large_amount_is_floored_and_echoed_exactly(client, fixed_fallback_score):
    fixed_fallback_score(10.0)
    payload = {"policyId": "POL-BIG", "userAddress": "GADDR", "claimAmount": 10**29 - 1}

    response = client.post("/claims/submit", json=payload)
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["claimAmount"] == 10**29 - 1
    assert data["transferAmount"] == 10**30 - 10


# =========================================================
# 🛰️ External Analyzer
# =========================================================
def test_real_analyzer_score_used(client, valid_claim):
    with patch(
        "claim_adjudicator.utils.risk_service.requests.post",
        return_value=MagicMock(status_code=200, json=MagicMock(return_value={"aggregate_score": 80.0})),
    ) as post:
        response = client.post("/claims/submit", json={**valid_claim, "evidencePayload": {"invoices": 2}})

    assert response.status_code == 200
    data = response.json()
    assert data["aggregateScore"] == 80.0
    assert data["status"] == "REJECTED"
    assert post.call_args.kwargs["json"] == {"invoices": 2}
    assert post.call_args.kwargs["timeout"] == 0.5


def test_analyzer_timeout_falls_back(client, valid_claim, fixed_fallback_score):
    """A timed-out analyzer is invisible to the caller: 200 with the fallback disposition."""
    fixed_fallback_score(20.0)
    with patch(
        "claim_adjudicator.utils.risk_service.requests.post",
        side_effect=requests.Timeout("read timed out"),
    ) as post:
        response = client.post("/claims/submit", json={**valid_claim, "evidencePayload": {"invoices": 2}})

    assert response.status_code == 200
    data = response.json()
    assert set(data) == RESPONSE_KEYS
    assert data["status"] == "APPROVED"
    assert data["transferAmount"] == 50000
    post.assert_called_once()


def test_analyzer_dependency_override(client, valid_claim):
    app.dependency_overrides[get_real_analyzer] = lambda: RealAnalyzer(fetch=MagicMock(return_value=3.0))

    data = client.post("/claims/submit", json={**valid_claim, "fraudPayload": {"a": 1}}).json()
    assert data["aggregateScore"] == 3.0
    assert data["status"] == "APPROVED"


# =========================================================
# ❌ Validation & Error Handling
# =========================================================
@pytest.mark.parametrize(
    "overrides",
    [
        {"policyId": ""},
        {"userAddress": ""},
        {"claimAmount": 0},
        {"claimAmount": -5000},
        {"claimAmount": "lots"},
        {"evidencePayload": [1, 2, 3]},
    ],
)
def test_invalid_submission_returns_400(client, valid_claim, overrides):
    response = client.post("/claims/submit", json={**valid_claim, **overrides})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "Invalid input" in body["error"]


def test_missing_fields_returns_400(client):
    response = client.post("/claims/submit", json={"userAddress": "GADDR"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_validation_skips_analyzer(client, valid_claim):
    with patch("claim_adjudicator.utils.risk_service.requests.post") as post:
        response = client.post(
            "/claims/submit", json={**valid_claim, "policyId": "", "evidencePayload": {"a": 1}}
        )
    assert response.status_code == 400
    post.assert_not_called()


def test_non_object_body_returns_400(client):
    response = client.post("/claims/submit", json=["POL-1", "GADDR", 5000])
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid input"}


def test_malformed_json_returns_500(client):
    response = client.post(
        "/claims/submit",
        content='{"policyId": "POL-1", ',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_internal_error_returns_500(client, valid_claim):
    with patch(
        "claim_adjudicator.api.endpoints.claims.adjudicate",
        side_effect=RuntimeError("scoring table corrupted"),
    ):
        response = client.post("/claims/submit", json=valid_claim)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "corrupted" not in response.text
