"""
Integration Tests: API Endpoints
--------------------------------
Validates utility routes and the request logging middleware.

Includes:
- Health and root endpoints
- request_start / request_end log events
- Global exception handler shape
"""

from fastapi.testclient import TestClient
from unittest.mock import patch

from claim_adjudicator.main import app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "running"
    assert data["risk_service_enabled"] is True
    assert data["environment"] == "test"


def test_request_id_header(client):
    response = client.get("/", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


@patch("claim_adjudicator.utils.logger.logger.info")
@patch("claim_adjudicator.utils.logger.logger.error")
def test_request_logging(mock_error, mock_info, client, valid_claim):
    """POST /claims/submit → request_start and request_end events logged."""
    response = client.post("/claims/submit", json=valid_claim)
    assert response.status_code == 200

    assert mock_info.call_count >= 2
    assert '"event": "request_start"' in mock_info.call_args_list[0][0][0]
    assert '"event": "request_end"' in mock_info.call_args_list[-1][0][0]
    mock_error.assert_not_called()


@patch("claim_adjudicator.utils.logger.logger.info")
def test_health_not_logged(mock_info, client):
    client.get("/health")
    assert not any("request_start" in str(call) for call in mock_info.call_args_list)


def test_global_exception_handler(mock_test_config):
    @app.get("/_boom_for_tests")
    async def boom():
        raise RuntimeError("kaboom")

    try:
        response = TestClient(app, raise_server_exceptions=False).get("/_boom_for_tests")
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}
    finally:
        app.router.routes = [r for r in app.router.routes if getattr(r, "path", None) != "/_boom_for_tests"]
