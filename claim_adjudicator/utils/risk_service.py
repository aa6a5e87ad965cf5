"""
External Risk Service Client
----------------------------
Submits an evidence payload to the external fraud-analysis service and reads
back its aggregate score.

Every failure (network error, timeout, non-2xx status, invalid JSON, missing or
non-numeric score) is raised as ExternalAnalyzerFailure so that the caller can
switch to the fallback analyzer. No retries.
"""

import math
from typing import Any, Dict, Optional

import requests

from claim_adjudicator.config import config
from claim_adjudicator.exceptions import ExternalAnalyzerFailure
from claim_adjudicator.utils.logger import logger

SCORE_KEYS = ("aggregate_score", "aggregateScore")


def _headers(api_key: Optional[str] = None) -> Dict[str, str]:
    """Return standard headers for risk-service requests."""
    headers = {
        "Content-Type": "application/json",
        "User-Agent": "ClaimAdjudicator/1.0",
    }
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def _extract_score(data: Any) -> float:
    """Pull a finite numeric aggregate score out of the service response."""
    if not isinstance(data, dict):
        raise ExternalAnalyzerFailure(f"Unexpected response type: {type(data).__name__}")

    raw = next((data[key] for key in SCORE_KEYS if key in data), None)
    if raw is None and isinstance(data.get("result"), dict):
        raw = next((data["result"][key] for key in SCORE_KEYS if key in data["result"]), None)

    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ExternalAnalyzerFailure(f"Response carries no numeric aggregate score: {raw!r}")
    if not math.isfinite(raw):
        raise ExternalAnalyzerFailure(f"Aggregate score is not finite: {raw!r}")
    return float(raw)


def fetch_aggregate_score(
    payload: Dict[str, Any],
    url: Optional[str] = None,
    timeout: Optional[float] = None,
    api_key: Optional[str] = None,
) -> float:
    """POST the evidence payload to the fraud-analysis service and return its score."""
    url = url or config.RISK_SERVICE_URL
    timeout = timeout if timeout is not None else config.RISK_SERVICE_TIMEOUT
    api_key = api_key or config.RISK_SERVICE_API_KEY

    if not url:
        raise ExternalAnalyzerFailure("RISK_SERVICE_URL is not configured")

    try:
        logger.debug(f"🌐 Risk service request: POST {url} (timeout={timeout}s)")
        resp = requests.post(url, json=payload, headers=_headers(api_key), timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.Timeout as e:
        raise ExternalAnalyzerFailure(f"Risk service timed out after {timeout}s", cause=e) from e
    except requests.RequestException as e:
        raise ExternalAnalyzerFailure(f"Risk service request failed: {e}", cause=e) from e
    except ValueError as e:
        raise ExternalAnalyzerFailure("Invalid JSON response from risk service", cause=e) from e

    score = _extract_score(data)
    logger.debug(f"✅ Risk service score: {score:.2f}")
    return score
