"""
Risk Analyzer Adapter
---------------------
Produces a RiskAnalysisResult for a validated claim submission.

Two strategies, chosen per call:
- RealAnalyzer:     forwards the evidence payload to the external fraud-analysis service.
- FallbackAnalyzer: deterministic synthetic score from claim amount + policy id.

The real analyzer runs only when an evidence payload was supplied. If it fails
for any reason the fallback runs exactly once in its place and the failure is
only logged. The real analyzer is never retried.
"""

import hashlib
from decimal import Decimal
from typing import Callable, Optional

from claim_adjudicator.config import config
from claim_adjudicator.exceptions import ExternalAnalyzerFailure
from claim_adjudicator.models.claim import ClaimSubmission
from claim_adjudicator.models.fraud import Provenance, RiskAnalysisResult
from claim_adjudicator.utils.logger import logger
from claim_adjudicator.utils.risk_service import fetch_aggregate_score

# Fallback score = amount component (0–50) + stable jitter (0–50)
AMOUNT_WEIGHT = 50.0
JITTER_WEIGHT = 50.0


class RealAnalyzer:
    """Scores a submission through the external fraud-analysis service."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
        fetch: Callable[..., float] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.api_key = api_key
        self._fetch = fetch or fetch_aggregate_score

    @classmethod
    def from_config(cls, cfg=config) -> "RealAnalyzer":
        return cls(url=cfg.RISK_SERVICE_URL, timeout=cfg.RISK_SERVICE_TIMEOUT, api_key=cfg.RISK_SERVICE_API_KEY)

    def analyze(self, submission: ClaimSubmission) -> RiskAnalysisResult:
        if submission.evidence_payload is None:
            raise ExternalAnalyzerFailure("No evidence payload to analyze")
        try:
            score = self._fetch(
                submission.evidence_payload,
                url=self.url,
                timeout=self.timeout,
                api_key=self.api_key,
            )
        except ExternalAnalyzerFailure:
            raise
        except Exception as e:
            raise ExternalAnalyzerFailure(f"Unexpected analyzer error: {e}", cause=e) from e
        return RiskAnalysisResult(aggregate_score=score, provenance=Provenance.REAL)


class FallbackAnalyzer:
    """Deterministic synthetic scorer: no network, no clock, no unseeded randomness."""

    def __init__(self, amount_ceiling: Optional[float] = None):
        self.amount_ceiling = float(amount_ceiling or config.FALLBACK_AMOUNT_CEILING)

    @staticmethod
    def _jitter(policy_id: str, amount: Decimal) -> float:
        """Stable value in [0, 1) derived from the policy id and amount."""
        key = f"{policy_id}:{format(amount.normalize(), 'f')}"
        digest = hashlib.sha256(key.encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "big") / 2 ** 64

    def score(self, policy_id: str, claim_amount: Decimal) -> float:
        amount_ratio = min(float(claim_amount) / self.amount_ceiling, 1.0)
        score = amount_ratio * AMOUNT_WEIGHT + self._jitter(policy_id, claim_amount) * JITTER_WEIGHT
        return round(score, 2)

    def analyze(self, submission: ClaimSubmission) -> RiskAnalysisResult:
        score = self.score(submission.policy_id, submission.claim_amount)
        logger.debug(f"[RISK] Fallback score {score:.2f} for policy {submission.policy_id}")
        return RiskAnalysisResult(aggregate_score=score, provenance=Provenance.FALLBACK)


def analyze_risk(
    submission: ClaimSubmission,
    real_analyzer: Optional[RealAnalyzer] = None,
    fallback_analyzer: Optional[FallbackAnalyzer] = None,
) -> RiskAnalysisResult:
    """Pick the analyzer for this submission and absorb real-analyzer failures."""
    fallback_analyzer = fallback_analyzer or FallbackAnalyzer()

    if submission.evidence_payload is None:
        return fallback_analyzer.analyze(submission)

    real_analyzer = real_analyzer or RealAnalyzer.from_config()
    try:
        return real_analyzer.analyze(submission)
    except ExternalAnalyzerFailure as e:
        logger.warning(
            f"⚠️ External analyzer failed for policy {submission.policy_id}: {e} — using fallback.",
            extra={"policy_id": submission.policy_id},
        )
        return fallback_analyzer.analyze(submission)
