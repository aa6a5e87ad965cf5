"""
/claims/submit Endpoint:
------------------------
Main API route for claim adjudication.
Scores the claim (external analyzer or fallback), classifies the score and,
for approved claims, returns the settlement directive.
"""

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from claim_adjudicator.api.dependencies import (
    get_currency_converter,
    get_fallback_analyzer,
    get_real_analyzer,
)
from claim_adjudicator.exceptions import AdjudicationError
from claim_adjudicator.fraud_engine.currency import CurrencyConverter
from claim_adjudicator.fraud_engine.risk_analyzer import FallbackAnalyzer, RealAnalyzer
from claim_adjudicator.models.claim import AdjudicationResult, ClaimSubmissionRequest
from claim_adjudicator.services.adjudication import adjudicate
from claim_adjudicator.utils.logger import logger

router = APIRouter(prefix="/claims", tags=["Claims"])


# =========================================================
# 🧠 Claim Submission Endpoint
# =========================================================
@router.post(
    "/submit",
    response_model=AdjudicationResult,
    summary="Adjudicate a claim",
    description="Scores a claim for fraud risk, maps the score to a status and computes the payout when approved.",
)
def submit_claim_endpoint(
    claim: ClaimSubmissionRequest = Body(..., description="JSON body containing claim details"),
    real_analyzer: RealAnalyzer = Depends(get_real_analyzer),
    fallback_analyzer: FallbackAnalyzer = Depends(get_fallback_analyzer),
    converter: CurrencyConverter = Depends(get_currency_converter),
):
    """Validate, score, classify and (when approved) price the payout."""
    try:
        return adjudicate(
            claim,
            real_analyzer=real_analyzer,
            fallback_analyzer=fallback_analyzer,
            converter=converter,
        )

    except AdjudicationError as e:
        logger.warning(f"Rejected claim submission: {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    except Exception as e:
        logger.exception(f"Internal error adjudicating claim: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )
