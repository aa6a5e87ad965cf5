"""
Claim Adjudication Service
--------------------------
Validates a submission, scores it, classifies the score and, for approved
claims, computes the settlement payout.

No persistence and no fund transfer happen here: `requires_transfer` and
`transfer_amount` are directives for the downstream settlement contract.
"""

import math
from decimal import Decimal, InvalidOperation
from numbers import Number
from typing import Any, Optional, Union

from claim_adjudicator.exceptions import InvalidSubmission
from claim_adjudicator.fraud_engine.currency import CurrencyConverter, get_default_converter
from claim_adjudicator.fraud_engine.decision_policy import DecisionBands, decide
from claim_adjudicator.fraud_engine.risk_analyzer import FallbackAnalyzer, RealAnalyzer, analyze_risk
from claim_adjudicator.models.claim import AdjudicationResult, ClaimSubmission, ClaimSubmissionRequest
from claim_adjudicator.models.fraud import ClaimDisposition, SettlementAmount
from claim_adjudicator.utils.logger import logger, log_with_context


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidSubmission(f"Invalid input: {field} is required", field=field)
    return value


def _require_amount(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (Number, Decimal)):
        raise InvalidSubmission("Invalid input: claimAmount must be a number", field="claimAmount")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidSubmission("Invalid input: claimAmount must be finite", field="claimAmount")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidSubmission("Invalid input: claimAmount must be a number", field="claimAmount")
    if not amount.is_finite():
        raise InvalidSubmission("Invalid input: claimAmount must be finite", field="claimAmount")
    if amount <= 0:
        raise InvalidSubmission("Invalid input: claimAmount must be greater than zero", field="claimAmount")
    return amount


def _echo_amount(amount: Decimal) -> Union[int, float]:
    """Whole amounts are echoed as exact integers; fractional ones as floats."""
    numerator, denominator = amount.as_integer_ratio()
    return numerator if denominator == 1 else float(amount)


def validate_submission(request: Union[ClaimSubmissionRequest, dict]) -> ClaimSubmission:
    """Check identifiers and amount before any scoring happens."""
    if isinstance(request, dict):
        request = ClaimSubmissionRequest.model_validate(request)

    policy_id = _require_text(request.policy_id, "policyId")
    user_address = _require_text(request.user_address, "userAddress")
    claim_amount = _require_amount(request.claim_amount)

    evidence = request.evidence_payload
    if evidence is not None and not isinstance(evidence, dict):
        raise InvalidSubmission("Invalid input: evidencePayload must be an object", field="evidencePayload")

    return ClaimSubmission(
        policy_id=policy_id,
        user_address=user_address,
        claim_amount=claim_amount,
        evidence_payload=evidence,
    )


def compute_settlement(
    submission: ClaimSubmission,
    disposition: ClaimDisposition,
    converter: Optional[CurrencyConverter] = None,
) -> SettlementAmount:
    """Payout for approved claims only; zero otherwise."""
    if disposition != ClaimDisposition.APPROVED:
        return SettlementAmount.zero(submission.claim_amount)
    converter = converter or get_default_converter()
    return SettlementAmount(
        source_amount=submission.claim_amount,
        settlement_units=converter.to_settlement_units(submission.claim_amount),
    )


@log_with_context("debug")
def adjudicate(
    request: Union[ClaimSubmissionRequest, dict],
    real_analyzer: Optional[RealAnalyzer] = None,
    fallback_analyzer: Optional[FallbackAnalyzer] = None,
    converter: Optional[CurrencyConverter] = None,
    bands: Optional[DecisionBands] = None,
) -> AdjudicationResult:
    """Run one claim through scoring, classification and payout computation."""
    submission = validate_submission(request)

    risk = analyze_risk(submission, real_analyzer=real_analyzer, fallback_analyzer=fallback_analyzer)
    disposition = decide(risk.aggregate_score, bands)
    settlement = compute_settlement(submission, disposition, converter)

    logger.info(
        f"[ADJUDICATION] policy={submission.policy_id} score={risk.aggregate_score:.2f} "
        f"provenance={risk.provenance.value} status={disposition.value} "
        f"transfer_units={settlement.settlement_units}",
        extra={"policy_id": submission.policy_id, "provenance": risk.provenance, "disposition": disposition},
    )

    return AdjudicationResult(
        policy_id=submission.policy_id,
        user_address=submission.user_address,
        claim_amount=_echo_amount(submission.claim_amount),
        aggregate_score=risk.aggregate_score,
        disposition=disposition,
        requires_transfer=disposition == ClaimDisposition.APPROVED,
        transfer_amount=settlement.settlement_units,
    )
