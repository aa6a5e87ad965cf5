"""
Decision Policy Engine
----------------------
Maps an aggregate fraud score to a claim disposition.

Dispositions (score scale 0–100, higher = riskier):
- APPROVED: score <  APPROVE_SCORE_BELOW
- PENDING:  APPROVE_SCORE_BELOW <= score < REJECT_SCORE_AT
- REJECTED: score >= REJECT_SCORE_AT

Band edges belong to the higher-risk band. Scores outside 0–100 fall into the
outer bands; NaN is held for manual review. Thresholds are configurable.
"""

import math
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from claim_adjudicator.config import config
from claim_adjudicator.models.fraud import ClaimDisposition


class DecisionBands(BaseModel):
    """Immutable pair of band edges."""
    approve_below: float = Field(..., allow_inf_nan=False)
    reject_at: float = Field(..., allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_order(self) -> "DecisionBands":
        if self.approve_below >= self.reject_at:
            raise ValueError(
                f"approve_below ({self.approve_below}) must be lower than reject_at ({self.reject_at})"
            )
        return self

    @classmethod
    def from_config(cls, cfg=config) -> "DecisionBands":
        return cls(approve_below=cfg.APPROVE_SCORE_BELOW, reject_at=cfg.REJECT_SCORE_AT)


def decide(aggregate_score: float, bands: Optional[DecisionBands] = None) -> ClaimDisposition:
    """Classify a score. Pure: same score and bands always give the same disposition."""
    bands = bands or DecisionBands.from_config()
    score = float(aggregate_score)

    if math.isnan(score):
        return ClaimDisposition.PENDING
    if score >= bands.reject_at:
        return ClaimDisposition.REJECTED
    if score >= bands.approve_below:
        return ClaimDisposition.PENDING
    return ClaimDisposition.APPROVED


_REASONS = {
    ClaimDisposition.APPROVED: "Low risk: score below the approval threshold.",
    ClaimDisposition.PENDING: "Medium risk: claim held for manual review.",
    ClaimDisposition.REJECTED: "High risk: score at or above the rejection threshold.",
}


def get_decision_details(aggregate_score: float, bands: Optional[DecisionBands] = None) -> Dict[str, Any]:
    """Disposition plus the reasoning used to reach it (for logs and audits)."""
    bands = bands or DecisionBands.from_config()
    disposition = decide(aggregate_score, bands)
    return {
        "disposition": disposition.value,
        "aggregate_score": aggregate_score,
        "approve_below": bands.approve_below,
        "reject_at": bands.reject_at,
        "reason": _REASONS[disposition],
    }
