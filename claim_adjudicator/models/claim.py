"""
Claim Models
------------
Defines input and response schemas for claim adjudication and the legacy
transfer acknowledgement.
Compatible with Pydantic v2 and FastAPI 0.104+.

Request models accept raw JSON values on purpose: field validation happens in
the services so that every rejection is reported as a 400 with a field category.
"""

from decimal import Decimal
from typing import Any, Dict, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from claim_adjudicator.models.fraud import ClaimDisposition


# =========================================================
# 📄 CLAIM SUBMISSION (HTTP body)
# =========================================================
class ClaimSubmissionRequest(BaseModel):
    """Incoming body of POST /claims/submit."""
    policy_id: Any = Field(default=None, alias="policyId", description="Policy identifier")
    user_address: Any = Field(default=None, alias="userAddress", description="Claimant wallet address")
    claim_amount: Any = Field(
        default=None,
        validation_alias=AliasChoices("claimAmount", "claimAmountINR", "claim_amount"),
        description="Claim amount in source currency",
    )
    evidence_payload: Any = Field(
        default=None,
        validation_alias=AliasChoices("evidencePayload", "fraudPayload", "evidence_payload"),
        description="Optional evidence forwarded to the external fraud-analysis service",
    )

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "policyId": "POL-2024-0042",
                "userAddress": "GBRPYHIL2CI3FNQ4BXLFMNDLFJUNPU2HY3ZMFSHONUCEOASW7QC7OX2H",
                "claimAmount": 5000,
            }
        },
    )


# =========================================================
# ✅ VALIDATED SUBMISSION
# =========================================================
class ClaimSubmission(BaseModel):
    """Validated claim, built by the orchestrator once all invariants hold."""
    policy_id: str = Field(..., min_length=1)
    user_address: str = Field(..., min_length=1)
    claim_amount: Decimal = Field(..., gt=0, allow_inf_nan=False)
    evidence_payload: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True)


# =========================================================
# 🧠 ADJUDICATION RESULT
# =========================================================
class AdjudicationResult(BaseModel):
    """Response aggregate returned by POST /claims/submit."""
    success: bool = True
    policy_id: str = Field(..., alias="policyId")
    user_address: str = Field(..., alias="userAddress")
    claim_amount: Union[int, float] = Field(..., alias="claimAmount", description="Claim amount as submitted")
    aggregate_score: float = Field(..., alias="aggregateScore")
    disposition: ClaimDisposition = Field(..., alias="status")
    requires_transfer: bool = Field(..., alias="requiresTransfer")
    transfer_amount: int = Field(0, ge=0, alias="transferAmount", description="Settlement units to transfer")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": True,
                "policyId": "POL-2024-0042",
                "userAddress": "GBRPYHIL2CI3FNQ4BXLFMNDLFJUNPU2HY3ZMFSHONUCEOASW7QC7OX2H",
                "claimAmount": 5000,
                "aggregateScore": 21.37,
                "status": "APPROVED",
                "requiresTransfer": True,
                "transferAmount": 50000,
            }
        },
    )


# =========================================================
# 🧾 LEGACY TRANSFER ACKNOWLEDGEMENT
# =========================================================
class TransferAcknowledgementRequest(BaseModel):
    """Incoming body of POST /legacy/acknowledge-transfer."""
    user_address: Any = Field(default=None, alias="userAddress")
    settlement_units: Any = Field(
        default=None,
        validation_alias=AliasChoices("settlementUnits", "amountStroops", "settlement_units"),
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TransferAcknowledgement(BaseModel):
    """Synchronous reply kept for callers of the old fund-claim route."""
    success: bool = True
    message: str
    user_address: str = Field(..., alias="userAddress")
    settlement_units: int = Field(..., gt=0, alias="settlementUnits")
    display_amount: str = Field(..., alias="displayAmount")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


__all__ = [
    "ClaimSubmissionRequest",
    "ClaimSubmission",
    "AdjudicationResult",
    "TransferAcknowledgementRequest",
    "TransferAcknowledgement",
]
