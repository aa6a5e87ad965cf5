"""
Fraud Models
------------
Risk analysis and disposition types produced by the fraud engine.

✅ Compatible with Pydantic v2
✅ Immutable once produced (frozen models)
"""

from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 🧩 ENUMS
# =========================================================
class ClaimDisposition(str, Enum):
    """Three-way adjudication outcome."""
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


class Provenance(str, Enum):
    """Which analyzer produced a risk score."""
    REAL = "REAL"
    FALLBACK = "FALLBACK"


# =========================================================
# 📊 RISK ANALYSIS RESULT
# =========================================================
class RiskAnalysisResult(BaseModel):
    """Aggregate fraud score for one submission, plus where it came from."""
    aggregate_score: float = Field(..., description="Aggregate fraud-risk score (0–100, higher is riskier)")
    provenance: Provenance = Field(..., description="REAL if the external analyzer answered, FALLBACK otherwise")

    model_config = ConfigDict(frozen=True)


# =========================================================
# 💱 SETTLEMENT AMOUNT
# =========================================================
class SettlementAmount(BaseModel):
    """Payout expressed in the smallest unit of the settlement currency."""
    source_amount: Decimal = Field(..., description="Claim amount in source currency")
    settlement_units: int = Field(0, ge=0, description="Settlement units (floor-truncated)")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def zero(cls, source_amount: Decimal) -> "SettlementAmount":
        return cls(source_amount=source_amount, settlement_units=0)


__all__ = [
    "ClaimDisposition",
    "Provenance",
    "RiskAnalysisResult",
    "SettlementAmount",
]
