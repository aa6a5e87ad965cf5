"""
Configuration management for the Claim Adjudication Engine.
-----------------------------------------------------------
- Loads environment variables from `.env` (for local) or runtime environment (AWS/Prod).
- Centralized access for the external risk service, decision bands and currency scale.
- The settlement scale constants live here only; converters receive them by injection.
"""

import os
from typing import Optional, List, Dict, Any
from dotenv import load_dotenv

# Load .env only in local/dev mode
if os.getenv("ENV", "local") == "local":
    load_dotenv()


class Config:
    """Central configuration object for all service-level environment variables."""

    # =========================================================
    # 🧩 Helper
    # =========================================================
    @staticmethod
    def _from_env(key: str, default: Optional[str] = None, cast=None):
        """Load environment variable with optional casting."""
        value = os.getenv(key, default)
        if cast and value is not None:
            try:
                return cast(value)
            except ValueError:
                return default
        return value

    # =========================================================
    # 🛰️ EXTERNAL RISK SERVICE
    # =========================================================
    RISK_SERVICE_URL: Optional[str] = _from_env.__func__("RISK_SERVICE_URL")
    RISK_SERVICE_API_KEY: Optional[str] = _from_env.__func__("RISK_SERVICE_API_KEY")
    RISK_SERVICE_TIMEOUT: float = _from_env.__func__("RISK_SERVICE_TIMEOUT", 5.0, float)

    # =========================================================
    # ⚖️ DECISION BANDS (score scale 0–100, higher = riskier)
    # =========================================================
    APPROVE_SCORE_BELOW: float = _from_env.__func__("APPROVE_SCORE_BELOW", 30.0, float)
    REJECT_SCORE_AT: float = _from_env.__func__("REJECT_SCORE_AT", 70.0, float)
    FALLBACK_AMOUNT_CEILING: float = _from_env.__func__("FALLBACK_AMOUNT_CEILING", 10000.0, float)

    # =========================================================
    # 💱 SETTLEMENT CURRENCY SCALE
    # =========================================================
    # units = floor(amount * SETTLEMENT_UNIT_SCALE / EXCHANGE_RATE_DIVISOR)
    SETTLEMENT_UNIT_SCALE: int = _from_env.__func__("SETTLEMENT_UNIT_SCALE", 10_000_000, int)
    EXCHANGE_RATE_DIVISOR: int = _from_env.__func__("EXCHANGE_RATE_DIVISOR", 1_000_000, int)

    # =========================================================
    # 🚀 APP SETTINGS
    # =========================================================
    DEBUG: bool = _from_env.__func__("DEBUG", "True", lambda v: v.lower() == "true")
    LOG_LEVEL: str = _from_env.__func__("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = _from_env.__func__("LOG_FILE", "claim_adjudicator.log")
    CLOUDWATCH_LOG_GROUP: str = _from_env.__func__("CLOUDWATCH_LOG_GROUP", "claim-adjudicator-logs")
    AWS_REGION: str = _from_env.__func__("AWS_REGION", "us-east-1")
    API_HOST: str = _from_env.__func__("API_HOST", "0.0.0.0")
    API_PORT: int = _from_env.__func__("API_PORT", 8000, int)
    ENV: str = _from_env.__func__("ENV", "local")  # local/dev/prod
    ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in _from_env.__func__("ALLOWED_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # =========================================================
    # ✅ Computed Properties
    # =========================================================
    @property
    def is_risk_service_enabled(self) -> bool:
        """Check if the external fraud-analysis service is configured."""
        return bool(self.RISK_SERVICE_URL)

    @property
    def settlement_units_per_source_unit(self) -> float:
        """Effective exchange rate expressed in settlement units per source unit."""
        return self.SETTLEMENT_UNIT_SCALE / self.EXCHANGE_RATE_DIVISOR

    # =========================================================
    # 📋 Config Summary
    # =========================================================
    @staticmethod
    def _redact(value: Optional[str]) -> Optional[str]:
        """Redact sensitive info for display."""
        if not value:
            return None
        if len(value) <= 6:
            return "***"
        return f"{value[:3]}***{value[-3:]}"  # Masked middle part

    def summary(self) -> Dict[str, Any]:
        """Configuration summary (safe for logs)."""
        return {
            "ENV": self.ENV,
            "DEBUG": self.DEBUG,
            "RISK_SERVICE_URL": self.RISK_SERVICE_URL,
            "RISK_SERVICE_API_KEY": self._redact(self.RISK_SERVICE_API_KEY),
            "RISK_SERVICE_TIMEOUT": self.RISK_SERVICE_TIMEOUT,
            "APPROVE_SCORE_BELOW": self.APPROVE_SCORE_BELOW,
            "REJECT_SCORE_AT": self.REJECT_SCORE_AT,
            "SETTLEMENT_UNIT_SCALE": self.SETTLEMENT_UNIT_SCALE,
            "EXCHANGE_RATE_DIVISOR": self.EXCHANGE_RATE_DIVISOR,
            "UNITS_PER_SOURCE_UNIT": self.settlement_units_per_source_unit,
        }


# =========================================================
# Instantiate Global Config
# =========================================================
config = Config()
