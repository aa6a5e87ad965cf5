"""
Dependencies for FastAPI endpoints
-----------------------------------
Provides the per-request collaborators of the adjudication endpoints:
- External risk analyzer (configured from environment)
- Fallback analyzer
- Currency converter (settlement scale from config)

Tests swap these through `app.dependency_overrides`.
"""

from claim_adjudicator.config import config
from claim_adjudicator.fraud_engine.currency import CurrencyConverter
from claim_adjudicator.fraud_engine.risk_analyzer import FallbackAnalyzer, RealAnalyzer
from claim_adjudicator.utils.logger import logger


# =========================================================
# 🛰️ RISK ANALYZERS
# =========================================================
def get_real_analyzer() -> RealAnalyzer:
    """External analyzer bound to the configured service URL and timeout."""
    if not config.is_risk_service_enabled:
        logger.debug("RISK_SERVICE_URL not set — evidence payloads will be scored by the fallback analyzer.")
    return RealAnalyzer.from_config(config)


def get_fallback_analyzer() -> FallbackAnalyzer:
    return FallbackAnalyzer(config.FALLBACK_AMOUNT_CEILING)


# =========================================================
# 💱 CURRENCY CONVERTER
# =========================================================
def get_currency_converter() -> CurrencyConverter:
    return CurrencyConverter.from_config(config)
