"""
Claim Adjudicator Package
-------------------------
Fraud risk aggregation and claim adjudication engine served over FastAPI.
Usage: from claim_adjudicator.services.adjudication import adjudicate
"""

__version__ = "1.0.0"
__all__ = ["api", "fraud_engine", "models", "services", "utils", "config"]
