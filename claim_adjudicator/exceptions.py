"""
Adjudication Errors
-------------------
Error taxonomy for the adjudication engine.

- InvalidSubmission / InvalidInput / InvalidAmount are caller errors (HTTP 400).
- ExternalAnalyzerFailure never leaves the risk adapter: it selects the fallback path.
- Anything else is an internal failure and is answered with a generic HTTP 500.
"""


class AdjudicationError(Exception):
    """Base class for errors raised by the adjudication engine."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}


class InvalidSubmission(AdjudicationError):
    """Claim submission failed validation (identifiers or amount)."""


class InvalidInput(AdjudicationError):
    """Legacy transfer acknowledgement received an unusable address or amount."""


class InvalidAmount(AdjudicationError, ValueError):
    """Amount is negative, non-finite or not a number."""


class ExternalAnalyzerFailure(Exception):
    """The external fraud-analysis service could not produce a score."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause


__all__ = [
    "AdjudicationError",
    "InvalidSubmission",
    "InvalidInput",
    "InvalidAmount",
    "ExternalAnalyzerFailure",
]
