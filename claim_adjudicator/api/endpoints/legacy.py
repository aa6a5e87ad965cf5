"""
/legacy/acknowledge-transfer Endpoint:
--------------------------------------
Compatibility route for callers of the old fund-claim API. Returns a
well-formed acknowledgement; the transfer itself is executed by the claim
contract, never by this service.
"""

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from claim_adjudicator.api.dependencies import get_currency_converter
from claim_adjudicator.exceptions import AdjudicationError
from claim_adjudicator.fraud_engine.currency import CurrencyConverter
from claim_adjudicator.models.claim import TransferAcknowledgement, TransferAcknowledgementRequest
from claim_adjudicator.services.legacy_transfer import acknowledge
from claim_adjudicator.utils.logger import logger

router = APIRouter(prefix="/legacy", tags=["Legacy"])


@router.post(
    "/acknowledge-transfer",
    response_model=TransferAcknowledgement,
    summary="Acknowledge a transfer request (no funds moved)",
)
def acknowledge_transfer_endpoint(
    body: TransferAcknowledgementRequest = Body(...),
    converter: CurrencyConverter = Depends(get_currency_converter),
):
    try:
        return acknowledge(body.user_address, body.settlement_units, converter=converter)

    except AdjudicationError as e:
        logger.warning(f"Rejected transfer acknowledgement: {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    except Exception as e:
        logger.exception(f"Internal error acknowledging transfer: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )
