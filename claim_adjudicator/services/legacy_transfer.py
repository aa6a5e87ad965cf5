"""
Legacy Transfer Acknowledgement
-------------------------------
Kept for callers of the old fund-claim route. Validates the address and amount
and echoes a display-formatted amount. No transfer is performed here: the
claim contract settles approved claims on-chain.
"""

from decimal import Decimal
from numbers import Number
from typing import Any, Optional

from claim_adjudicator.exceptions import InvalidInput
from claim_adjudicator.fraud_engine.currency import CurrencyConverter, get_default_converter
from claim_adjudicator.models.claim import TransferAcknowledgement
from claim_adjudicator.utils.logger import logger

ACKNOWLEDGEMENT_MESSAGE = (
    "Transfer acknowledged. Settlement is executed by the claim contract's approve_claim function; "
    "no funds were moved by this service."
)


def _require_units(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (Number, Decimal)):
        raise InvalidInput("Invalid input: settlementUnits must be a number", field="settlementUnits")
    try:
        is_whole = value == int(value)
    except (OverflowError, ValueError):
        raise InvalidInput("Invalid input: settlementUnits must be finite", field="settlementUnits")
    if not is_whole:
        raise InvalidInput("Invalid input: settlementUnits must be a whole number", field="settlementUnits")
    units = int(value)
    if units <= 0:
        raise InvalidInput("Invalid input: settlementUnits must be greater than zero", field="settlementUnits")
    return units


def acknowledge(
    user_address: Any,
    settlement_units: Any,
    converter: Optional[CurrencyConverter] = None,
) -> TransferAcknowledgement:
    """Validate and echo a transfer request without moving any funds."""
    if not isinstance(user_address, str) or not user_address.strip():
        raise InvalidInput("Invalid input: userAddress is required", field="userAddress")
    units = _require_units(settlement_units)

    converter = converter or get_default_converter()
    display_amount = converter.to_display_units(units)

    logger.info(f"[LEGACY] Acknowledged {units} settlement units ({display_amount}) for {user_address}")

    return TransferAcknowledgement(
        message=ACKNOWLEDGEMENT_MESSAGE,
        user_address=user_address,
        settlement_units=units,
        display_amount=display_amount,
    )
