"""
Unit Tests: Legacy Transfer Acknowledgement
-------------------------------------------
Covers claim_adjudicator/services/legacy_transfer.py.
"""

from decimal import Decimal

import pytest

from claim_adjudicator.exceptions import InvalidInput
from claim_adjudicator.fraud_engine.currency import CurrencyConverter
from claim_adjudicator.services.legacy_transfer import acknowledge


def test_display_amount(mock_test_config):
    ack = acknowledge("GADDRESS", 12345678)
    assert ack.display_amount == "1.2346"
    assert ack.settlement_units == 12345678
    assert ack.user_address == "GADDRESS"
    assert ack.success is True
    assert "approve_claim" in ack.message


def test_integral_float_accepted(mock_test_config):
    assert acknowledge("GADDRESS", 50000.0).settlement_units == 50000


def test_injected_converter():
    ack = acknowledge("GADDRESS", 250, converter=CurrencyConverter(unit_scale=100, rate_divisor=1))
    assert ack.display_amount == "2.5000"


@pytest.mark.parametrize("address", ["", "   ", None, 123])
def test_rejects_bad_address(mock_test_config, address):
    with pytest.raises(InvalidInput) as exc_info:
        acknowledge(address, 100)
    assert exc_info.value.field == "userAddress"


@pytest.mark.parametrize(
    "units",
    [0, -1, 1.5, True, "100", None, float("nan"), float("inf"), Decimal("-3")],
)
def test_rejects_bad_units(mock_test_config, units):
    with pytest.raises(InvalidInput) as exc_info:
        acknowledge("GADDRESS", units)
    assert exc_info.value.field == "settlementUnits"
