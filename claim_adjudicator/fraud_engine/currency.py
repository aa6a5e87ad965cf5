"""
Currency Conversion
-------------------
Maps a claim amount in the source currency to the smallest indivisible unit of
the settlement currency, and formats settlement units for display.

    settlement_units = floor(amount * SETTLEMENT_UNIT_SCALE / EXCHANGE_RATE_DIVISOR)
    display_amount   = settlement_units / SETTLEMENT_UNIT_SCALE   (4 decimals)

Fractional settlement units are always discarded, never rounded up.
The display string is for humans only; settlement accounting uses the integer.
"""

import math
from decimal import Decimal, InvalidOperation
from numbers import Number
from typing import Union

from claim_adjudicator.config import config
from claim_adjudicator.exceptions import InvalidAmount

Amount = Union[int, float, Decimal]

DISPLAY_DIGITS = 4
DISPLAY_DIGITS_SCALE = 10 ** DISPLAY_DIGITS


def _to_decimal(value: Amount, label: str) -> Decimal:
    """Coerce a numeric input to Decimal, rejecting negatives and non-finite values."""
    if isinstance(value, bool) or not isinstance(value, (Number, Decimal)):
        raise InvalidAmount(f"{label} must be a number", field=label)
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidAmount(f"{label} must be finite", field=label)
    try:
        # str() keeps the shortest repr of a float, so 0.1 stays 0.1
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"{label} must be a number", field=label)
    if not amount.is_finite():
        raise InvalidAmount(f"{label} must be finite", field=label)
    if amount < 0:
        raise InvalidAmount(f"{label} must not be negative", field=label)
    return amount


class CurrencyConverter:
    """Converter bound to one scale configuration."""

    def __init__(self, unit_scale: int, rate_divisor: int):
        if unit_scale <= 0 or rate_divisor <= 0:
            raise ValueError("unit_scale and rate_divisor must be positive")
        self.unit_scale = int(unit_scale)
        self.rate_divisor = int(rate_divisor)

    @classmethod
    def from_config(cls, cfg=config) -> "CurrencyConverter":
        return cls(cfg.SETTLEMENT_UNIT_SCALE, cfg.EXCHANGE_RATE_DIVISOR)

    def to_settlement_units(self, source_amount: Amount) -> int:
        """Floor-convert a source amount to settlement units."""
        amount = _to_decimal(source_amount, "claimAmount")
        # exact rational arithmetic; a Decimal context would round past 28 digits
        numerator, denominator = amount.as_integer_ratio()
        return (numerator * self.unit_scale) // (denominator * self.rate_divisor)

    def to_display_units(self, settlement_units: Amount) -> str:
        """Format settlement units as whole coins with 4 fractional digits."""
        units = _to_decimal(settlement_units, "settlementUnits")
        numerator, denominator = units.as_integer_ratio()
        divisor = denominator * self.unit_scale
        quotient, remainder = divmod(numerator * DISPLAY_DIGITS_SCALE, divisor)
        if 2 * remainder >= divisor:
            quotient += 1  # half-up
        whole, fraction = divmod(quotient, DISPLAY_DIGITS_SCALE)
        return f"{whole}.{fraction:0{DISPLAY_DIGITS}d}"

    def __repr__(self) -> str:
        return f"CurrencyConverter(unit_scale={self.unit_scale}, rate_divisor={self.rate_divisor})"


# =========================================================
# 🔧 Module-level helpers (configured converter)
# =========================================================
def get_default_converter() -> CurrencyConverter:
    """Converter built from the current configuration."""
    return CurrencyConverter.from_config(config)


def to_settlement_units(source_amount: Amount) -> int:
    return get_default_converter().to_settlement_units(source_amount)


def to_display_units(settlement_units: Amount) -> str:
    return get_default_converter().to_display_units(settlement_units)
