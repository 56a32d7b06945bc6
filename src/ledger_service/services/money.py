"""Decimal amounts and their integer storage form."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ledger_service.exceptions import ServiceError

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("1000000000000")
# Stored balances stay well inside SQLite's signed 64-bit INTEGER.
MAX_BALANCE = Decimal("1000000000000000")
_MINOR_UNITS_PER_UNIT = 100


def parse_amount(value: object) -> Decimal:
    """
    Validate a client-supplied amount.

    Accepts ints, floats, Decimals and numeric strings. The result is a
    positive Decimal with at most two fractional digits.

    Raises:
        ServiceError: INVALID_AMOUNT for anything else.
    """
    if isinstance(value, bool):
        raise ServiceError("INVALID_AMOUNT", "Amount must be a number", 400, {})
    try:
        # str() keeps floats like 0.1 from expanding to their binary value
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ServiceError("INVALID_AMOUNT", "Amount must be a number", 400, {}) from exc

    if not amount.is_finite() or amount <= 0:
        raise ServiceError("INVALID_AMOUNT", "Amount must be a positive number", 400, {})
    if amount > MAX_AMOUNT:
        raise ServiceError("INVALID_AMOUNT", "Amount is too large", 400, {})
    if amount != amount.quantize(CENT):
        raise ServiceError(
            "INVALID_AMOUNT",
            "Amount must not have more than two decimal places",
            400,
            {},
        )
    return amount.quantize(CENT)


def to_minor_units(amount: Decimal) -> int:
    """Convert a validated amount to integer cents."""
    return int((amount * _MINOR_UNITS_PER_UNIT).to_integral_value())


def from_minor_units(value: int) -> Decimal:
    """Convert stored integer cents back to a Decimal amount."""
    return (Decimal(value) / _MINOR_UNITS_PER_UNIT).quantize(CENT)
