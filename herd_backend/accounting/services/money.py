# accounting/services/money.py

"""
MONEY MATH

All monetary values are Decimals rounded half-away-from-zero to the cent.
Every computed amount passes through round_to_cent() before it is stored
or compared.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from accounting.services.exceptions import CalculationError

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return ZERO

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise CalculationError(f"Invalid money value: {value!r}") from exc

    if not amt.is_finite():
        raise CalculationError(f"Non-finite money value: {value!r}")
    return amt


def round_to_cent(value) -> Decimal:
    # ROUND_HALF_UP on Decimal rounds ties away from zero (-0.005 -> -0.01).
    return to_decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
