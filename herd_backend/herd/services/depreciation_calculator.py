# herd/services/depreciation_calculator.py

"""
======================================================
PATH: herd/services/depreciation_calculator.py
======================================================
DEPRECIATION CALCULATOR

Monthly depreciation for one cow under one of three methods:

- straight-line       (price - salvage) / (years * 12)
- declining-balance   book_value * (2 / years) / 12      (double declining)
- sum-of-years        depreciable * remaining / (N(N+1)/2)
                      N = years * 12, remaining = max(0, N - months_elapsed)

months_elapsed counts whole calendar months from the freshen month to the
period month (the freshen month itself is 0).

Straight-line and sum-of-years cover exactly N months; the last month of the
life absorbs the rounding remainder.

Partial month (disposition): full * day / days_in_month, using the
disposition date's own calendar month.

Pure functions. Every result is cent-rounded.
"""

from __future__ import annotations

import calendar
from datetime import date
from decimal import Decimal

from accounting.services.exceptions import CalculationError
from accounting.services.money import ZERO, round_to_cent, to_decimal
from herd.models.cow import Cow
from herd.services.exceptions import CowValidationError

METHODS = (Cow.STRAIGHT_LINE, Cow.DECLINING_BALANCE, Cow.SUM_OF_YEARS)


def _validate_inputs(purchase_price, salvage_value, freshen_date, as_of):
    if purchase_price <= 0:
        raise CowValidationError("Purchase price must be positive", field="purchase_price")
    if salvage_value < 0:
        raise CowValidationError("Salvage value cannot be negative", field="salvage_value")
    if salvage_value >= purchase_price:
        raise CowValidationError(
            "Salvage value must be less than purchase price", field="salvage_value"
        )
    if freshen_date is None:
        raise CowValidationError("Freshen date is required", field="freshen_date")
    if as_of is not None and freshen_date > as_of:
        raise CowValidationError(
            f"Freshen date {freshen_date} is after {as_of}", field="freshen_date"
        )


def validate_depreciation_inputs(
    *,
    purchase_price,
    salvage_value,
    freshen_date: date,
    method: str,
    as_of: date | None = None,
) -> None:
    _validate_inputs(
        to_decimal(purchase_price), to_decimal(salvage_value), freshen_date, as_of
    )
    if method not in METHODS:
        raise CowValidationError(
            f"Unsupported depreciation method: {method!r}", field="depreciation_method"
        )


def months_elapsed(freshen_date: date, year: int, month: int) -> int:
    return (year - freshen_date.year) * 12 + (month - freshen_date.month)


def monthly_depreciation(
    *,
    purchase_price,
    salvage_value,
    freshen_date: date,
    method: str,
    years: int,
    period: tuple[int, int],
    current_book_value=None,
) -> Decimal:
    """
    Full-month depreciation for `period` (year, month).

    The period's last day is the as-of date for validation, so a cow freshened
    mid-month still earns a full first month.

    Straight-line and sum-of-years stop at the end of the useful life. When
    `current_book_value` is given, the final month of the life posts whatever
    is left down to salvage, so rounding never spills into month N + 1.
    """
    price = to_decimal(purchase_price)
    salvage = to_decimal(salvage_value)
    year, month = period
    period_end = date(year, month, calendar.monthrange(year, month)[1])

    validate_depreciation_inputs(
        purchase_price=price,
        salvage_value=salvage,
        freshen_date=freshen_date,
        method=method,
        as_of=period_end,
    )
    if years < 1:
        raise CalculationError(f"Useful life must be at least one year (got {years})")

    depreciable = price - salvage
    total_months = years * 12
    elapsed = months_elapsed(freshen_date, year, month)

    if method == Cow.DECLINING_BALANCE:
        if current_book_value is None:
            raise CalculationError(
                "Declining-balance depreciation requires the current book value",
                period=period,
            )
        book_value = to_decimal(current_book_value)
        rate = Decimal(2) / Decimal(years)
        return round_to_cent(book_value * rate / 12)

    if elapsed >= total_months:
        return ZERO

    if elapsed == total_months - 1 and current_book_value is not None:
        return max(ZERO, round_to_cent(to_decimal(current_book_value) - salvage))

    if method == Cow.STRAIGHT_LINE:
        return round_to_cent(depreciable / total_months)

    # sum-of-years
    remaining = total_months - elapsed
    digits_sum = Decimal(total_months * (total_months + 1)) / 2
    return round_to_cent(depreciable * remaining / digits_sum)


def is_last_day_of_month(d: date) -> bool:
    return d.day == calendar.monthrange(d.year, d.month)[1]


def partial_month_depreciation(full_month_amount, disposition_date: date) -> Decimal:
    days_in_month = calendar.monthrange(disposition_date.year, disposition_date.month)[1]
    full = to_decimal(full_month_amount)
    return round_to_cent(full * disposition_date.day / days_in_month)
