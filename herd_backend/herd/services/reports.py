# herd/services/reports.py

"""
DEPRECIATION SUMMARY REPORT

Per-fiscal-year depreciation for one cow, derived from the ledger-owned
monthly rows (never from the cow's cached totals).

Fiscal years follow settings.DEPRECIATION["FISCAL_YEAR_START_MONTH"] and are
labelled by the calendar year in which they END (start month 7 -> FY2025 runs
2024-07-01 .. 2025-06-30). With the default start month 1, FY == calendar year.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from accounting.services.money import ZERO, round_to_cent
from herd.config import DepreciationConfig, get_depreciation_config
from herd.models import Cow, MonthlyDepreciation
from herd.services.schedule import Period


@dataclass
class FiscalYearDepreciation:
    fiscal_year: int
    start: date
    end: date
    months: int = 0
    depreciation: Decimal = ZERO
    accumulated_end: Decimal = ZERO
    book_value_end: Decimal = ZERO


@dataclass
class DepreciationSummary:
    cow_id: int
    tag_number: str
    purchase_price: Decimal
    salvage_value: Decimal
    total_depreciation: Decimal
    book_value: Decimal
    fiscal_year_start_month: int
    years: list[FiscalYearDepreciation] = field(default_factory=list)


def fiscal_year_for(year: int, month: int, start_month: int) -> int:
    if start_month == 1:
        return year
    return year + 1 if month >= start_month else year


def fiscal_year_bounds(fiscal_year: int, start_month: int) -> tuple[date, date]:
    if start_month == 1:
        return date(fiscal_year, 1, 1), date(fiscal_year, 12, 31)
    start = date(fiscal_year - 1, start_month, 1)
    end = Period(fiscal_year, start_month - 1).last_day
    return start, end


def depreciation_summary(
    cow: Cow, *, config: DepreciationConfig | None = None
) -> DepreciationSummary:
    config = config or get_depreciation_config()
    start_month = config.fiscal_year_start_month

    rows = MonthlyDepreciation.objects.filter(cow_id=cow.id).order_by("year", "month")

    years: dict[int, FiscalYearDepreciation] = {}
    accumulated = ZERO
    for row in rows:
        fy = fiscal_year_for(row.year, row.month, start_month)
        bucket = years.get(fy)
        if bucket is None:
            start, end = fiscal_year_bounds(fy, start_month)
            bucket = years[fy] = FiscalYearDepreciation(fiscal_year=fy, start=start, end=end)

        accumulated = round_to_cent(accumulated + row.amount)
        bucket.months += 1
        bucket.depreciation = round_to_cent(bucket.depreciation + row.amount)
        bucket.accumulated_end = accumulated
        bucket.book_value_end = round_to_cent(cow.purchase_price - accumulated)

    return DepreciationSummary(
        cow_id=cow.id,
        tag_number=cow.tag_number,
        purchase_price=cow.purchase_price,
        salvage_value=cow.salvage_value,
        total_depreciation=accumulated,
        book_value=round_to_cent(cow.purchase_price - accumulated),
        fiscal_year_start_month=start_month,
        years=[years[k] for k in sorted(years)],
    )
