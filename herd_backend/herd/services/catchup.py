# herd/services/catchup.py

"""
======================================================
PATH: herd/services/catchup.py
======================================================
CATCH-UP RECONCILER

Brings one cow's depreciation ledger up to date.

    Scanning -> Filling -> Reconciled

For every eligible period (see herd.services.schedule):
1. A period that already has a MonthlyDepreciation row is skipped.
2. A missing period gets an amount from the calculator, with
   accumulated_after = min(prior + amount, depreciable).
3. All missing periods of one run are consolidated into ONE journal entry
   (Dr depreciation expense / Cr accumulated depreciation for the total),
   dated on the last day of the last missing period. Rows stay one per month.

Filling stops when the cow is fully depreciated (book value reaches salvage)
or when a period's amount rounds to zero.

Runs inside the caller's transaction; the caller holds the cow lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from accounting.services.balance_validator import validate_entry
from accounting.services.journal_builder import build_depreciation_entry
from accounting.services.money import ZERO, round_to_cent
from herd.config import DepreciationConfig
from herd.models import Cow
from herd.repositories.ledger import LedgerRepository, MonthlyRecordDraft
from herd.services.depreciation_calculator import monthly_depreciation
from herd.services.schedule import Period, generate_periods

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatchUpResult:
    periods_created: int = 0
    entries_created: int = 0
    amount_posted: Decimal = ZERO
    fully_depreciated: bool = False
    journal_entry_id: int | None = None


class CatchUpReconciler:
    def __init__(self, repository: LedgerRepository, config: DepreciationConfig):
        self.repository = repository
        self.config = config

    def reconcile(
        self, cow: Cow, *, as_of: date, disposition_date: date | None = None
    ) -> CatchUpResult:
        periods = generate_periods(
            freshen_date=cow.freshen_date,
            as_of=as_of,
            disposition_date=disposition_date,
        )
        if not periods:
            return CatchUpResult()

        existing = {r.period: r for r in self.repository.list_monthly_records(cow.id)}

        price = round_to_cent(cow.purchase_price)
        depreciable = round_to_cent(cow.purchase_price - cow.salvage_value)
        accumulated = ZERO
        fully_depreciated = False
        drafts: list[MonthlyRecordDraft] = []

        for period in periods:
            record = existing.get(period.as_tuple())
            if record is not None:
                accumulated += record.amount
                continue

            if accumulated >= depreciable:
                fully_depreciated = True
                break

            amount = monthly_depreciation(
                purchase_price=price,
                salvage_value=cow.salvage_value,
                freshen_date=cow.freshen_date,
                method=cow.depreciation_method,
                years=self.config.default_years,
                period=period.as_tuple(),
                current_book_value=price - accumulated,
            )
            if amount <= 0:
                fully_depreciated = True
                break

            if accumulated + amount >= depreciable:
                amount = round_to_cent(depreciable - accumulated)
                fully_depreciated = True

            accumulated = round_to_cent(accumulated + amount)
            drafts.append(
                MonthlyRecordDraft(
                    year=period.year,
                    month=period.month,
                    amount=amount,
                    accumulated_after=accumulated,
                    book_value_after=round_to_cent(price - accumulated),
                )
            )

            if fully_depreciated:
                break

        if not drafts:
            return CatchUpResult(fully_depreciated=fully_depreciated)

        return self._post(cow, drafts, fully_depreciated)

    def _post(self, cow, drafts, fully_depreciated) -> CatchUpResult:
        first, last = drafts[0], drafts[-1]
        total = round_to_cent(sum((d.amount for d in drafts), ZERO))
        entry_date = Period(last.year, last.month).last_day

        entry = build_depreciation_entry(
            asset_id=cow.id,
            tag_number=cow.tag_number,
            amount=total,
            entry_date=entry_date,
            first_period=(first.year, first.month),
            last_period=(last.year, last.month),
            month_count=len(drafts),
            accounts=self.config.accounts,
        )
        validate_entry(entry)

        journal_entry = self.repository.insert_journal_entry_with_lines(entry)
        self.repository.insert_monthly_records(cow.id, drafts, journal_entry)

        logger.info(
            "Cow %s: posted %d month(s) %04d-%02d..%04d-%02d total=%s (entry %s)",
            cow.id,
            len(drafts),
            first.year,
            first.month,
            last.year,
            last.month,
            total,
            journal_entry.id,
        )

        return CatchUpResult(
            periods_created=len(drafts),
            entries_created=1,
            amount_posted=total,
            fully_depreciated=fully_depreciated,
            journal_entry_id=journal_entry.id,
        )
