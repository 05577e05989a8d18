# herd/services/disposition.py

"""
======================================================
PATH: herd/services/disposition.py
======================================================
DISPOSITION PROCESSOR (SINGLE ALGORITHM)

    NotDisposed -> Reconciling -> Posted
                |-> Rejected (a disposition already exists)

Steps (inside the caller's transaction, under the cow lock):
1. Validate the request; reject if the cow already has a disposition.
2. Cleanup: remove this cow's journal data dated AFTER the disposition date
   (lines, then entries left without lines, plus the monthly rows they
   posted). Done first so a consolidated entry dated past the disposition
   date cannot hide months that belong before it.
3. Catch up every full month before the disposition month.
4. Disposition month: full amount when the date is the month's last day,
   otherwise prorated by day. Posted as its own depreciation entry dated
   on the disposition date.
5. Accumulated depreciation is read back from the LEDGER (credits to the
   accumulated-depreciation account on depreciation entries dated on or
   before the disposition date). Cached cow fields are never used.
6. final_book_value = price - accumulated (floored at salvage when the
   clamp is configured; the over-depreciation is reversed in the entry),
   gain_loss = sale_amount - final_book_value.
7. One balanced disposition entry + the disposition row + status change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from accounting.services.balance_validator import validate_entry
from accounting.services.journal_builder import (
    build_depreciation_entry,
    build_disposition_entry,
)
from accounting.services.money import ZERO, round_to_cent
from herd.config import DepreciationConfig
from herd.models import Cow, CowDisposition
from herd.repositories.ledger import CleanupResult, LedgerRepository, MonthlyRecordDraft
from herd.services.catchup import CatchUpReconciler, CatchUpResult
from herd.services.depreciation_calculator import (
    is_last_day_of_month,
    monthly_depreciation,
    partial_month_depreciation,
)
from herd.services.exceptions import CowValidationError, DispositionConflictError
from herd.services.schedule import Period

logger = logging.getLogger(__name__)

DISPOSITION_TYPES = dict(CowDisposition.DISPOSITION_TYPES)
MAX_NOTES_LENGTH = 500


@dataclass(frozen=True)
class DispositionOutcome:
    disposition: CowDisposition
    final_book_value: Decimal
    gain_loss: Decimal
    accumulated_depreciation: Decimal
    partial_month_depreciation: Decimal
    cleanup: CleanupResult
    catchup: CatchUpResult


class DispositionProcessor:
    def __init__(self, repository: LedgerRepository, config: DepreciationConfig):
        self.repository = repository
        self.config = config
        self.catchup = CatchUpReconciler(repository, config)

    def _validate(
        self, cow: Cow, *, disposition_date, disposition_type, sale_amount, notes, as_of
    ) -> Decimal:
        if disposition_type not in DISPOSITION_TYPES:
            raise CowValidationError(
                f"Invalid disposition type: {disposition_type!r}",
                field="disposition_type",
            )

        if disposition_date is None:
            raise CowValidationError(
                "Disposition date is required", field="disposition_date"
            )

        if disposition_date > as_of:
            raise CowValidationError(
                "Disposition date cannot be in the future", field="disposition_date"
            )

        if disposition_date < cow.freshen_date:
            raise CowValidationError(
                "Disposition date cannot be before the freshen date",
                field="disposition_date",
            )

        sale_amount = round_to_cent(sale_amount)
        if sale_amount < 0:
            raise CowValidationError("Sale amount cannot be negative", field="sale_amount")

        if disposition_type != CowDisposition.SALE and sale_amount > 0:
            raise CowValidationError(
                "Sale amount should be 0 for non-sale dispositions", field="sale_amount"
            )

        if notes and len(notes) > MAX_NOTES_LENGTH:
            raise CowValidationError("Notes too long", field="notes")

        if cow.is_disposed or self.repository.find_disposition(cow.id) is not None:
            raise DispositionConflictError(f"Cow {cow.id} already has a disposition")

        return sale_amount

    def dispose(
        self,
        cow: Cow,
        *,
        disposition_date: date,
        disposition_type: str,
        sale_amount=ZERO,
        notes: str | None = None,
        as_of: date,
    ) -> DispositionOutcome:
        sale_amount = self._validate(
            cow,
            disposition_date=disposition_date,
            disposition_type=disposition_type,
            sale_amount=sale_amount,
            notes=notes,
            as_of=as_of,
        )
        accounts = self.config.accounts

        cleanup = self.repository.delete_lines_and_empty_entries_after(
            cow.id, disposition_date
        )

        catchup = self.catchup.reconcile(
            cow, as_of=as_of, disposition_date=disposition_date
        )

        month_amount = self._post_disposition_month(cow, disposition_date)

        accumulated = self.repository.sum_credits_for_asset(
            cow.id, accounts.accumulated_depreciation, through_date=disposition_date
        )

        price = round_to_cent(cow.purchase_price)
        salvage = round_to_cent(cow.salvage_value)
        final_book_value = round_to_cent(price - accumulated)
        over_depreciation = ZERO

        if self.config.clamp_final_book_value and final_book_value < salvage:
            over_depreciation = round_to_cent(salvage - final_book_value)
            logger.warning(
                "Cow %s: ledger accumulated depreciation %s exceeds depreciable amount; "
                "flooring book value at salvage %s (reversing %s)",
                cow.id,
                accumulated,
                salvage,
                over_depreciation,
            )
            final_book_value = salvage

        gain_loss = round_to_cent(sale_amount - final_book_value)

        entry = build_disposition_entry(
            asset_id=cow.id,
            tag_number=cow.tag_number,
            disposition_type=disposition_type,
            disposition_date=disposition_date,
            purchase_price=price,
            sale_amount=sale_amount,
            accumulated_depreciation=accumulated,
            gain_loss=gain_loss,
            over_depreciation=over_depreciation,
            accounts=accounts,
        )
        validate_entry(entry)

        journal_entry = self.repository.insert_journal_entry_with_lines(entry)
        disposition = self.repository.insert_disposition(
            cow.id,
            disposition_date=disposition_date,
            disposition_type=disposition_type,
            sale_amount=sale_amount,
            accumulated_depreciation=accumulated,
            partial_month_depreciation=month_amount,
            final_book_value=final_book_value,
            gain_loss=gain_loss,
            notes=(notes or "").strip(),
            journal_entry=journal_entry,
        )
        self.repository.update_asset_status(cow.id, Cow.STATUS_DISPOSED)

        logger.info(
            "Cow %s disposed (%s) on %s: book=%s sale=%s gain_loss=%s",
            cow.id,
            disposition_type,
            disposition_date,
            final_book_value,
            sale_amount,
            gain_loss,
        )

        return DispositionOutcome(
            disposition=disposition,
            final_book_value=final_book_value,
            gain_loss=gain_loss,
            accumulated_depreciation=accumulated,
            partial_month_depreciation=month_amount,
            cleanup=cleanup,
            catchup=catchup,
        )

    def _post_disposition_month(self, cow: Cow, disposition_date: date) -> Decimal:
        period = Period.of(disposition_date)

        existing = self.repository.find_monthly_record(cow.id, period.year, period.month)
        if existing is not None:
            # Only survives cleanup when dated on the disposition date (month end).
            return existing.amount

        accounts = self.config.accounts
        price = round_to_cent(cow.purchase_price)
        depreciable = round_to_cent(cow.purchase_price - cow.salvage_value)
        accumulated_before = self.repository.sum_credits_for_asset(
            cow.id,
            accounts.accumulated_depreciation,
            through_date=period.first_day - timedelta(days=1),
        )
        if accumulated_before >= depreciable:
            return ZERO

        full = monthly_depreciation(
            purchase_price=price,
            salvage_value=cow.salvage_value,
            freshen_date=cow.freshen_date,
            method=cow.depreciation_method,
            years=self.config.default_years,
            period=period.as_tuple(),
            current_book_value=price - accumulated_before,
        )

        is_partial = not is_last_day_of_month(disposition_date)
        amount = partial_month_depreciation(full, disposition_date) if is_partial else full
        amount = min(amount, round_to_cent(depreciable - accumulated_before))
        if amount <= 0:
            return ZERO

        accumulated_after = round_to_cent(accumulated_before + amount)
        entry = build_depreciation_entry(
            asset_id=cow.id,
            tag_number=cow.tag_number,
            amount=amount,
            entry_date=disposition_date,
            first_period=period.as_tuple(),
            last_period=period.as_tuple(),
            month_count=1,
            accounts=accounts,
            partial=is_partial,
        )
        validate_entry(entry)

        journal_entry = self.repository.insert_journal_entry_with_lines(entry)
        self.repository.insert_monthly_records(
            cow.id,
            [
                MonthlyRecordDraft(
                    year=period.year,
                    month=period.month,
                    amount=amount,
                    accumulated_after=accumulated_after,
                    book_value_after=round_to_cent(price - accumulated_after),
                    is_partial=is_partial,
                )
            ],
            journal_entry,
        )
        return amount
