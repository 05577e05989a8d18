# accounting/services/journal_builder.py

"""
======================================================
PATH: accounting/services/journal_builder.py
======================================================
JOURNAL ENTRY BUILDER (HERD POSTING RULES)

Pure functions: turn a business event into a JournalEntryDraft whose postings
follow the account-code table. Nothing here touches the database; drafts are
validated by balance_validator and persisted by journal_entry_service.

Posting rules:

ACQUISITION
  Dr Dairy Cows                      purchase price
  Cr Cash (purchased) | Owner's Equity (raised)

DEPRECIATION (one or many months, consolidated)
  Dr Depreciation Expense            sum of months
  Cr Accumulated Depreciation        sum of months

DISPOSITION
  Dr Cash                            sale amount (sale only, > 0)
  Dr Accumulated Depreciation        actual accumulated (> 0)
  Cr Dairy Cows                      purchase price
  Cr Depreciation Expense            over-depreciation reversed (rare, > 0)
  Cr Gain on Sale  | Dr Loss (by type)   |gain/loss| (non-zero)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from accounting.models.journal import JournalEntry
from accounting.services.account_codes import AccountCodes
from accounting.services.money import ZERO, round_to_cent

ACQUISITION_PURCHASED = "purchased"
ACQUISITION_RAISED = "raised"

DISPOSITION_SALE = "sale"


@dataclass
class JournalEntryDraft:
    entry_type: str
    entry_date: date
    description: str
    reference_type: str | None = None
    reference_id: str | None = None
    asset_id: int | None = None
    postings: list[dict] = field(default_factory=list)

    def debit(self, account: str, amount, accounts: AccountCodes) -> None:
        self.postings.append(
            {
                "account": account,
                "name": accounts.name_for(account),
                "debit": round_to_cent(amount),
                "credit": ZERO,
            }
        )

    def credit(self, account: str, amount, accounts: AccountCodes) -> None:
        self.postings.append(
            {
                "account": account,
                "name": accounts.name_for(account),
                "debit": ZERO,
                "credit": round_to_cent(amount),
            }
        )

    @property
    def total_amount(self) -> Decimal:
        return round_to_cent(sum((p["debit"] for p in self.postings), ZERO))


def period_label(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def build_acquisition_entry(
    *,
    asset_id: int,
    tag_number: str,
    purchase_price,
    acquisition_type: str,
    entry_date: date,
    accounts: AccountCodes,
) -> JournalEntryDraft:
    if acquisition_type == ACQUISITION_RAISED:
        credit_account = accounts.owner_equity
        verb = "Raised"
    else:
        credit_account = accounts.cash
        verb = "Purchased"

    draft = JournalEntryDraft(
        entry_type=JournalEntry.ACQUISITION,
        entry_date=entry_date,
        description=f"{verb} cow #{tag_number}",
        reference_type="ACQ",
        reference_id=str(asset_id),
        asset_id=asset_id,
    )
    draft.debit(accounts.dairy_cows, purchase_price, accounts)
    draft.credit(credit_account, purchase_price, accounts)
    return draft


def build_depreciation_entry(
    *,
    asset_id: int,
    tag_number: str,
    amount,
    entry_date: date,
    first_period: tuple[int, int],
    last_period: tuple[int, int],
    month_count: int,
    accounts: AccountCodes,
    partial: bool = False,
) -> JournalEntryDraft:
    first = period_label(*first_period)
    last = period_label(*last_period)

    if partial:
        description = (
            f"Partial month depreciation - cow #{tag_number} - "
            f"{first} (through {entry_date.isoformat()})"
        )
        reference_id = f"{asset_id}:{first}:partial"
    elif month_count == 1:
        description = f"Monthly depreciation - cow #{tag_number} - {first}"
        reference_id = f"{asset_id}:{first}:{last}"
    else:
        description = (
            f"Catch-up depreciation - cow #{tag_number} - "
            f"{first} to {last} ({month_count} months)"
        )
        reference_id = f"{asset_id}:{first}:{last}"

    draft = JournalEntryDraft(
        entry_type=JournalEntry.DEPRECIATION,
        entry_date=entry_date,
        description=description,
        reference_type="DEPR",
        reference_id=reference_id,
        asset_id=asset_id,
    )
    draft.debit(accounts.depreciation_expense, amount, accounts)
    draft.credit(accounts.accumulated_depreciation, amount, accounts)
    return draft


def build_disposition_entry(
    *,
    asset_id: int,
    tag_number: str,
    disposition_type: str,
    disposition_date: date,
    purchase_price,
    sale_amount,
    accumulated_depreciation,
    gain_loss,
    accounts: AccountCodes,
    over_depreciation=ZERO,
) -> JournalEntryDraft:
    sale_amount = round_to_cent(sale_amount)
    accumulated_depreciation = round_to_cent(accumulated_depreciation)
    gain_loss = round_to_cent(gain_loss)
    over_depreciation = round_to_cent(over_depreciation)

    draft = JournalEntryDraft(
        entry_type=JournalEntry.DISPOSITION,
        entry_date=disposition_date,
        description=f"Disposition ({disposition_type}) - cow #{tag_number}",
        reference_type="DISP",
        reference_id=str(asset_id),
        asset_id=asset_id,
    )

    if disposition_type == DISPOSITION_SALE and sale_amount > 0:
        draft.debit(accounts.cash, sale_amount, accounts)

    if accumulated_depreciation > 0:
        draft.debit(accounts.accumulated_depreciation, accumulated_depreciation, accounts)

    draft.credit(accounts.dairy_cows, purchase_price, accounts)

    if over_depreciation > 0:
        draft.credit(accounts.depreciation_expense, over_depreciation, accounts)

    # Written for any non-zero gain/loss, including exactly 0.01. Skipping a
    # one-cent difference would leave the entry unbalanced.
    if gain_loss > 0:
        draft.credit(accounts.gain_on_sale, gain_loss, accounts)
    elif gain_loss < 0:
        draft.debit(accounts.loss_account_for(disposition_type), -gain_loss, accounts)

    return draft
