# accounting/services/balance_validator.py

"""
BALANCE VALIDATOR

Last gate before anything is persisted: sum(debits) must equal sum(credits)
to the cent. A violation is an internal CalculationError, never a user error.
"""

from __future__ import annotations

from decimal import Decimal

from accounting.services.exceptions import CalculationError
from accounting.services.money import ZERO, round_to_cent

BALANCE_TOLERANCE = Decimal("0.01")


def posting_totals(postings) -> tuple[Decimal, Decimal]:
    total_debits = ZERO
    total_credits = ZERO
    for line in postings:
        total_debits += round_to_cent(line.get("debit"))
        total_credits += round_to_cent(line.get("credit"))
    return round_to_cent(total_debits), round_to_cent(total_credits)


def validate_entry(entry) -> None:
    """
    Accepts a JournalEntryDraft (anything with .postings) or a bare list of
    posting dicts ({"account", "debit", "credit"}).
    """
    postings = getattr(entry, "postings", entry)
    if not postings:
        raise CalculationError("Journal entry must contain at least one posting")

    total_debits, total_credits = posting_totals(postings)

    if abs(total_debits - total_credits) >= BALANCE_TOLERANCE:
        raise CalculationError(
            f"Journal entry not balanced: debits={total_debits} credits={total_credits}",
            asset_id=getattr(entry, "asset_id", None),
        )
