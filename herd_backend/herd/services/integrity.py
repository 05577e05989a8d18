# herd/services/integrity.py

"""
LEDGER INTEGRITY AUDIT

Read-only checks over the herd ledger, used by `validate_herd_ledger`:

- entry_balance           every journal entry has debits == credits
- cache_drift             cow cached totals match ledger-derived values
- lines_after_disposition no cow line is dated after its disposition date
- over_depreciation       accumulated depreciation <= price - salvage
- record_ledger_mismatch  monthly rows sum to the depreciation credits
"""

from __future__ import annotations

from dataclasses import dataclass, field

from django.db.models import DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.money import ZERO, round_to_cent
from herd.config import DepreciationConfig, get_depreciation_config
from herd.models import Cow, CowDisposition, MonthlyDepreciation
from herd.repositories.ledger import DjangoLedgerRepository

CHECKS = (
    "entry_balance",
    "cache_drift",
    "lines_after_disposition",
    "over_depreciation",
    "record_ledger_mismatch",
)

_money = DecimalField(max_digits=14, decimal_places=2)


@dataclass(frozen=True)
class IntegrityIssue:
    check: str
    message: str
    asset_id: int | None = None
    journal_entry_id: int | None = None


@dataclass
class IntegrityReport:
    issues: list[IntegrityIssue] = field(default_factory=list)
    cows_checked: int = 0
    entries_checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues

    def by_check(self, check: str) -> list[IntegrityIssue]:
        return [i for i in self.issues if i.check == check]


def check_entry_balances() -> tuple[int, list[IntegrityIssue]]:
    zero = Value(ZERO, output_field=_money)
    qs = JournalEntry.objects.annotate(
        debits=Coalesce(
            Sum(
                "ledger_entries__amount",
                filter=Q(ledger_entries__entry_type=LedgerEntry.DEBIT),
            ),
            zero,
        ),
        credits=Coalesce(
            Sum(
                "ledger_entries__amount",
                filter=Q(ledger_entries__entry_type=LedgerEntry.CREDIT),
            ),
            zero,
        ),
    )

    issues = []
    checked = 0
    for entry in qs.order_by("id").iterator():
        checked += 1
        if entry.debits != entry.credits:
            issues.append(
                IntegrityIssue(
                    check="entry_balance",
                    message=f"debits={entry.debits} credits={entry.credits}",
                    journal_entry_id=entry.id,
                )
            )
        elif entry.debits == 0:
            issues.append(
                IntegrityIssue(
                    check="entry_balance",
                    message="journal entry has no lines",
                    journal_entry_id=entry.id,
                )
            )
    return checked, issues


def check_lines_after_disposition() -> list[IntegrityIssue]:
    issues = []
    for disposition in CowDisposition.objects.all().order_by("cow_id"):
        late = (
            LedgerEntry.objects.filter(
                asset_id=disposition.cow_id,
                journal_entry__entry_date__gt=disposition.disposition_date,
            )
            .order_by()
            .values_list("journal_entry_id", flat=True)
            .distinct()
        )
        for entry_id in late:
            issues.append(
                IntegrityIssue(
                    check="lines_after_disposition",
                    message=f"entry dated after disposition on {disposition.disposition_date}",
                    asset_id=disposition.cow_id,
                    journal_entry_id=entry_id,
                )
            )
    return issues


def check_cows(config: DepreciationConfig) -> tuple[int, list[IntegrityIssue]]:
    repository = DjangoLedgerRepository()
    accum_code = config.accounts.accumulated_depreciation
    issues = []
    checked = 0

    for cow in Cow.objects.all().order_by("id").iterator():
        checked += 1
        snapshot = repository.ledger_snapshot(cow.id, accum_code)

        if (
            cow.total_depreciation != snapshot.total_depreciation
            or cow.current_value != snapshot.current_value
        ):
            issues.append(
                IntegrityIssue(
                    check="cache_drift",
                    message=(
                        f"cached total={cow.total_depreciation} value={cow.current_value}; "
                        f"ledger total={snapshot.total_depreciation} value={snapshot.current_value}"
                    ),
                    asset_id=cow.id,
                )
            )

        credits = repository.sum_credits_for_asset(cow.id, accum_code)
        depreciable = round_to_cent(cow.purchase_price - cow.salvage_value)
        if credits > depreciable:
            issues.append(
                IntegrityIssue(
                    check="over_depreciation",
                    message=f"accumulated {credits} exceeds depreciable {depreciable}",
                    asset_id=cow.id,
                )
            )

        recorded = MonthlyDepreciation.objects.filter(cow_id=cow.id).aggregate(
            total=Sum("amount")
        )["total"]
        recorded = round_to_cent(recorded or ZERO)
        if recorded != credits:
            issues.append(
                IntegrityIssue(
                    check="record_ledger_mismatch",
                    message=f"monthly rows={recorded} ledger credits={credits}",
                    asset_id=cow.id,
                )
            )

    return checked, issues


def run_integrity_checks(*, config: DepreciationConfig | None = None) -> IntegrityReport:
    config = config or get_depreciation_config()
    report = IntegrityReport()

    report.entries_checked, issues = check_entry_balances()
    report.issues.extend(issues)

    report.issues.extend(check_lines_after_disposition())

    report.cows_checked, issues = check_cows(config)
    report.issues.extend(issues)

    return report


__all__ = [
    "CHECKS",
    "IntegrityIssue",
    "IntegrityReport",
    "run_integrity_checks",
]
