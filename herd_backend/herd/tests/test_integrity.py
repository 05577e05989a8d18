# herd/tests/test_integrity.py

from datetime import date
from decimal import Decimal

from django.test import TestCase

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.journal_entry_service import create_journal_entry
from herd.models import Cow, CowDisposition
from herd.services.engine import dispose_asset, reconcile_asset
from herd.services.integrity import run_integrity_checks
from herd.tests.helpers import make_cow


class IntegrityCheckTests(TestCase):
    def setUp(self):
        self.cow = make_cow()
        reconcile_asset(self.cow.id, date(2024, 1, 1))

    def test_clean_ledger_passes(self):
        other = make_cow(tag="7001")
        dispose_asset(other.id, date(2025, 5, 15), CowDisposition.SALE, Decimal("1200.00"))

        report = run_integrity_checks()

        self.assertTrue(report.ok, report.issues)
        self.assertEqual(report.cows_checked, 2)
        self.assertGreater(report.entries_checked, 0)

    def test_cache_drift_is_reported(self):
        Cow.objects.filter(pk=self.cow.id).update(total_depreciation=Decimal("1.00"))

        report = run_integrity_checks()

        issues = report.by_check("cache_drift")
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].asset_id, self.cow.id)

    def test_unbalanced_entry_is_reported(self):
        entry = JournalEntry.objects.create(
            description="Broken import",
            entry_type=JournalEntry.DEPRECIATION,
            entry_date=date(2024, 1, 31),
            total_amount=Decimal("10.00"),
        )
        LedgerEntry.objects.create(
            journal_entry=entry,
            account_code="6100",
            entry_type=LedgerEntry.DEBIT,
            amount=Decimal("10.00"),
        )

        report = run_integrity_checks()

        issues = report.by_check("entry_balance")
        self.assertEqual([i.journal_entry_id for i in issues], [entry.id])

    def test_lines_after_disposition_are_reported(self):
        dispose_asset(self.cow.id, date(2025, 5, 15), CowDisposition.DEATH)
        late = create_journal_entry(
            description="Late posting",
            postings=[
                {"account": "1500", "debit": Decimal("5.00"), "credit": 0},
                {"account": "1000", "debit": 0, "credit": Decimal("5.00")},
            ],
            entry_type=JournalEntry.ACQUISITION,
            entry_date=date(2025, 7, 31),
            asset_id=self.cow.id,
        )

        report = run_integrity_checks()

        issues = report.by_check("lines_after_disposition")
        self.assertEqual([i.journal_entry_id for i in issues], [late.id])
