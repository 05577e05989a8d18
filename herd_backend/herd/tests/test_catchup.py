# herd/tests/test_catchup.py

from datetime import date
from decimal import Decimal

from django.test import TestCase

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from herd.models import Cow, MonthlyDepreciation
from herd.services.engine import reconcile_asset
from herd.services.exceptions import CowNotFoundError
from herd.tests.helpers import ledger_total, make_cow


class ReconcileAssetTests(TestCase):
    """
    GUARANTEES:
    - every missing month gets exactly one MonthlyDepreciation row
    - missing months of one run share ONE consolidated journal entry
    - re-running with the same as-of creates nothing
    - cached totals always equal ledger sums
    """

    def setUp(self):
        self.cow = make_cow()

    def test_catch_up_consolidates_missing_months(self):
        result = reconcile_asset(self.cow.id, date(2023, 7, 1))

        self.assertEqual(result.periods_created, 6)
        self.assertEqual(result.entries_created, 1)
        self.assertEqual(result.accumulated_depreciation, Decimal("199.98"))
        self.assertEqual(result.current_value, Decimal("2300.02"))

        entry = JournalEntry.objects.get(reference=f"DEPR:{self.cow.id}:2023-01:2023-06")
        self.assertEqual(entry.entry_date, date(2023, 6, 30))
        self.assertEqual(entry.total_amount, Decimal("199.98"))

        rows = MonthlyDepreciation.objects.filter(cow=self.cow).order_by("year", "month")
        self.assertEqual(rows.count(), 6)
        self.assertTrue(all(r.amount == Decimal("33.33") for r in rows))
        self.assertEqual(rows.last().accumulated_after, Decimal("199.98"))
        self.assertEqual(rows.last().book_value_after, Decimal("2300.02"))

    def test_second_run_with_same_as_of_is_a_no_op(self):
        reconcile_asset(self.cow.id, date(2023, 7, 1))
        entries_before = JournalEntry.objects.count()

        result = reconcile_asset(self.cow.id, date(2023, 7, 1))

        self.assertEqual(result.periods_created, 0)
        self.assertEqual(result.entries_created, 0)
        self.assertEqual(JournalEntry.objects.count(), entries_before)

    def test_later_run_only_adds_new_months(self):
        reconcile_asset(self.cow.id, date(2023, 7, 1))
        result = reconcile_asset(self.cow.id, date(2023, 10, 15))

        self.assertEqual(result.periods_created, 3)
        self.assertEqual(result.accumulated_depreciation, Decimal("299.97"))
        self.assertTrue(
            JournalEntry.objects.filter(
                reference=f"DEPR:{self.cow.id}:2023-07:2023-09"
            ).exists()
        )

    def test_as_of_before_first_full_month_creates_nothing(self):
        result = reconcile_asset(self.cow.id, date(2023, 1, 20))

        self.assertEqual(result.periods_created, 0)
        self.assertFalse(MonthlyDepreciation.objects.exists())

    def test_cache_matches_ledger(self):
        reconcile_asset(self.cow.id, date(2024, 3, 1))
        self.cow.refresh_from_db()

        credits = ledger_total(self.cow.id, "1500.1", LedgerEntry.CREDIT)
        debits = ledger_total(self.cow.id, "6100", LedgerEntry.DEBIT)

        self.assertEqual(self.cow.total_depreciation, credits)
        self.assertEqual(credits, debits)
        self.assertEqual(self.cow.current_value, self.cow.purchase_price - credits)
        self.assertEqual(self.cow.depreciated_through, date(2024, 2, 29))

    def test_unknown_cow(self):
        with self.assertRaises(CowNotFoundError):
            reconcile_asset(999999, date(2024, 1, 1))


class FullyDepreciatedTests(TestCase):
    def test_small_cow_is_clamped_at_salvage(self):
        cow = make_cow(tag="3003", price="200.00", salvage="100.00", freshen=date(2020, 1, 1))

        result = reconcile_asset(cow.id, date(2026, 1, 1))

        self.assertEqual(result.periods_created, 60)
        self.assertTrue(result.fully_depreciated)
        self.assertEqual(result.accumulated_depreciation, Decimal("100.00"))
        self.assertEqual(result.current_value, Decimal("100.00"))

        last = MonthlyDepreciation.objects.filter(cow=cow).order_by("-year", "-month").first()
        self.assertEqual((last.year, last.month), (2024, 12))
        self.assertEqual(last.amount, Decimal("1.47"))

        again = reconcile_asset(cow.id, date(2027, 1, 1))
        self.assertEqual(again.periods_created, 0)
        self.assertEqual(again.accumulated_depreciation, Decimal("100.00"))

    def test_straight_line_ends_with_the_useful_life(self):
        cow = make_cow(tag="3005")

        result = reconcile_asset(cow.id, date(2028, 6, 1))

        rows = MonthlyDepreciation.objects.filter(cow=cow).order_by("year", "month")
        self.assertEqual(result.periods_created, 60)
        self.assertTrue(result.fully_depreciated)
        self.assertEqual(rows.count(), 60)
        self.assertEqual(result.accumulated_depreciation, Decimal("2000.00"))
        self.assertEqual((rows.last().year, rows.last().month), (2027, 12))
        self.assertEqual(rows.last().amount, Decimal("33.53"))
        self.assertFalse(rows.filter(year=2028).exists())

    def test_accumulated_is_monotonic_and_bounded(self):
        cow = make_cow(tag="3004", freshen=date(2019, 1, 1))
        reconcile_asset(cow.id, date(2026, 1, 1))

        previous = Decimal("0.00")
        for row in MonthlyDepreciation.objects.filter(cow=cow).order_by("year", "month"):
            self.assertGreaterEqual(row.accumulated_after, previous)
            previous = row.accumulated_after
        self.assertEqual(previous, Decimal("2000.00"))


class OtherMethodTests(TestCase):
    def test_declining_balance_uses_ledger_book_value(self):
        cow = make_cow(tag="4001", freshen=date(2023, 1, 1), method=Cow.DECLINING_BALANCE)

        result = reconcile_asset(cow.id, date(2023, 3, 1))

        self.assertEqual(result.accumulated_depreciation, Decimal("163.89"))

    def test_sum_of_years(self):
        cow = make_cow(tag="4002", freshen=date(2023, 1, 1), method=Cow.SUM_OF_YEARS)

        result = reconcile_asset(cow.id, date(2023, 3, 1))

        self.assertEqual(result.accumulated_depreciation, Decimal("130.05"))
