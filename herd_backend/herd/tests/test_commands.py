# herd/tests/test_commands.py

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from herd.models import Cow, MonthlyDepreciation
from herd.tests.helpers import make_cow


def _run(*args):
    out, err = StringIO(), StringIO()
    call_command(*args, stdout=out, stderr=err)
    return out.getvalue(), err.getvalue()


class RunDepreciationCatchupCommandTests(TestCase):
    def setUp(self):
        self.cow = make_cow()

    def test_posts_missing_months(self):
        out, _ = _run("run_depreciation_catchup", "--as-of", "2023-07-01", "--workers", "1")

        self.assertIn("Periods created: 6", out)
        self.assertIn("[OK]", out)
        self.assertEqual(MonthlyDepreciation.objects.filter(cow=self.cow).count(), 6)

    def test_dry_run_writes_nothing(self):
        out, _ = _run("run_depreciation_catchup", "--as-of", "2023-07-01", "--dry-run")

        self.assertIn(f"would reconcile cow={self.cow.id}", out)
        self.assertFalse(MonthlyDepreciation.objects.exists())

    def test_invalid_date_exits_non_zero(self):
        with self.assertRaises(SystemExit):
            _run("run_depreciation_catchup", "--as-of", "07/01/2023")

    def test_cow_filter(self):
        other = make_cow(tag="1002")

        _run("run_depreciation_catchup", "--as-of", "2023-07-01", "--cow", str(other.id), "--workers", "1")

        self.assertFalse(MonthlyDepreciation.objects.filter(cow=self.cow).exists())
        self.assertEqual(MonthlyDepreciation.objects.filter(cow=other).count(), 6)


class ValidateHerdLedgerCommandTests(TestCase):
    def setUp(self):
        self.cow = make_cow()
        _run("run_depreciation_catchup", "--as-of", "2024-01-01", "--workers", "1")

    def test_clean_ledger_passes(self):
        out, _ = _run("validate_herd_ledger", "--strict")

        self.assertIn("[OK] entry_balance", out)
        self.assertIn("VALIDATION PASSED", out)

    def test_drift_fails_in_strict_mode(self):
        Cow.objects.filter(pk=self.cow.id).update(current_value=Decimal("1.00"))

        with self.assertRaises(SystemExit):
            _run("validate_herd_ledger", "--strict")

    def test_drift_is_reported_without_strict(self):
        Cow.objects.filter(pk=self.cow.id).update(total_depreciation=Decimal("0.00"))

        _, err = _run("validate_herd_ledger")

        self.assertIn("[FAIL] cache_drift", err)
