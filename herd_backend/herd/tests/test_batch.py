# herd/tests/test_batch.py

from datetime import date
from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase

from accounting.services.exceptions import LedgerStoreError
from herd.models import CowDisposition
from herd.services import engine
from herd.services.batch import run_catchup_batch, select_cows_needing_catchup
from herd.tests.helpers import make_cow

AS_OF = date(2023, 7, 1)


class CatchUpBatchTests(TestCase):
    def setUp(self):
        self.early = make_cow(tag="A1", freshen=date(2023, 1, 15))
        self.later = make_cow(tag="B1", freshen=date(2023, 3, 10))
        self.future = make_cow(tag="C1", freshen=date(2023, 8, 1))

    def test_reconciles_every_due_cow(self):
        result = run_catchup_batch(as_of=AS_OF, workers=1)

        self.assertTrue(result.ok)
        self.assertEqual(result.processed, 2)
        self.assertEqual(result.skipped, 1)
        self.assertEqual(result.periods_created, 10)
        self.assertEqual(result.entries_created, 2)

    def test_rerun_skips_up_to_date_cows(self):
        run_catchup_batch(as_of=AS_OF, workers=1)

        result = run_catchup_batch(as_of=AS_OF, workers=1)

        self.assertEqual(result.processed, 0)
        self.assertEqual(result.skipped, 3)

    def test_force_reprocesses_without_duplicating(self):
        run_catchup_batch(as_of=AS_OF, workers=1)

        result = run_catchup_batch(as_of=AS_OF, workers=1, force=True)

        self.assertEqual(result.processed, 2)
        self.assertEqual(result.periods_created, 0)
        self.assertEqual(result.entries_created, 0)

    def test_cow_filter(self):
        result = run_catchup_batch(as_of=AS_OF, cow_ids=[self.later.id], workers=1)

        self.assertEqual(result.processed, 1)
        self.assertEqual(result.periods_created, 4)
        self.assertEqual(result.skipped, 0)

    def test_disposed_cows_are_not_selected(self):
        engine.dispose_asset(
            self.early.id, date(2023, 5, 15), CowDisposition.DEATH, as_of=AS_OF
        )

        selected = list(select_cows_needing_catchup(as_of=AS_OF))

        self.assertEqual(selected, [self.later])

    def test_failures_are_collected_and_do_not_stop_the_batch(self):
        real = engine.reconcile_asset

        def flaky(cow_id, as_of, config=None):
            if cow_id == self.early.id:
                raise LedgerStoreError("database unavailable")
            return real(cow_id, as_of, config=config)

        with patch("herd.services.batch.reconcile_asset", side_effect=flaky):
            result = run_catchup_batch(as_of=AS_OF, workers=1)

        self.assertFalse(result.ok)
        self.assertEqual(result.failures, [(self.early.id, "database unavailable")])
        self.assertEqual(result.processed, 1)
        self.assertEqual(result.periods_created, 4)


class FullyDepreciatedBatchTests(TestCase):
    def test_rerun_skips_cow_depreciated_to_salvage(self):
        cow = make_cow(tag="D1", price="200.00", salvage="100.00", freshen=date(2020, 1, 1))

        first = run_catchup_batch(as_of=date(2025, 6, 1), workers=1)
        cow.refresh_from_db()

        self.assertEqual(first.processed, 1)
        self.assertEqual(cow.total_depreciation, Decimal("100.00"))
        self.assertEqual(cow.depreciated_through, date(2024, 12, 31))

        again = run_catchup_batch(as_of=date(2025, 6, 1), workers=1)

        self.assertEqual(list(select_cows_needing_catchup(as_of=date(2025, 6, 1))), [])
        self.assertEqual(again.processed, 0)
        self.assertEqual(again.skipped, 1)

    def test_force_still_revisits_it(self):
        cow = make_cow(tag="D2", price="200.00", salvage="100.00", freshen=date(2020, 1, 1))
        run_catchup_batch(as_of=date(2025, 6, 1), workers=1)

        selected = list(select_cows_needing_catchup(as_of=date(2025, 6, 1), force=True))

        self.assertEqual(selected, [cow])
