# herd/tests/test_asset_lock.py

import threading
from datetime import date
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase

from herd.repositories.ledger import DjangoLedgerRepository
from herd.services import asset_lock as lock_module
from herd.services.asset_lock import active_lock_count, asset_lock
from herd.services.engine import reconcile_asset
from herd.tests.helpers import make_cow

WAIT = 2.0


class AssetLockTests(SimpleTestCase):
    """
    GUARANTEES:
    - two threads working on the same cow run one after the other
    - different cows never wait on each other
    - the lock is re-entrant and its registry entry goes away on release
    """

    def _hold(self, asset_id, entered, release):
        def run():
            with asset_lock(asset_id):
                entered.set()
                release.wait(WAIT)

        thread = threading.Thread(target=run)
        thread.start()
        return thread

    def test_same_cow_waits_for_the_holder(self):
        holder_in, release = threading.Event(), threading.Event()
        second_in = threading.Event()
        holder = self._hold(41, holder_in, release)
        self.assertTrue(holder_in.wait(WAIT))

        def second():
            with asset_lock(41):
                second_in.set()

        waiter = threading.Thread(target=second)
        waiter.start()

        self.assertFalse(second_in.wait(0.2))
        release.set()
        self.assertTrue(second_in.wait(WAIT))

        holder.join(WAIT)
        waiter.join(WAIT)

    def test_other_cows_do_not_wait(self):
        holder_in, release = threading.Event(), threading.Event()
        holder = self._hold(42, holder_in, release)
        self.assertTrue(holder_in.wait(WAIT))

        other_in = threading.Event()

        def other():
            with asset_lock(43):
                other_in.set()

        thread = threading.Thread(target=other)
        thread.start()
        try:
            self.assertTrue(other_in.wait(WAIT))
        finally:
            release.set()
            holder.join(WAIT)
            thread.join(WAIT)

    def test_reentrant_and_released(self):
        before = active_lock_count()

        with asset_lock(44):
            with asset_lock("44"):
                self.assertEqual(active_lock_count(), before + 1)

        self.assertEqual(active_lock_count(), before)

    def test_released_when_the_body_raises(self):
        before = active_lock_count()

        with self.assertRaises(RuntimeError):
            with asset_lock(45):
                raise RuntimeError("boom")

        self.assertEqual(active_lock_count(), before)


class EngineLockingTests(TestCase):
    def test_reconcile_locks_the_cow_row_under_the_asset_lock(self):
        cow = make_cow()
        seen = []
        real_get_asset = DjangoLedgerRepository.get_asset

        def spy(repository, asset_id, *, for_update=False):
            seen.append((asset_id, for_update, asset_id in lock_module._locks))
            return real_get_asset(repository, asset_id, for_update=for_update)

        with patch.object(DjangoLedgerRepository, "get_asset", spy):
            reconcile_asset(cow.id, date(2023, 7, 1))

        self.assertIn((cow.id, True, True), seen)
        self.assertNotIn(cow.id, lock_module._locks)
