# herd/tests/test_api.py

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from accounting.models.journal import JournalEntry
from accounting.services.exceptions import CalculationError, LedgerStoreError
from herd.models import Cow
from herd.tests.helpers import make_cow

User = get_user_model()

COWS_URL = "/api/herd/cows/"


class HerdApiTests(TestCase):
    """
    GUARANTEES:
    - cows are registered, reconciled and disposed through the service layer
    - service failures map to 400 / 404 / 409 / 422 / 503 with {"detail", "code"}
    """

    def setUp(self):
        self.user = User.objects.create_superuser(
            username="herd_admin",
            email="herd_admin@example.com",
            password="password123",
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def _register(self, **overrides):
        payload = {
            "tag_number": "1001",
            "freshen_date": "2023-01-15",
            "purchase_price": "2500.00",
            "salvage_value": "500.00",
        }
        payload.update(overrides)
        return self.client.post(COWS_URL, payload, format="json")

    def test_register_cow(self):
        res = self._register()

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["tag_number"], "1001")
        self.assertEqual(res.data["current_value"], "2500.00")
        self.assertEqual(res.data["depreciation_method"], Cow.STRAIGHT_LINE)
        self.assertTrue(JournalEntry.objects.filter(reference=f"ACQ:{res.data['id']}").exists())

    def test_register_invalid_salvage(self):
        res = self._register(salvage_value="2500.00")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "validation_error")
        self.assertEqual(res.data["field"], "salvage_value")
        self.assertFalse(Cow.objects.exists())

    def test_register_future_freshen_date(self):
        tomorrow = timezone.localdate() + timedelta(days=1)

        res = self._register(freshen_date=tomorrow.isoformat())

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "validation_error")
        self.assertEqual(res.data["field"], "freshen_date")
        self.assertFalse(Cow.objects.exists())
        self.assertFalse(JournalEntry.objects.exists())

    def test_list_and_filter(self):
        make_cow(tag="1001")
        make_cow(tag="1002")

        res = self.client.get(COWS_URL, {"status": Cow.STATUS_ACTIVE})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)

    def test_reconcile(self):
        cow = make_cow()

        res = self.client.post(f"{COWS_URL}{cow.id}/reconcile/", {"as_of": "2023-07-01"}, format="json")

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["periods_created"], 6)
        self.assertEqual(res.data["accumulated_depreciation"], "199.98")

        detail = self.client.get(f"{COWS_URL}{cow.id}/")
        self.assertEqual(detail.data["total_depreciation"], "199.98")
        self.assertEqual(detail.data["depreciated_through"], "2023-06-30")

    def test_dispose_then_conflict(self):
        cow = make_cow()
        url = f"{COWS_URL}{cow.id}/dispose/"
        payload = {
            "disposition_date": "2025-05-15",
            "disposition_type": "sale",
            "sale_amount": "1500.00",
            "notes": "Sold at auction",
        }

        res = self.client.post(url, payload, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["final_book_value"], "1550.63")
        self.assertEqual(res.data["gain_loss"], "-50.63")

        again = self.client.post(url, payload, format="json")
        self.assertEqual(again.status_code, 409)
        self.assertEqual(again.data["code"], "disposition_exists")

        detail = self.client.get(f"{COWS_URL}{cow.id}/")
        self.assertEqual(detail.data["status"], Cow.STATUS_DISPOSED)
        self.assertEqual(detail.data["disposition"]["notes"], "Sold at auction")

    def test_dispose_in_the_future_is_rejected(self):
        cow = make_cow()
        tomorrow = timezone.localdate() + timedelta(days=1)

        res = self.client.post(
            f"{COWS_URL}{cow.id}/dispose/",
            {"disposition_date": tomorrow.isoformat(), "disposition_type": "death"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["field"], "disposition_date")

    def test_unknown_cow_is_404(self):
        res = self.client.post(f"{COWS_URL}999999/reconcile/", {}, format="json")
        self.assertEqual(res.status_code, 404)

    def test_store_error_is_503(self):
        cow = make_cow()

        with patch(
            "herd.api.views.reconcile_asset",
            side_effect=LedgerStoreError("connection reset"),
        ):
            res = self.client.post(f"{COWS_URL}{cow.id}/reconcile/", {}, format="json")

        self.assertEqual(res.status_code, 503)
        self.assertEqual(res.data["code"], "store_unavailable")

    def test_calculation_error_is_422(self):
        cow = make_cow()

        with patch(
            "herd.api.views.reconcile_asset",
            side_effect=CalculationError("Journal entry not balanced"),
        ):
            res = self.client.post(f"{COWS_URL}{cow.id}/reconcile/", {}, format="json")

        self.assertEqual(res.status_code, 422)
        self.assertEqual(res.data["code"], "calculation_error")

    def test_depreciation_summary_and_records(self):
        cow = make_cow()
        self.client.post(f"{COWS_URL}{cow.id}/reconcile/", {"as_of": "2025-01-01"}, format="json")

        summary = self.client.get(f"{COWS_URL}{cow.id}/depreciation-summary/")
        self.assertEqual(summary.status_code, 200)
        self.assertEqual([y["fiscal_year"] for y in summary.data["years"]], [2023, 2024])
        self.assertEqual(summary.data["total_depreciation"], "799.92")

        records = self.client.get(f"{COWS_URL}{cow.id}/depreciation-records/")
        self.assertEqual(records.status_code, 200)
        self.assertEqual(len(records.data), 24)

    def test_anonymous_is_rejected(self):
        res = APIClient().get(COWS_URL)
        self.assertIn(res.status_code, (401, 403))


class JournalEntryApiTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_superuser(
            username="auditor",
            email="auditor@example.com",
            password="password123",
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

        self.cow = make_cow()
        self.other = make_cow(tag="1002")
        self.client.post(
            f"{COWS_URL}{self.cow.id}/reconcile/", {"as_of": "2023-07-01"}, format="json"
        )

    def test_filter_by_cow_and_type(self):
        res = self.client.get(
            "/api/accounting/journal-entries/",
            {"cow": self.cow.id, "entry_type": JournalEntry.DEPRECIATION},
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        entry = res.data["results"][0]
        self.assertEqual(entry["reference"], f"DEPR:{self.cow.id}:2023-01:2023-06")
        self.assertEqual(len(entry["lines"]), 2)

    def test_date_range(self):
        res = self.client.get(
            "/api/accounting/journal-entries/",
            {"date_from": "2023-06-01", "date_to": "2023-06-30"},
        )

        self.assertEqual(res.data["count"], 1)

    def test_journal_is_read_only(self):
        res = self.client.post(
            "/api/accounting/journal-entries/", {"description": "x"}, format="json"
        )
        self.assertEqual(res.status_code, 405)

    def test_ledger_lines_by_account(self):
        res = self.client.get(
            "/api/accounting/ledger-entries/",
            {"cow": self.cow.id, "account_code": "1500.1"},
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["amount"], "199.98")

    def test_permission_required(self):
        plain = User.objects.create_user(username="plain", password="password123")
        client = APIClient()
        client.force_authenticate(user=plain)

        res = client.get("/api/accounting/journal-entries/")
        self.assertEqual(res.status_code, 403)
