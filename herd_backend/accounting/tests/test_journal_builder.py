# accounting/tests/test_journal_builder.py

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from accounting.services.account_codes import AccountCodes
from accounting.services.balance_validator import posting_totals, validate_entry
from accounting.services.exceptions import CalculationError
from accounting.services.journal_builder import (
    build_acquisition_entry,
    build_depreciation_entry,
    build_disposition_entry,
)

ACCOUNTS = AccountCodes()


def _lines(draft):
    """(account, debit, credit) tuples for easy comparison."""
    return [(p["account"], p["debit"], p["credit"]) for p in draft.postings]


class AcquisitionEntryTests(SimpleTestCase):
    def test_purchased_cow_credits_cash(self):
        draft = build_acquisition_entry(
            asset_id=7,
            tag_number="1001",
            purchase_price=Decimal("2500.00"),
            acquisition_type="purchased",
            entry_date=date(2023, 1, 15),
            accounts=ACCOUNTS,
        )

        self.assertEqual(draft.reference_type, "ACQ")
        self.assertEqual(draft.reference_id, "7")
        self.assertEqual(
            _lines(draft),
            [
                ("1500", Decimal("2500.00"), Decimal("0.00")),
                ("1000", Decimal("0.00"), Decimal("2500.00")),
            ],
        )
        validate_entry(draft)

    def test_raised_cow_credits_owner_equity(self):
        draft = build_acquisition_entry(
            asset_id=7,
            tag_number="1001",
            purchase_price=Decimal("900.00"),
            acquisition_type="raised",
            entry_date=date(2023, 1, 15),
            accounts=ACCOUNTS,
        )

        self.assertEqual(draft.postings[1]["account"], "3000")
        self.assertEqual(draft.postings[1]["name"], "Owner's Equity")


class DepreciationEntryTests(SimpleTestCase):
    def test_consolidated_entry_reference_spans_periods(self):
        draft = build_depreciation_entry(
            asset_id=7,
            tag_number="1001",
            amount=Decimal("933.24"),
            entry_date=date(2025, 4, 30),
            first_period=(2023, 1),
            last_period=(2025, 4),
            month_count=28,
            accounts=ACCOUNTS,
        )

        self.assertEqual(draft.reference_id, "7:2023-01:2025-04")
        self.assertIn("28 months", draft.description)
        self.assertEqual(
            _lines(draft),
            [
                ("6100", Decimal("933.24"), Decimal("0.00")),
                ("1500.1", Decimal("0.00"), Decimal("933.24")),
            ],
        )

    def test_partial_entry_has_its_own_reference(self):
        draft = build_depreciation_entry(
            asset_id=7,
            tag_number="1001",
            amount=Decimal("16.13"),
            entry_date=date(2025, 5, 15),
            first_period=(2025, 5),
            last_period=(2025, 5),
            month_count=1,
            accounts=ACCOUNTS,
            partial=True,
        )

        self.assertEqual(draft.reference_id, "7:2025-05:partial")
        self.assertEqual(draft.total_amount, Decimal("16.13"))


class DispositionEntryTests(SimpleTestCase):
    def _build(self, **overrides):
        kwargs = {
            "asset_id": 7,
            "tag_number": "1001",
            "disposition_type": "sale",
            "disposition_date": date(2025, 5, 15),
            "purchase_price": Decimal("2500.00"),
            "sale_amount": Decimal("1800.00"),
            "accumulated_depreciation": Decimal("500.00"),
            "gain_loss": Decimal("-200.00"),
            "accounts": ACCOUNTS,
        }
        kwargs.update(overrides)
        return build_disposition_entry(**kwargs)

    def test_sale_at_loss(self):
        draft = self._build()

        self.assertEqual(
            _lines(draft),
            [
                ("1000", Decimal("1800.00"), Decimal("0.00")),
                ("1500.1", Decimal("500.00"), Decimal("0.00")),
                ("1500", Decimal("0.00"), Decimal("2500.00")),
                ("9002", Decimal("200.00"), Decimal("0.00")),
            ],
        )
        validate_entry(draft)

    def test_sale_at_gain_credits_gain_account(self):
        draft = self._build(sale_amount=Decimal("2100.00"), gain_loss=Decimal("100.00"))

        self.assertIn(("8000", Decimal("0.00"), Decimal("100.00")), _lines(draft))
        validate_entry(draft)

    def test_one_cent_gain_keeps_the_entry_exactly_balanced(self):
        draft = self._build(sale_amount=Decimal("2000.01"), gain_loss=Decimal("0.01"))

        self.assertIn(("8000", Decimal("0.00"), Decimal("0.01")), _lines(draft))
        debits, credits = posting_totals(draft.postings)
        self.assertEqual(debits, credits)

    def test_sale_at_book_value_has_no_gain_or_loss_line(self):
        draft = self._build(sale_amount=Decimal("2000.00"), gain_loss=Decimal("0.00"))

        accounts = {p["account"] for p in draft.postings}
        self.assertEqual(accounts, {"1000", "1500.1", "1500"})

    def test_death_has_no_cash_line(self):
        draft = self._build(
            disposition_type="death",
            sale_amount=Decimal("0.00"),
            accumulated_depreciation=Decimal("2200.00"),
            gain_loss=Decimal("-300.00"),
        )

        accounts = [p["account"] for p in draft.postings]
        self.assertNotIn("1000", accounts)
        self.assertIn(("9001", Decimal("300.00"), Decimal("0.00")), _lines(draft))
        validate_entry(draft)

    def test_culled_loss_account(self):
        draft = self._build(
            disposition_type="culled",
            sale_amount=Decimal("0.00"),
            gain_loss=Decimal("-2000.00"),
        )

        self.assertIn(("9003", Decimal("2000.00"), Decimal("0.00")), _lines(draft))

    def test_over_depreciation_is_reversed_to_expense(self):
        draft = self._build(
            disposition_type="death",
            sale_amount=Decimal("0.00"),
            accumulated_depreciation=Decimal("2000.20"),
            gain_loss=Decimal("-500.00"),
            over_depreciation=Decimal("0.20"),
        )

        self.assertIn(("6100", Decimal("0.00"), Decimal("0.20")), _lines(draft))
        debits, credits = posting_totals(draft.postings)
        self.assertEqual(debits, credits)


class BalanceValidatorTests(SimpleTestCase):
    def test_one_cent_difference_is_rejected(self):
        postings = [
            {"account": "6100", "debit": Decimal("100.00"), "credit": 0},
            {"account": "1500.1", "debit": 0, "credit": Decimal("100.01")},
        ]
        with self.assertRaises(CalculationError):
            validate_entry(postings)

    def test_empty_entry_is_rejected(self):
        with self.assertRaises(CalculationError):
            validate_entry([])
