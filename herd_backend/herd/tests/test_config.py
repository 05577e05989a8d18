# herd/tests/test_config.py

from decimal import Decimal

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase

from herd.config import build_config


class BuildConfigTests(SimpleTestCase):
    def test_defaults(self):
        config = build_config(None)

        self.assertEqual(config.default_years, 5)
        self.assertEqual(config.salvage_percentage, Decimal("10"))
        self.assertEqual(config.fiscal_year_start_month, 1)
        self.assertTrue(config.clamp_final_book_value)
        self.assertEqual(config.accounts.dairy_cows, "1500")

    def test_settings_values_are_applied(self):
        config = build_config(
            {
                "DEFAULT_YEARS": "7",
                "SALVAGE_PERCENTAGE": "12.5",
                "FISCAL_YEAR_START_MONTH": 7,
                "ACCOUNT_CODES": {"cash": "1010"},
            }
        )

        self.assertEqual(config.default_years, 7)
        self.assertEqual(config.salvage_percentage, Decimal("12.5"))
        self.assertEqual(config.accounts.cash, "1010")

    def test_invalid_values_fail_fast(self):
        bad = [
            {"DEFAULT_YEARS": 0},
            {"SALVAGE_PERCENTAGE": "75"},
            {"SALVAGE_PERCENTAGE": "ten"},
            {"FISCAL_YEAR_START_MONTH": 13},
            {"ACCOUNT_CODES": {"bank": "1100"}},
        ]
        for raw in bad:
            with self.subTest(raw=raw), self.assertRaises(ImproperlyConfigured):
                build_config(raw)
