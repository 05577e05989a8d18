# herd/tests/test_schedule.py

from datetime import date

from django.test import SimpleTestCase

from herd.services.schedule import Period, generate_periods, last_full_period


class PeriodTests(SimpleTestCase):
    def test_navigation_wraps_years(self):
        self.assertEqual(Period(2024, 12).next(), Period(2025, 1))
        self.assertEqual(Period(2025, 1).previous(), Period(2024, 12))

    def test_last_day(self):
        self.assertEqual(Period(2024, 2).last_day, date(2024, 2, 29))
        self.assertEqual(Period(2025, 4).label, "2025-04")


class GeneratePeriodsTests(SimpleTestCase):
    def test_as_of_month_is_excluded(self):
        periods = generate_periods(freshen_date=date(2023, 1, 15), as_of=date(2023, 4, 10))
        self.assertEqual(periods, [Period(2023, 1), Period(2023, 2), Period(2023, 3)])

    def test_nothing_before_first_full_month(self):
        self.assertEqual(
            generate_periods(freshen_date=date(2023, 1, 15), as_of=date(2023, 1, 31)), []
        )
        self.assertEqual(
            generate_periods(freshen_date=date(2023, 1, 15), as_of=date(2022, 6, 1)), []
        )

    def test_disposition_month_is_excluded(self):
        periods = generate_periods(
            freshen_date=date(2023, 1, 15),
            as_of=date(2025, 12, 1),
            disposition_date=date(2025, 5, 15),
        )
        self.assertEqual(len(periods), 28)
        self.assertEqual(periods[-1], Period(2025, 4))

    def test_last_full_period_takes_earliest_boundary(self):
        self.assertEqual(
            last_full_period(as_of=date(2025, 3, 2), disposition_date=date(2025, 8, 1)),
            Period(2025, 2),
        )
