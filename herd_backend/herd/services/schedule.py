# herd/services/schedule.py

"""
SCHEDULE GENERATOR

Ordered, gap-free list of (year, month) periods eligible for FULL-month
depreciation:

- starts at the freshen month (its last day is always >= the freshen date)
- ends at the last completed month before `as_of` (the as-of month is open)
- when a disposition date is given, also ends before the disposition month
  (that month is prorated separately)
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class Period:
    year: int
    month: int

    @classmethod
    def of(cls, d: date) -> "Period":
        return cls(d.year, d.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def as_tuple(self) -> tuple[int, int]:
        return (self.year, self.month)

    def next(self) -> "Period":
        if self.month == 12:
            return Period(self.year + 1, 1)
        return Period(self.year, self.month + 1)

    def previous(self) -> "Period":
        if self.month == 1:
            return Period(self.year - 1, 12)
        return Period(self.year, self.month - 1)


def last_full_period(*, as_of: date, disposition_date: date | None = None) -> Period:
    boundary = Period.of(as_of).previous()
    if disposition_date is not None:
        boundary = min(boundary, Period.of(disposition_date).previous())
    return boundary


def generate_periods(
    *, freshen_date: date, as_of: date, disposition_date: date | None = None
) -> list[Period]:
    end = last_full_period(as_of=as_of, disposition_date=disposition_date)
    current = Period.of(freshen_date)

    periods: list[Period] = []
    while current <= end:
        periods.append(current)
        current = current.next()
    return periods
