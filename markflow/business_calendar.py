"""
markflow.business_calendar
==========================

US federal holiday calendar and business‑day arithmetic.

Holidays follow the OPM list.  Fixed‑date holidays are *observed*: a
Saturday holiday is observed the Friday before, a Sunday holiday the
Monday after.  Nth‑weekday holidays never land on a weekend.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from functools import lru_cache
from typing import FrozenSet

MONDAY, THURSDAY = 0, 3


def nth_weekday_of_month(year: int, month: int, weekday: int, nth: int) -> date:
    """Return the *nth* occurrence of *weekday* (0 = Monday) in the month."""
    offset = (weekday - date(year, month, 1).weekday()) % 7
    return date(year, month, 1 + offset + 7 * (nth - 1))


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """Return the last occurrence of *weekday* in the month, counted back from its last day."""
    last_day = date(year, month, calendar.monthrange(year, month)[1])
    offset = (last_day.weekday() - weekday) % 7
    return last_day - timedelta(days=offset)


def observed_date(holiday: date) -> date:
    if holiday.weekday() == 5:
        return holiday - timedelta(days=1)
    if holiday.weekday() == 6:
        return holiday + timedelta(days=1)
    return holiday


@lru_cache(maxsize=64)
def federal_holidays(year: int) -> FrozenSet[date]:
    """
    The 11 observed US federal holidays for *year*.

    When January 1 is a Saturday its observed date is December 31 of the
    previous year (e.g. 2021‑12‑31 for 2022), so that one member of the
    set sits outside *year*.  :pyfunc:`is_federal_holiday` only consults a
    date's own year, so such a Dec 31 is not treated as a holiday.
    """
    return frozenset({
        observed_date(date(year, 1, 1)),              # New Year's Day
        nth_weekday_of_month(year, 1, MONDAY, 3),      # Martin Luther King Jr. Day
        nth_weekday_of_month(year, 2, MONDAY, 3),      # Washington's Birthday
        last_weekday_of_month(year, 5, MONDAY),        # Memorial Day
        observed_date(date(year, 6, 19)),              # Juneteenth
        observed_date(date(year, 7, 4)),               # Independence Day
        nth_weekday_of_month(year, 9, MONDAY, 1),      # Labor Day
        nth_weekday_of_month(year, 10, MONDAY, 2),     # Columbus Day
        observed_date(date(year, 11, 11)),             # Veterans Day
        nth_weekday_of_month(year, 11, THURSDAY, 4),   # Thanksgiving Day
        observed_date(date(year, 12, 25)),             # Christmas Day
    })


def is_federal_holiday(d: date) -> bool:
    """True iff *d* is in the holiday set of its own year."""
    return d in federal_holidays(d.year)


def is_business_day(d: date) -> bool:
    """Not a Saturday/Sunday and not an observed federal holiday."""
    return d.weekday() < 5 and not is_federal_holiday(d)


def next_business_day(d: date) -> date:
    """Return *d* if it is a business day, else the first business day after it."""
    while not is_business_day(d):
        d += timedelta(days=1)
    return d
