"""
markflow.law_engine
===================

Deadline rules for trademark prosecution and maintenance.

Every calculator is a pure function of its inputs plus ``as_of``, the
calendar date days‑remaining is measured from.  ``as_of`` defaults to
:func:`markflow.clock.today` at the call boundary and nowhere else.

All derived dates are rolled forward to the next business day with
:func:`markflow.business_calendar.next_business_day`.  Month arithmetic
clamps to the end of shorter months (Aug 31 + 6 months = Feb 28/29).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from . import clock
from .business_calendar import next_business_day
from .models import DeadlineStatus, FilingBasis, Urgency
from .status_codes import is_madrid_protocol

logger = logging.getLogger(__name__)

# Office actions issued after this date get a 3‑month period (extendable once).
THREE_MONTH_RULE_EFFECTIVE_DATE = date(2022, 12, 3)

SOU_MAX_EXTENSIONS = 5
SOU_MAX_MONTHS = 36
OPPOSITION_PERIOD_DAYS = 30
URGENT_DAYS = 7
WARNING_DAYS = 30

DateLike = Union[date, str]


# ---------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class OfficeActionDeadline:
    deadline: date
    is_extendable: bool
    max_deadline: date
    days_remaining: int
    is_madrid: bool


@dataclass(frozen=True)
class Section8Window:
    """Combined Section 8 & 15 declaration window (years 5–6) plus grace."""
    window_start: date
    window_end: date
    grace_period_end: date


@dataclass(frozen=True)
class Section9Renewal:
    due_date: date
    grace_period_end: date


@dataclass(frozen=True)
class MaintenanceDeadlines:
    section8: Section8Window
    section9: Section9Renewal


@dataclass(frozen=True)
class StatementOfUseDeadline:
    deadline: date
    extensions_remaining: int
    max_deadline: date
    days_remaining: int


@dataclass(frozen=True)
class OppositionDeadline:
    deadline: date
    days_remaining: int


@dataclass(frozen=True)
class FormattedDeadline:
    formatted: str
    urgency: Urgency
    days_remaining: int


# ---------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------
def as_date(value: DateLike) -> date:
    """
    Coerce *value* to a calendar date.

    Accepts ``date`` (``datetime`` is truncated to its date) or an ISO
    ``YYYY-MM-DD`` string.  Anything else raises :class:`ValueError`.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            raise ValueError(f"invalid date {value!r}") from None
    raise ValueError(f"expected a date, got {type(value).__name__}")


def add_months(d: date, months: int) -> date:
    return d + relativedelta(months=months)


def add_years(d: date, years: int) -> date:
    return d + relativedelta(years=years)


def days_until(due: date, as_of: date) -> int:
    """Signed whole days from *as_of* to *due* (negative once overdue)."""
    return (due - as_of).days


def days_remaining(due: date, as_of: date) -> int:
    """Whole days left before *due*, floored at zero."""
    return max(0, days_until(due, as_of))


def _as_of(as_of: Optional[DateLike]) -> date:
    return as_date(clock.resolve(as_of))


# ---------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------
def calculate_office_action_deadline(
    issue_date: DateLike,
    filing_basis: Union[FilingBasis, str, None],
    extension_filed: bool = False,
    as_of: Optional[DateLike] = None,
) -> OfficeActionDeadline:
    """
    Response deadline for an office action mailed on *issue_date*.

    * Madrid Protocol (``66(a)``): 6 months, never extendable, whatever the
      issue date.
    * Issued after 2022‑12‑03: 3 months, one extension to 6 months.
    * Issued on or before 2022‑12‑03: 6 months, no extension.
    """
    issue = as_date(issue_date)
    today = _as_of(as_of)

    if is_madrid_protocol(filing_basis):
        deadline = next_business_day(add_months(issue, 6))
        logger.debug(f"office action {issue}: Madrid 6-month rule -> {deadline}")
        return OfficeActionDeadline(
            deadline=deadline,
            is_extendable=False,
            max_deadline=deadline,
            days_remaining=days_remaining(deadline, today),
            is_madrid=True,
        )

    if issue > THREE_MONTH_RULE_EFFECTIVE_DATE:
        extended = add_months(issue, 6)
        current = extended if extension_filed else add_months(issue, 3)
        deadline = next_business_day(current)
        logger.debug(f"office action {issue}: 3-month rule (extension_filed={extension_filed}) -> {deadline}")
        return OfficeActionDeadline(
            deadline=deadline,
            is_extendable=not extension_filed,
            max_deadline=next_business_day(extended),
            days_remaining=days_remaining(deadline, today),
            is_madrid=False,
        )

    deadline = next_business_day(add_months(issue, 6))
    logger.debug(f"office action {issue}: legacy 6-month rule -> {deadline}")
    return OfficeActionDeadline(
        deadline=deadline,
        is_extendable=False,
        max_deadline=deadline,
        days_remaining=days_remaining(deadline, today),
        is_madrid=False,
    )


def calculate_maintenance_deadlines(registration_date: DateLike) -> MaintenanceDeadlines:
    """
    Post‑registration windows.

    Section 8 & 15 may be filed between years 5 and 6 after registration,
    then within a 6‑month grace period.  Section 9 renewal falls due at
    year 10, again with a 6‑month grace period.
    """
    reg = as_date(registration_date)

    s8_start = add_years(reg, 5)
    s8_end = add_years(reg, 6)
    s9_due = add_years(reg, 10)

    return MaintenanceDeadlines(
        section8=Section8Window(
            window_start=next_business_day(s8_start),
            window_end=next_business_day(s8_end),
            grace_period_end=next_business_day(add_months(s8_end, 6)),
        ),
        section9=Section9Renewal(
            due_date=next_business_day(s9_due),
            grace_period_end=next_business_day(add_months(s9_due, 6)),
        ),
    )


def calculate_statement_of_use_deadline(
    noa_date: DateLike,
    extensions_used: int = 0,
    as_of: Optional[DateLike] = None,
) -> StatementOfUseDeadline:
    """
    Statement‑of‑use deadline on the intent‑to‑use track.

    6 months from the Notice of Allowance plus 6 months per extension
    filed, up to five extensions (36 months in total).  *extensions_used*
    is clamped into ``0..5``.
    """
    noa = as_date(noa_date)
    today = _as_of(as_of)
    used = min(max(int(extensions_used), 0), SOU_MAX_EXTENSIONS)

    deadline = next_business_day(add_months(noa, 6 + 6 * used))
    return StatementOfUseDeadline(
        deadline=deadline,
        extensions_remaining=SOU_MAX_EXTENSIONS - used,
        max_deadline=next_business_day(add_months(noa, SOU_MAX_MONTHS)),
        days_remaining=days_remaining(deadline, today),
    )


def calculate_opposition_deadline(
    publication_date: DateLike,
    extension_days: int = 0,
    as_of: Optional[DateLike] = None,
) -> OppositionDeadline:
    """30 days from publication plus any granted extension days (negative counts as 0)."""
    pub = as_date(publication_date)
    today = _as_of(as_of)
    extra = max(int(extension_days), 0)

    deadline = next_business_day(pub + relativedelta(days=OPPOSITION_PERIOD_DAYS + extra))
    return OppositionDeadline(deadline=deadline, days_remaining=days_remaining(deadline, today))


# ---------------------------------------------------------------------
# Urgency
# ---------------------------------------------------------------------
def deadline_urgency(days: int, status: Union[DeadlineStatus, str] = DeadlineStatus.OPEN) -> Urgency:
    """
    Urgency bucket for a deadline *days* away.

    Completed deadlines are always ``COMPLETED``; otherwise <= 7 days
    (including overdue) is ``URGENT`` and <= 30 is ``WARNING``.
    """
    if DeadlineStatus(status) is DeadlineStatus.COMPLETED:
        return Urgency.COMPLETED
    if days <= URGENT_DAYS:
        return Urgency.URGENT
    if days <= WARNING_DAYS:
        return Urgency.WARNING
    return Urgency.NORMAL


def format_deadline_with_urgency(
    due: DateLike,
    status: Union[DeadlineStatus, str] = DeadlineStatus.OPEN,
    as_of: Optional[DateLike] = None,
) -> FormattedDeadline:
    """
    Display text such as ``"Mar 3, 2025 (2 days)"`` with its urgency.

    ``days_remaining`` here is signed so overdue items can be reported.
    """
    due = as_date(due)
    status = DeadlineStatus(status)
    days = days_until(due, _as_of(as_of))

    formatted = f"{due:%b} {due.day}, {due.year}"
    if status is DeadlineStatus.OPEN:
        if days < 0:
            formatted += f" ({abs(days)} days overdue)"
        elif days == 0:
            formatted += " (Due today!)"
        elif days == 1:
            formatted += " (Tomorrow)"
        elif days <= URGENT_DAYS:
            formatted += f" ({days} days)"

    return FormattedDeadline(formatted=formatted, urgency=deadline_urgency(days, status), days_remaining=days)
