"""
tests/test_lifecycle.py
=======================

Unit tests for markflow.lifecycle
"""

from datetime import date

import pytest

from markflow.lifecycle import advance_status, complete, record_extension
from markflow.models import Deadline, DeadlineStatus, DeadlineType, Matter


def _oa():
    return Deadline("97234567", DeadlineType.OFFICE_ACTION, date(2023, 4, 10))


def _matter(basis="1(b)", office_action_date=date(2023, 1, 10), **extra):
    return Matter(
        serial_number="97234567",
        mark_text="TECHVENTURE AI",
        filing_date=date(2022, 1, 5),
        filing_basis=basis,
        status_code=600,
        office_action_date=office_action_date,
        **extra,
    )


def test_good_transition():
    """OPEN → COMPLETED should succeed."""
    d = _oa()
    advance_status(d, DeadlineStatus.COMPLETED)
    assert d.status is DeadlineStatus.COMPLETED


def test_illegal_transition_raises():
    """COMPLETED is terminal."""
    d = _oa()
    complete(d)
    with pytest.raises(ValueError):
        complete(d)
    with pytest.raises(ValueError):
        advance_status(d, DeadlineStatus.OPEN)


def test_office_action_extension_moves_to_max_deadline_once():
    d, m = _oa(), _matter()
    record_extension(d, m)
    assert d.is_extended
    assert d.due_date == date(2023, 7, 10)
    assert m.office_action_extension_filed
    with pytest.raises(ValueError):
        record_extension(d, m)


@pytest.mark.parametrize("basis, issued", [
    ("66(a)", date(2023, 1, 10)),   # Madrid Protocol
    ("1(a)", date(2022, 6, 1)),     # legacy six-month rule
    ("1(b)", date(2022, 12, 3)),    # issued on the rule-change date
])
def test_non_extendable_office_actions_rejected(basis, issued):
    d = Deadline("97234567", DeadlineType.OFFICE_ACTION, date(2023, 7, 10))
    m = _matter(basis, issued)
    with pytest.raises(ValueError):
        record_extension(d, m)
    assert d.due_date == date(2023, 7, 10)
    assert not d.is_extended
    assert not m.office_action_extension_filed


def test_office_action_extension_needs_issue_date():
    with pytest.raises(ValueError):
        record_extension(_oa(), _matter(office_action_date=None))


def test_statement_of_use_extensions_capped_at_five():
    d = Deadline("97234567", DeadlineType.STATEMENT_OF_USE, date(2023, 7, 3))
    m = _matter(office_action_date=None, noa_date=date(2023, 1, 1))
    record_extension(d, m)
    assert d.due_date == date(2024, 1, 2)   # Jan 1 2024 is New Year's Day
    for _ in range(4):
        record_extension(d, m)
    assert m.sou_extensions_used == 5
    assert d.due_date == date(2026, 1, 2)   # the 36-month ceiling, rolled
    with pytest.raises(ValueError):
        record_extension(d, m)
    assert d.due_date == date(2026, 1, 2)


def test_opposition_extension_accumulates_days():
    d = Deadline("97234567", DeadlineType.OPPOSITION, date(2025, 4, 3))
    m = _matter(office_action_date=None, publication_date=date(2025, 3, 4))
    with pytest.raises(ValueError):
        record_extension(d, m)
    record_extension(d, m, 30)
    assert d.due_date == date(2025, 5, 5)   # Sat May 3 rolls to Monday
    record_extension(d, m, 30)
    assert d.due_date == date(2025, 6, 2)
    assert m.opposition_extension_days == 60


def test_extension_rejects_deadline_of_another_matter():
    d = Deadline("97999999", DeadlineType.OFFICE_ACTION, date(2023, 4, 10))
    with pytest.raises(ValueError):
        record_extension(d, _matter())


def test_maintenance_deadline_not_extendable():
    d = Deadline("97234567", DeadlineType.SECTION_9, date(2030, 1, 15))
    with pytest.raises(ValueError):
        record_extension(d, _matter())


def test_completed_deadline_not_extendable():
    d = _oa()
    complete(d)
    with pytest.raises(ValueError):
        record_extension(d, _matter())
