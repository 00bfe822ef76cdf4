"""
tests/test_docket.py
====================

Unit tests for the per-matter docket helpers in markflow.docket
"""

from datetime import date

import pytest

from markflow.docket import (
    NotComputable,
    calculate_all_deadlines,
    compute_matter_deadlines,
    due_date_of,
    to_deadline,
)
from markflow.law_engine import OfficeActionDeadline, Section8Window
from markflow.models import Deadline, DeadlineStatus, DeadlineType, FilingBasis, Matter, Urgency


def test_registered_matter_gets_synthesized_maintenance(registered_matter, as_of):
    entries = calculate_all_deadlines(registered_matter, [], as_of)
    assert [e.deadline_type for e in entries] == [DeadlineType.SECTION_8_15, DeadlineType.SECTION_9]
    s8, s9 = entries
    assert s8.window_start == date(2025, 1, 15)
    assert s8.due_date == date(2026, 1, 15)
    assert s8.grace_period_end == date(2026, 7, 15)
    assert s9.due_date == date(2030, 1, 15)
    assert all(e.synthesized for e in entries)
    assert s8.urgency is Urgency.NORMAL


def test_stored_deadlines_follow_and_are_annotated(registered_matter, as_of):
    stored = [
        Deadline("97123456", DeadlineType.TTAB_DEADLINE, date(2025, 3, 7), notes="Answer due", id=11),
        Deadline("97123456", DeadlineType.OPPOSITION, date(2025, 2, 1), status=DeadlineStatus.COMPLETED, id=12),
    ]
    entries = calculate_all_deadlines(registered_matter, stored, as_of)
    assert len(entries) == 4
    ttab, opp = entries[2], entries[3]
    assert ttab.deadline_id == 11
    assert ttab.urgency is Urgency.URGENT
    assert ttab.days_remaining == 4
    assert ttab.formatted == "Mar 7, 2025 (4 days)"
    assert ttab.notes == "Answer due"
    assert not ttab.synthesized
    assert opp.urgency is Urgency.COMPLETED
    assert opp.days_remaining < 0


def test_stored_maintenance_record_supersedes_synthesized(registered_matter, as_of):
    stored = [Deadline("97123456", DeadlineType.SECTION_8_15, date(2026, 1, 15),
                       status=DeadlineStatus.COMPLETED, id=3)]
    entries = calculate_all_deadlines(registered_matter, stored, as_of)
    types = [e.deadline_type for e in entries]
    assert types.count(DeadlineType.SECTION_8_15) == 1
    assert types == [DeadlineType.SECTION_9, DeadlineType.SECTION_8_15]
    assert entries[1].status is DeadlineStatus.COMPLETED


def test_unregistered_matter_only_lists_stored(office_action_matter, as_of):
    stored = [Deadline("97234567", DeadlineType.OFFICE_ACTION, date(2025, 4, 10))]
    entries = calculate_all_deadlines(office_action_matter, stored, as_of)
    assert [e.deadline_type for e in entries] == [DeadlineType.OFFICE_ACTION]


def test_office_action_derived_when_pending(office_action_matter):
    derived = compute_matter_deadlines(office_action_matter, as_of=date(2023, 2, 1))
    oa = derived[DeadlineType.OFFICE_ACTION]
    assert isinstance(oa, OfficeActionDeadline)
    assert oa.deadline == date(2023, 4, 10)
    assert oa.is_extendable


def test_missing_office_action_date_is_not_computable(as_of):
    m = Matter("97789012", "SOLAR PEAK", date(2024, 6, 1), "1(a)", 610)
    result = compute_matter_deadlines(m, as_of)[DeadlineType.OFFICE_ACTION]
    assert isinstance(result, NotComputable)
    assert result.missing_field == "office_action_date"
    with pytest.raises(ValueError):
        due_date_of(result)


def test_registered_without_registration_date_is_not_computable(as_of):
    m = Matter("97000010", "NO DATE", date(2019, 1, 1), "1(a)", 800, registration_number="5000000")
    derived = compute_matter_deadlines(m, as_of)
    assert isinstance(derived[DeadlineType.SECTION_8_15], NotComputable)
    assert isinstance(derived[DeadlineType.SECTION_9], NotComputable)


def test_published_without_publication_date_is_not_computable(as_of):
    m = Matter("97000011", "NO PUB", date(2024, 1, 1), "1(a)", 730)
    assert isinstance(compute_matter_deadlines(m, as_of)[DeadlineType.OPPOSITION], NotComputable)


def test_intent_to_use_with_noa_gets_statement_of_use(as_of):
    m = Matter("97678901", "ACME THUNDERBOLT", date(2022, 1, 1), FilingBasis.INTENT_TO_USE, 250,
               noa_date=date(2023, 1, 1), sou_extensions_used=2)
    derived = compute_matter_deadlines(m, as_of)
    assert set(derived) == {DeadlineType.STATEMENT_OF_USE}
    assert derived[DeadlineType.STATEMENT_OF_USE].deadline == date(2024, 7, 1)


def test_registered_matter_derives_maintenance(registered_matter, as_of):
    derived = compute_matter_deadlines(registered_matter, as_of)
    assert set(derived) == {DeadlineType.SECTION_8_15, DeadlineType.SECTION_9}
    assert isinstance(derived[DeadlineType.SECTION_8_15], Section8Window)


def test_to_deadline_from_office_action(office_action_matter):
    result = compute_matter_deadlines(office_action_matter, date(2023, 2, 1))[DeadlineType.OFFICE_ACTION]
    d = to_deadline(office_action_matter, DeadlineType.OFFICE_ACTION, result, notes="Non-final")
    assert d.matter_serial == "97234567"
    assert d.due_date == date(2023, 4, 10)
    assert d.issue_date == date(2023, 1, 10)
    assert d.is_extended is False
    assert d.status is DeadlineStatus.OPEN
