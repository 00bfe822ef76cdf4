"""
tests/test_portfolio.py
=======================

Unit tests for markflow.portfolio.MatterPortfolio
"""

from datetime import date

import pytest

from markflow.models import Deadline, DeadlineStatus, DeadlineType, Matter
from markflow.portfolio import MatterPortfolio

AS_OF = date(2025, 3, 3)


def _demo_portfolio():
    pm = MatterPortfolio()
    pm.add(Matter("97123456", "ACME ROCKET", date(2018, 6, 1), "1(a)", 800,
                  registration_date=date(2020, 1, 15), registration_number="6789012"))
    pm.add(Matter("97234567", "TECHVENTURE AI", date(2022, 9, 1), "1(b)", 600,
                  office_action_date=date(2025, 1, 10)))
    pm.add(Matter("97345678", "GREEN EARTH ORGANIC", date(2023, 1, 1), "1(a)", 740))
    pm.add_deadline(Deadline("97234567", DeadlineType.OFFICE_ACTION, date(2025, 4, 10)))
    pm.add_deadline(Deadline("97345678", DeadlineType.TTAB_DEADLINE, date(2025, 3, 20)))
    pm.add_deadline(Deadline("97345678", DeadlineType.OPPOSITION, date(2025, 2, 20),
                             status=DeadlineStatus.COMPLETED))
    pm.add_deadline(Deadline("97123456", DeadlineType.SECTION_8, date(2025, 2, 28)))
    return pm


def test_add_and_get_by_serial():
    pm = MatterPortfolio()
    m = Matter("97000001", "FOO", date(2024, 4, 1), "1(a)", 220)
    pm.add(m)
    assert pm.get("97000001") is m
    with pytest.raises(KeyError):
        pm.get("nope")


def test_len_and_iter():
    pm = _demo_portfolio()
    assert len(pm) == 3
    assert {m.mark_text for m in pm} == {"ACME ROCKET", "TECHVENTURE AI", "GREEN EARTH ORGANIC"}


def test_deadline_ids_assigned_and_listed_per_matter():
    pm = _demo_portfolio()
    ids = [d.id for d in pm.all_deadlines()]
    assert ids == [1, 2, 3, 4]
    assert [d.deadline_type for d in pm.deadlines_for("97345678")] == [
        DeadlineType.TTAB_DEADLINE, DeadlineType.OPPOSITION]


def test_deadline_for_unknown_matter_rejected():
    with pytest.raises(KeyError):
        MatterPortfolio().add_deadline(Deadline("missing", DeadlineType.OPPOSITION, date(2025, 1, 2)))


def test_remove_cascades_to_deadlines():
    pm = _demo_portfolio()
    pm.remove("97345678")
    assert len(pm) == 2
    assert pm.deadlines_for("97345678") == []
    assert len(pm.all_deadlines()) == 2


def test_find_by_category_and_search():
    pm = _demo_portfolio()
    assert [m.serial_number for m in pm.find_by_category("ttab")] == ["97345678"]
    assert [m.serial_number for m in pm.search("rocket")] == ["97123456"]
    assert [m.serial_number for m in pm.search("6789")] == ["97123456"]
    assert pm.search("a") == []


def test_upcoming_deadlines_sorted_and_include_overdue():
    pm = _demo_portfolio()
    upcoming = pm.upcoming_deadlines(AS_OF, within_days=30)
    assert [d.due_date for d in upcoming] == [date(2025, 2, 28), date(2025, 3, 20)]


def test_kpi_summary():
    pm = _demo_portfolio()
    assert pm.kpi_summary(AS_OF) == {
        "total_marks": 3,
        "urgent_deadlines": 2,
        "registered_marks": 1,
        "pending_applications": 1,
        "active_ttab_matters": 1,
    }


def test_docket_combines_synthesized_and_stored():
    pm = _demo_portfolio()
    entries = pm.docket("97123456", AS_OF)
    assert [e.deadline_type for e in entries] == [
        DeadlineType.SECTION_8_15, DeadlineType.SECTION_9, DeadlineType.SECTION_8]
