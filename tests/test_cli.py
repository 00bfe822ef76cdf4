"""
tests/test_cli.py
=================

Unit tests for the markflow command-line front end.
"""

import json
from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from markflow import db
from markflow.cli import main
from markflow.models import Matter


def _run(capsys, *argv):
    assert main(list(argv)) == 0
    return json.loads(capsys.readouterr().out)


def test_office_action(capsys):
    out = _run(capsys, "--as-of", "2023-02-01", "office-action", "2023-01-10", "--basis", "1(b)")
    assert out["deadline"] == "2023-04-10"
    assert out["is_extendable"] is True
    assert out["max_deadline"] == "2023-07-10"


def test_office_action_extension_filed(capsys):
    out = _run(capsys, "--as-of", "2023-02-01", "office-action", "2023-01-10",
               "--basis", "1(b)", "--extension-filed")
    assert out["deadline"] == "2023-07-10"
    assert out["is_extendable"] is False


def test_maintenance(capsys):
    out = _run(capsys, "maintenance", "2020-01-15")
    assert out["section8"]["window_end"] == "2026-01-15"
    assert out["section9"]["due_date"] == "2030-01-15"


def test_statement_of_use(capsys):
    out = _run(capsys, "--as-of", "2023-01-01", "statement-of-use", "2023-01-01", "--extensions", "2")
    assert out["extensions_remaining"] == 3
    assert out["max_deadline"] == "2026-01-02"


def test_opposition(capsys):
    out = _run(capsys, "--as-of", "2025-03-04", "opposition", "2025-03-04", "--extension-days", "60")
    assert out == {"deadline": "2025-06-02", "days_remaining": 90}


def test_holidays_and_urgency(capsys):
    assert len(_run(capsys, "holidays", "2024")) == 11
    assert _run(capsys, "urgency", "31") == "normal"
    assert _run(capsys, "urgency", "3", "--status", "completed") == "completed"


def test_invalid_date_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["maintenance", "2020-02-30"])
    assert exc.value.code == 2


def test_docket_on_fresh_database_reports_not_found(monkeypatch, capsys):
    fresh = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    monkeypatch.setattr(db, "engine", fresh)
    assert main(["docket", "97000000"]) == 1
    assert capsys.readouterr().out == ""


def test_docket_lists_maintenance_for_stored_matter(monkeypatch, capsys):
    fresh = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    monkeypatch.setattr(db, "engine", fresh)
    db.create_all()
    with db.SessionLocal() as session:
        db.upsert_matter(session, Matter("97123456", "ACME ROCKET", date(2018, 6, 1), "1(a)", 800,
                                         registration_date=date(2020, 1, 15)))
    out = _run(capsys, "--as-of", "2025-03-03", "docket", "97123456")
    assert [e["deadline_type"] for e in out] == ["section_8_15", "section_9"]
