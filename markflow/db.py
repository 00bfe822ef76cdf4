"""
markflow.db
===========

SQLite persistence layer for MarkFlow.

This module exposes:

* ``engine`` – a global SQLModel engine pointing at *markflow.db*
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``create_all()`` – helper to create tables at first run
* CRUD helpers converting between ORM rows and the plain dataclasses
"""

import logging
from datetime import date
from typing import List, Optional

from sqlmodel import Field, Session, SQLModel, create_engine, select

from markflow.models import Deadline, DeadlineStatus, DeadlineType, FilingBasis, Matter
from markflow.settings import DB_ECHO, DB_URL

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Engine (SQLite file lives in project root unless MARKFLOW_DB_FILE is set)
# ---------------------------------------------------------------------------
engine = create_engine(DB_URL, echo=DB_ECHO)


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal() -> Session:  # noqa: N802 (factory camel‑case for consistency with FastAPI docs)
    """Return a new Session bound to the global engine."""
    return Session(engine)


# ---------------------------------------------------------------------------
# ORM models that mirror markflow.models
# ---------------------------------------------------------------------------
class MatterDB(SQLModel, table=True):
    """SQLite‑backed representation of a :class:`markflow.models.Matter`."""

    serial_number: str = Field(primary_key=True, index=True)
    mark_text: str
    filing_date: date
    filing_basis: FilingBasis
    status_code: int
    registration_date: Optional[date] = None
    registration_number: Optional[str] = None
    office_action_date: Optional[date] = None
    office_action_extension_filed: bool = False
    noa_date: Optional[date] = None
    sou_extensions_used: int = 0
    publication_date: Optional[date] = None
    opposition_extension_days: int = 0
    client: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_matter(cls, m: Matter) -> "MatterDB":
        """Create a DB row from an in‑memory matter."""
        return cls(
            serial_number=m.serial_number,
            mark_text=m.mark_text,
            filing_date=m.filing_date,
            filing_basis=m.filing_basis,
            status_code=m.status_code,
            registration_date=m.registration_date,
            registration_number=m.registration_number,
            office_action_date=m.office_action_date,
            office_action_extension_filed=m.office_action_extension_filed,
            noa_date=m.noa_date,
            sou_extensions_used=m.sou_extensions_used,
            publication_date=m.publication_date,
            opposition_extension_days=m.opposition_extension_days,
            client=m.client,
            notes=m.notes,
        )

    def to_matter(self) -> Matter:
        """Convert the DB row back into a plain Matter."""
        return Matter(
            serial_number=self.serial_number,
            mark_text=self.mark_text,
            filing_date=self.filing_date,
            filing_basis=self.filing_basis,
            status_code=self.status_code,
            registration_date=self.registration_date,
            registration_number=self.registration_number,
            office_action_date=self.office_action_date,
            office_action_extension_filed=self.office_action_extension_filed,
            noa_date=self.noa_date,
            sou_extensions_used=self.sou_extensions_used,
            publication_date=self.publication_date,
            opposition_extension_days=self.opposition_extension_days,
            client=self.client,
            notes=self.notes,
        )


class DeadlineDB(SQLModel, table=True):
    """SQLite‑backed representation of a :class:`markflow.models.Deadline`."""

    id: Optional[int] = Field(default=None, primary_key=True)
    matter_serial: str = Field(foreign_key="matterdb.serial_number", index=True)
    deadline_type: DeadlineType
    due_date: date
    status: DeadlineStatus = DeadlineStatus.OPEN
    is_extended: bool = False
    notes: Optional[str] = None
    issue_date: Optional[date] = None

    @classmethod
    def from_deadline(cls, d: Deadline) -> "DeadlineDB":
        return cls(
            id=d.id,
            matter_serial=d.matter_serial,
            deadline_type=d.deadline_type,
            due_date=d.due_date,
            status=d.status,
            is_extended=d.is_extended,
            notes=d.notes,
            issue_date=d.issue_date,
        )

    def to_deadline(self) -> Deadline:
        return Deadline(
            id=self.id,
            matter_serial=self.matter_serial,
            deadline_type=self.deadline_type,
            due_date=self.due_date,
            status=self.status,
            is_extended=self.is_extended,
            notes=self.notes,
            issue_date=self.issue_date,
        )


# ---------------------------------------------------------------------------
# Convenience CRUD helpers
# ---------------------------------------------------------------------------
def upsert_matter(s: Session, m: Matter) -> None:
    """Insert or update a matter row."""
    s.merge(MatterDB.from_matter(m))
    s.commit()


def get_matter(s: Session, serial: str) -> Optional[Matter]:
    """Return a matter by serial number or *None* if missing."""
    row = s.get(MatterDB, serial)
    return row.to_matter() if row else None


def all_matters(s: Session) -> List[Matter]:
    rows = s.exec(select(MatterDB)).all()
    return [row.to_matter() for row in rows]


def delete_matter(s: Session, serial: str) -> bool:
    """Delete a matter and its deadlines; return False if it did not exist."""
    row = s.get(MatterDB, serial)
    if row is None:
        return False
    deadlines = s.exec(select(DeadlineDB).where(DeadlineDB.matter_serial == serial)).all()
    for d in deadlines:
        s.delete(d)
    s.delete(row)
    s.commit()
    logger.info(f"deleted matter {serial} with {len(deadlines)} deadline(s)")
    return True


def save_deadline(s: Session, d: Deadline) -> Deadline:
    """Insert or update a deadline row; returns the record with its id set."""
    row = s.merge(DeadlineDB.from_deadline(d))
    s.commit()
    s.refresh(row)
    return row.to_deadline()


def get_deadline(s: Session, deadline_id: int) -> Optional[Deadline]:
    row = s.get(DeadlineDB, deadline_id)
    return row.to_deadline() if row else None


def deadlines_for(s: Session, serial: str) -> List[Deadline]:
    rows = s.exec(
        select(DeadlineDB).where(DeadlineDB.matter_serial == serial).order_by(DeadlineDB.id)
    ).all()
    return [row.to_deadline() for row in rows]


def all_deadlines(s: Session) -> List[Deadline]:
    rows = s.exec(select(DeadlineDB).order_by(DeadlineDB.id)).all()
    return [row.to_deadline() for row in rows]


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind=None) -> None:
    """Create all tables for MatterDB and DeadlineDB on *bind* (default: global engine)."""
    SQLModel.metadata.create_all(bind or engine)


# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Quick bootstrap helper.

    $ python -m markflow.db --create        # first‑time table creation
    """
    import argparse

    parser = argparse.ArgumentParser(prog="python -m markflow.db", description="MarkFlow DB utilities")
    parser.add_argument("--create", action="store_true", help="create tables")
    args = parser.parse_args()

    if args.create:
        create_all()
        print("markflow.db schema initialised")
