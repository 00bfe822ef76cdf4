"""
markflow.portfolio_db
=====================

SQLite‑backed implementation of the MatterPortfolio public surface.

This adapter wraps the CRUD helpers in :pymod:`markflow.db` so that any
code expecting the in‑memory MatterPortfolio can switch to a persistent
store without changing its API calls.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterator, List, Optional

from sqlmodel import Session

from markflow import db
from markflow.docket import DocketEntry, calculate_all_deadlines
from markflow.models import Deadline, Matter
from markflow.portfolio import kpi_summary, search_matters, upcoming_deadlines
from markflow.status_codes import status_category

logger = logging.getLogger(__name__)


class DBMatterPortfolio:
    """
    Drop‑in replacement backed by SQLite.

    Methods mirror the in‑memory MatterPortfolio:
    * add(matter) / get(serial) / remove(serial)
    * add_deadline / get_deadline / update_deadline / deadlines_for
    * docket / upcoming_deadlines / kpi_summary / search
    * iteration / len()
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session = session or db.SessionLocal()

    # ------------------------------------------------------------------ matters
    def add(self, matter: Matter) -> None:
        db.upsert_matter(self._session, matter)
        logger.info(f"stored matter {matter.serial_number} ({matter.mark_text})")

    def get(self, serial: str) -> Matter:
        matter = db.get_matter(self._session, serial)
        if matter is None:
            raise KeyError(serial)
        return matter

    def remove(self, serial: str) -> None:
        if not db.delete_matter(self._session, serial):
            raise KeyError(serial)

    def find_by_category(self, category: str) -> List[Matter]:
        return [m for m in self if status_category(m.status_code) == category]

    def search(self, query: str) -> List[Matter]:
        return search_matters(self, query)

    # ---------------------------------------------------------------- deadlines
    def add_deadline(self, deadline: Deadline) -> Deadline:
        if db.get_matter(self._session, deadline.matter_serial) is None:
            raise KeyError(deadline.matter_serial)
        saved = db.save_deadline(self._session, deadline)
        deadline.id = saved.id
        return deadline

    def get_deadline(self, deadline_id: int) -> Deadline:
        deadline = db.get_deadline(self._session, deadline_id)
        if deadline is None:
            raise KeyError(deadline_id)
        return deadline

    def update_deadline(self, deadline: Deadline) -> None:
        if deadline.id is None or db.get_deadline(self._session, deadline.id) is None:
            raise KeyError(deadline.id)
        db.save_deadline(self._session, deadline)

    def deadlines_for(self, serial: str) -> List[Deadline]:
        return db.deadlines_for(self._session, serial)

    def all_deadlines(self) -> List[Deadline]:
        return db.all_deadlines(self._session)

    def docket(self, serial: str, as_of: Optional[date] = None) -> List[DocketEntry]:
        return calculate_all_deadlines(self.get(serial), self.deadlines_for(serial), as_of)

    def upcoming_deadlines(self, as_of: Optional[date] = None, within_days: Optional[int] = None) -> List[Deadline]:
        return upcoming_deadlines(self.all_deadlines(), as_of, within_days)

    def kpi_summary(self, as_of: Optional[date] = None) -> Dict[str, int]:
        return kpi_summary(list(self), self.all_deadlines(), as_of)

    # ------------------------------------------------------ dunder helpers
    def __iter__(self) -> Iterator[Matter]:
        yield from db.all_matters(self._session)

    def __len__(self) -> int:
        return len(db.all_matters(self._session))

    # ----------------------------------------------------- context manager
    def __enter__(self) -> "DBMatterPortfolio":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._session.close()
