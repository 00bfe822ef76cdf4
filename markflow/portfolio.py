"""
markflow.portfolio
==================

An in‑memory registry that stores :class:`markflow.models.Matter` objects
keyed by serial number, together with the deadlines docketed against them.

This module is intentionally simple (only the standard library) so that
it can be unit‑tested without external dependencies or a database.
"""

from __future__ import annotations

import itertools
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

from . import clock
from .docket import DocketEntry, calculate_all_deadlines
from .models import Deadline, DeadlineStatus, Matter
from .status_codes import status_category
from .settings import settings

logger = logging.getLogger(__name__)


class MatterPortfolio:
    """
    Dictionary‑backed registry of matters and deadlines.

    Example
    -------
    >>> from datetime import date
    >>> from markflow.models import Matter
    >>> pm = MatterPortfolio()
    >>> pm.add(Matter("97123456", "ACME ROCKET", date(2023, 1, 5), "1(a)", 220))
    >>> [m.serial_number for m in pm]
    ['97123456']
    """

    def __init__(self) -> None:
        self._matters: Dict[str, Matter] = {}
        self._deadlines: Dict[int, Deadline] = {}
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Matters
    # ------------------------------------------------------------------
    def add(self, matter: Matter) -> None:
        """Insert or overwrite a matter."""
        self._matters[matter.serial_number] = matter
        logger.info(f"stored matter {matter.serial_number} ({matter.mark_text})")

    def get(self, serial: str) -> Matter:
        """Retrieve by serial number (raise KeyError if not present)."""
        return self._matters[serial]

    def remove(self, serial: str) -> None:
        """Delete a matter and every deadline docketed against it."""
        del self._matters[serial]
        doomed = [k for k, d in self._deadlines.items() if d.matter_serial == serial]
        for k in doomed:
            del self._deadlines[k]
        logger.info(f"removed matter {serial} and {len(doomed)} deadline(s)")

    def find_by_category(self, category: str) -> List[Matter]:
        """Return all matters whose status code falls in *category*."""
        return [m for m in self._matters.values() if status_category(m.status_code) == category]

    def search(self, query: str) -> List[Matter]:
        """Case‑insensitive match on mark text, serial or registration number."""
        return search_matters(self, query)

    # ------------------------------------------------------------------
    # Deadlines
    # ------------------------------------------------------------------
    def add_deadline(self, deadline: Deadline) -> Deadline:
        """Docket *deadline* against an existing matter and assign its id."""
        if deadline.matter_serial not in self._matters:
            raise KeyError(deadline.matter_serial)
        if deadline.id is None:
            deadline.id = next(self._ids)
        self._deadlines[deadline.id] = deadline
        return deadline

    def get_deadline(self, deadline_id: int) -> Deadline:
        return self._deadlines[deadline_id]

    def update_deadline(self, deadline: Deadline) -> None:
        if deadline.id not in self._deadlines:
            raise KeyError(deadline.id)
        self._deadlines[deadline.id] = deadline

    def deadlines_for(self, serial: str) -> List[Deadline]:
        return [d for d in self._deadlines.values() if d.matter_serial == serial]

    def all_deadlines(self) -> List[Deadline]:
        return list(self._deadlines.values())

    def docket(self, serial: str, as_of: Optional[date] = None) -> List[DocketEntry]:
        """Full annotated docket for one matter."""
        return calculate_all_deadlines(self.get(serial), self.deadlines_for(serial), as_of)

    def upcoming_deadlines(self, as_of: Optional[date] = None, within_days: Optional[int] = None) -> List[Deadline]:
        return upcoming_deadlines(self.all_deadlines(), as_of, within_days)

    def kpi_summary(self, as_of: Optional[date] = None) -> Dict[str, int]:
        return kpi_summary(list(self), self.all_deadlines(), as_of)

    # ------------------------------------------------------------------
    # Dunder helpers for convenience
    # ------------------------------------------------------------------
    def __iter__(self):
        return iter(self._matters.values())

    def __len__(self) -> int:
        return len(self._matters)


# ---------------------------------------------------------------------
# Queries shared with the DB‑backed registry
# ---------------------------------------------------------------------
def search_matters(matters, query: str) -> List[Matter]:
    query = query.strip()
    if len(query) < 2:
        return []
    q = query.lower()
    return [
        m for m in matters
        if q in m.mark_text.lower()
        or query in m.serial_number
        or (m.registration_number and query in m.registration_number)
    ]


def upcoming_deadlines(
    deadlines: List[Deadline],
    as_of: Optional[date] = None,
    within_days: Optional[int] = None,
) -> List[Deadline]:
    """Open deadlines due on or before ``as_of + within_days`` (overdue included), soonest first."""
    as_of = clock.resolve(as_of)
    horizon = as_of + timedelta(days=settings.urgent_window_days if within_days is None else within_days)
    hits = [d for d in deadlines if d.status is DeadlineStatus.OPEN and d.due_date <= horizon]
    return sorted(hits, key=lambda d: d.due_date)


def kpi_summary(matters: List[Matter], deadlines: List[Deadline], as_of: Optional[date] = None) -> Dict[str, int]:
    """Headline counts for the dashboard cards."""
    return {
        "total_marks": len(matters),
        "urgent_deadlines": len(upcoming_deadlines(deadlines, as_of)),
        "registered_marks": sum(1 for m in matters if m.is_registered),
        "pending_applications": sum(1 for m in matters if not m.is_registered and m.status_code < 700),
        "active_ttab_matters": sum(1 for m in matters if status_category(m.status_code) == "ttab"),
    }
