"""
markflow.docket
===============

Folds a :class:`~markflow.models.Matter` and its stored deadlines into the
docket a dashboard displays.

* :pyfunc:`calculate_all_deadlines` – maintenance deadlines synthesized
  from the registration date, followed by the stored records, each
  annotated with urgency and display text.
* :pyfunc:`compute_matter_deadlines` – every deadline the law engine can
  derive from the matter's own dates.  A deadline whose triggering date
  is missing comes back as :class:`NotComputable` instead of a guess.
* :pyfunc:`to_deadline` – turn an engine result into a storable record.

Synthesized maintenance deadlines are computed on read and never
persisted here.  A stored record of the same type supersedes the
synthesized entry so the docket never lists the same filing twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from . import clock, law_engine
from .law_engine import (
    MaintenanceDeadlines,
    OfficeActionDeadline,
    OppositionDeadline,
    Section8Window,
    Section9Renewal,
    StatementOfUseDeadline,
)
from .models import Deadline, DeadlineStatus, DeadlineType, FilingBasis, Matter, Urgency
from .status_codes import is_office_action_pending, status_category

logger = logging.getLogger(__name__)

DEADLINE_LABELS: Dict[DeadlineType, str] = {
    DeadlineType.OFFICE_ACTION: "Office Action Response",
    DeadlineType.STATEMENT_OF_USE: "Statement of Use",
    DeadlineType.SECTION_8: "Section 8 Declaration",
    DeadlineType.SECTION_8_15: "Section 8 & 15 Declaration",
    DeadlineType.SECTION_9: "Section 9 Renewal",
    DeadlineType.OPPOSITION: "Opposition Period",
    DeadlineType.RESPONSE_TO_OPPOSITION: "Response to Opposition",
    DeadlineType.TTAB_DEADLINE: "TTAB Deadline",
}


@dataclass(frozen=True)
class NotComputable:
    """A deadline that applies to the matter but lacks its triggering date."""
    deadline_type: DeadlineType
    missing_field: str
    reason: str


DerivedDeadline = Union[
    OfficeActionDeadline,
    StatementOfUseDeadline,
    OppositionDeadline,
    Section8Window,
    Section9Renewal,
    NotComputable,
]


@dataclass
class DocketEntry:
    """One row of a matter's docket, stored or synthesized."""
    deadline_type: DeadlineType
    label: str
    due_date: date
    status: DeadlineStatus
    urgency: Urgency
    days_remaining: int
    formatted: str
    window_start: Optional[date] = None
    grace_period_end: Optional[date] = None
    is_extended: bool = False
    notes: Optional[str] = None
    deadline_id: Optional[int] = None
    synthesized: bool = False


def _entry(
    deadline_type: DeadlineType,
    due_date: date,
    as_of: date,
    status: DeadlineStatus = DeadlineStatus.OPEN,
    **extra,
) -> DocketEntry:
    info = law_engine.format_deadline_with_urgency(due_date, status, as_of)
    return DocketEntry(
        deadline_type=deadline_type,
        label=DEADLINE_LABELS[deadline_type],
        due_date=due_date,
        status=status,
        urgency=info.urgency,
        days_remaining=info.days_remaining,
        formatted=info.formatted,
        **extra,
    )


def maintenance_entries(maintenance: MaintenanceDeadlines, as_of: date) -> List[DocketEntry]:
    s8, s9 = maintenance.section8, maintenance.section9
    return [
        _entry(
            DeadlineType.SECTION_8_15,
            s8.window_end,
            as_of,
            window_start=s8.window_start,
            grace_period_end=s8.grace_period_end,
            synthesized=True,
        ),
        _entry(
            DeadlineType.SECTION_9,
            s9.due_date,
            as_of,
            grace_period_end=s9.grace_period_end,
            synthesized=True,
        ),
    ]


def calculate_all_deadlines(
    matter: Matter,
    existing: Iterable[Deadline] = (),
    as_of: Optional[date] = None,
) -> List[DocketEntry]:
    """
    Maintenance deadlines (when registered) followed by *existing* records.

    Stored records keep their given order and are annotated with urgency,
    signed days remaining and display text.
    """
    as_of = law_engine.as_date(clock.resolve(as_of))
    existing = list(existing)
    stored_types = {d.deadline_type for d in existing}

    entries: List[DocketEntry] = []
    if matter.registration_date is not None:
        maintenance = law_engine.calculate_maintenance_deadlines(matter.registration_date)
        for entry in maintenance_entries(maintenance, as_of):
            if entry.deadline_type in stored_types:
                logger.debug(f"{matter.serial_number}: stored {entry.deadline_type} supersedes computed entry")
                continue
            entries.append(entry)

    for d in existing:
        entries.append(
            _entry(
                d.deadline_type,
                d.due_date,
                as_of,
                status=d.status,
                is_extended=d.is_extended,
                notes=d.notes,
                deadline_id=d.id,
            )
        )
    return entries


def compute_matter_deadlines(
    matter: Matter,
    as_of: Optional[date] = None,
) -> Dict[DeadlineType, DerivedDeadline]:
    """
    Derive each deadline that applies to *matter* from its own dates.

    * office action – while the status shows an outstanding action
    * statement of use – intent‑to‑use matters with a NOA, not yet registered
    * opposition – published, not yet registered
    * Section 8 & 15 / Section 9 – registered matters
    """
    as_of = law_engine.as_date(clock.resolve(as_of))
    out: Dict[DeadlineType, DerivedDeadline] = {}

    if is_office_action_pending(matter.status_code):
        if matter.office_action_date is None:
            out[DeadlineType.OFFICE_ACTION] = NotComputable(
                DeadlineType.OFFICE_ACTION,
                "office_action_date",
                "office action pending but no issue date on file",
            )
        else:
            out[DeadlineType.OFFICE_ACTION] = law_engine.calculate_office_action_deadline(
                matter.office_action_date,
                matter.filing_basis,
                matter.office_action_extension_filed,
                as_of,
            )

    if matter.filing_basis is FilingBasis.INTENT_TO_USE and not matter.is_registered and matter.noa_date:
        out[DeadlineType.STATEMENT_OF_USE] = law_engine.calculate_statement_of_use_deadline(
            matter.noa_date, matter.sou_extensions_used, as_of
        )

    if not matter.is_registered:
        if matter.publication_date is not None:
            out[DeadlineType.OPPOSITION] = law_engine.calculate_opposition_deadline(
                matter.publication_date, matter.opposition_extension_days, as_of
            )
        elif status_category(matter.status_code) == "publication":
            out[DeadlineType.OPPOSITION] = NotComputable(
                DeadlineType.OPPOSITION,
                "publication_date",
                "published for opposition but no publication date on file",
            )

    if matter.registration_date is not None:
        maintenance = law_engine.calculate_maintenance_deadlines(matter.registration_date)
        out[DeadlineType.SECTION_8_15] = maintenance.section8
        out[DeadlineType.SECTION_9] = maintenance.section9
    elif status_category(matter.status_code) == "registered":
        for kind in (DeadlineType.SECTION_8_15, DeadlineType.SECTION_9):
            out[kind] = NotComputable(kind, "registration_date", "registered but no registration date on file")

    for kind, result in out.items():
        if isinstance(result, NotComputable):
            logger.warning(f"{matter.serial_number}: {kind} not computable ({result.reason})")
    return out


def due_date_of(result: DerivedDeadline) -> date:
    """Operative due date of an engine result."""
    if isinstance(result, NotComputable):
        raise ValueError(f"{result.deadline_type} is not computable: {result.reason}")
    if isinstance(result, Section8Window):
        return result.window_end
    if isinstance(result, Section9Renewal):
        return result.due_date
    return result.deadline


def to_deadline(
    matter: Matter,
    deadline_type: DeadlineType,
    result: DerivedDeadline,
    notes: Optional[str] = None,
) -> Deadline:
    """Build a storable :class:`Deadline` from an engine result for *matter*."""
    is_extended = False
    issue_date = None
    if deadline_type is DeadlineType.OFFICE_ACTION:
        is_extended = matter.office_action_extension_filed
        issue_date = matter.office_action_date
    elif deadline_type is DeadlineType.STATEMENT_OF_USE:
        is_extended = matter.sou_extensions_used > 0
        issue_date = matter.noa_date
    elif deadline_type is DeadlineType.OPPOSITION:
        is_extended = matter.opposition_extension_days > 0
        issue_date = matter.publication_date

    return Deadline(
        matter_serial=matter.serial_number,
        deadline_type=deadline_type,
        due_date=due_date_of(result),
        is_extended=is_extended,
        notes=notes,
        issue_date=issue_date,
    )
