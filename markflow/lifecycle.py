"""
markflow.lifecycle
==================

State‑transition guard for a :class:`markflow.models.Deadline`.

A tiny finite‑state‑machine describes which statuses are legal successors
of each status.  :pyfunc:`advance_status` and :pyfunc:`record_extension`
mutate a deadline **in‑place** after validating the change; extensions
also advance the owning matter's extension state.
"""

from __future__ import annotations

import logging

from . import law_engine
from .models import Deadline, DeadlineStatus, DeadlineType, Matter

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Allowed transitions: source status → set[valid target statuses]
# ---------------------------------------------------------------------
RULES = {
    DeadlineStatus.OPEN: {DeadlineStatus.COMPLETED},
}

# Only these deadline types have an extension request mechanism.
EXTENDABLE_TYPES = {
    DeadlineType.OFFICE_ACTION,
    DeadlineType.STATEMENT_OF_USE,
    DeadlineType.OPPOSITION,
}


def advance_status(deadline: Deadline, new_status: DeadlineStatus) -> None:
    """
    Change :pyattr:`deadline.status` if the transition is legal,
    otherwise raise :class:`ValueError`.

    Examples
    --------
    >>> d = Deadline("97123456", DeadlineType.OPPOSITION, date(2025, 3, 3))
    >>> advance_status(d, DeadlineStatus.COMPLETED)
    >>> advance_status(d, DeadlineStatus.COMPLETED)
    Traceback (most recent call last):
        ...
    ValueError: illegal transition completed → completed
    """
    current = deadline.status
    if new_status not in RULES.get(current, set()):
        raise ValueError(f"illegal transition {current} → {new_status}")
    deadline.status = new_status


def complete(deadline: Deadline) -> None:
    advance_status(deadline, DeadlineStatus.COMPLETED)


def record_extension(deadline: Deadline, matter: Matter, extension_days: int = 0) -> None:
    """
    File an extension for *deadline* and move its due date to the date the
    law engine derives for the extended matter.

    The matter's extension state (``office_action_extension_filed``,
    ``sou_extensions_used`` or ``opposition_extension_days``) is updated in
    the same step so derived and stored deadlines agree.

    Raises :class:`ValueError` when the deadline is completed, belongs to
    another matter, has no extension mechanism, or the matter's rules allow
    no further extension (Madrid Protocol and legacy office actions, a
    sixth statement‑of‑use extension, a non‑positive opposition extension).
    """
    if not deadline.is_open:
        raise ValueError("cannot extend a completed deadline")
    if deadline.matter_serial != matter.serial_number:
        raise ValueError(f"deadline belongs to {deadline.matter_serial}, not {matter.serial_number}")
    if deadline.deadline_type not in EXTENDABLE_TYPES:
        raise ValueError(f"{deadline.deadline_type} deadlines cannot be extended")

    if deadline.deadline_type is DeadlineType.OFFICE_ACTION:
        issue = matter.office_action_date or deadline.issue_date
        if issue is None:
            raise ValueError("office action issue date is required to extend")
        if deadline.is_extended or matter.office_action_extension_filed:
            raise ValueError("office action response already extended")
        result = law_engine.calculate_office_action_deadline(issue, matter.filing_basis, False)
        if not result.is_extendable:
            raise ValueError(f"office action issued {issue} under basis {matter.filing_basis} is not extendable")
        new_due = result.max_deadline
        matter.office_action_extension_filed = True

    elif deadline.deadline_type is DeadlineType.STATEMENT_OF_USE:
        if matter.noa_date is None:
            raise ValueError("notice of allowance date is required to extend")
        used = matter.sou_extensions_used
        if used >= law_engine.SOU_MAX_EXTENSIONS:
            raise ValueError(f"all {law_engine.SOU_MAX_EXTENSIONS} statement of use extensions already used")
        result = law_engine.calculate_statement_of_use_deadline(matter.noa_date, used + 1)
        if result.deadline > result.max_deadline:
            raise ValueError("extension would pass the statement of use ceiling")
        new_due = result.deadline
        matter.sou_extensions_used = used + 1

    else:
        if matter.publication_date is None:
            raise ValueError("publication date is required to extend")
        if extension_days <= 0:
            raise ValueError("opposition extension must add at least one day")
        total = matter.opposition_extension_days + extension_days
        new_due = law_engine.calculate_opposition_deadline(matter.publication_date, total).deadline
        matter.opposition_extension_days = total

    logger.info(f"{matter.serial_number}: {deadline.deadline_type} extended {deadline.due_date} -> {new_due}")
    deadline.due_date = new_due
    deadline.is_extended = True
