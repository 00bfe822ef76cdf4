"""
markflow.models
===============

Dataclasses and enums representing a trademark matter and the deadlines
docketed against it.  Like the rest of the core these objects carry **no**
external‑library dependencies; persistence lives in :pymod:`markflow.db`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class FilingBasis(Enum):
    """Statutory filing basis of an application (registry code as value)."""
    USE_IN_COMMERCE = "1(a)"
    INTENT_TO_USE = "1(b)"
    FOREIGN_PRIORITY = "44(d)"
    FOREIGN_REGISTRATION = "44(e)"
    MADRID_PROTOCOL = "66(a)"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: "str | FilingBasis") -> "FilingBasis":
        """
        Parse a registry basis code such as ``"1(b)"``.

        Unknown codes raise :class:`ValueError` rather than being mapped
        onto a default legal regime.
        """
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).strip())
        except ValueError:
            raise ValueError(f"unknown filing basis {code!r}") from None


class DeadlineType(Enum):
    """Kinds of obligation the docket tracks."""
    OFFICE_ACTION = "office_action"
    STATEMENT_OF_USE = "statement_of_use"
    SECTION_8 = "section_8"
    SECTION_8_15 = "section_8_15"
    SECTION_9 = "section_9"
    OPPOSITION = "opposition"
    RESPONSE_TO_OPPOSITION = "response_to_opposition"
    TTAB_DEADLINE = "ttab_deadline"

    def __str__(self) -> str:
        return self.value


class DeadlineStatus(Enum):
    OPEN = "open"
    COMPLETED = "completed"

    def __str__(self) -> str:
        return self.value


class Urgency(Enum):
    """Discrete urgency level consumed by dashboards and reports."""
    URGENT = "urgent"
    WARNING = "warning"
    NORMAL = "normal"
    COMPLETED = "completed"

    def __str__(self) -> str:
        return self.value


@dataclass
class Matter:
    """
    A single trademark application or registration.

    Parameters
    ----------
    serial_number : str
        Registry serial number; unique key of the matter.
    mark_text : str
        Literal word mark.
    filing_date : datetime.date
        Application filing date.
    filing_basis : FilingBasis
        Statutory basis; strings are parsed with :meth:`FilingBasis.from_code`.
    status_code : int
        Numeric registry status (see :pymod:`markflow.status_codes`).
    registration_date : datetime.date | None
        Set once the mark registers; must not precede *filing_date*.
    registration_number : str | None
        Registry registration number.
    office_action_date : datetime.date | None
        Mailing date of the outstanding office action.
    office_action_extension_filed : bool
        Whether the single three‑month extension has been requested.
    noa_date : datetime.date | None
        Notice of Allowance date (intent‑to‑use track).
    sou_extensions_used : int
        Statement‑of‑use extensions already filed.
    publication_date : datetime.date | None
        Publication for opposition.
    opposition_extension_days : int
        Extra days granted on requests to extend time to oppose.
    client : str | None
        Client name.
    notes : str | None
        Free‑text attorney notes.
    """
    serial_number: str
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

    def __post_init__(self):
        self.filing_basis = FilingBasis.from_code(self.filing_basis)
        if self.registration_date is not None and self.registration_date < self.filing_date:
            raise ValueError("registration date cannot precede filing date")
        if self.sou_extensions_used < 0:
            raise ValueError("sou_extensions_used cannot be negative")
        if self.opposition_extension_days < 0:
            raise ValueError("opposition_extension_days cannot be negative")

    # Convenience helpers -------------------------------------------------
    @property
    def is_registered(self) -> bool:
        return self.registration_date is not None or bool(self.registration_number)


@dataclass
class Deadline:
    """
    One docketed obligation belonging to a :class:`Matter`.

    ``id`` is assigned by the registry on insert.  ``issue_date`` keeps the
    triggering event (e.g. the office action mailing date) when known.
    """
    matter_serial: str
    deadline_type: DeadlineType
    due_date: date
    status: DeadlineStatus = DeadlineStatus.OPEN
    is_extended: bool = False
    notes: Optional[str] = None
    issue_date: Optional[date] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.deadline_type = DeadlineType(self.deadline_type)
        self.status = DeadlineStatus(self.status)

    @property
    def is_open(self) -> bool:
        return self.status is DeadlineStatus.OPEN
