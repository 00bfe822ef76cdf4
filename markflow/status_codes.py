"""
markflow.status_codes
=====================

Registry status codes mapped to human‑readable labels and dashboard
categories, plus the filing‑basis lookups the law engine branches on.
"""

from __future__ import annotations

from typing import Dict, NamedTuple

from .models import FilingBasis


class StatusInfo(NamedTuple):
    label: str
    category: str


STATUS_CODES: Dict[int, StatusInfo] = {
    # Application processing
    100: StatusInfo("New Application", "application"),
    150: StatusInfo("New Application - Record Initialized", "application"),
    200: StatusInfo("Abandoned - Incomplete", "abandoned"),
    220: StatusInfo("Awaiting Examination", "application"),
    250: StatusInfo("Intent-to-Use Processing", "application"),

    # Examination
    400: StatusInfo("Assigned to Examiner", "examination"),
    500: StatusInfo("Initial Examination", "examination"),
    600: StatusInfo("Non-Final Action Issued", "office_action"),
    605: StatusInfo("Response After Non-Final Action", "office_action"),
    610: StatusInfo("Final Action Issued", "office_action"),
    615: StatusInfo("Response After Final Action", "office_action"),
    620: StatusInfo("Appeal Pending", "appeal"),
    630: StatusInfo("Suspended", "suspended"),

    # Publication
    700: StatusInfo("Registered", "registered"),
    710: StatusInfo("Registered - Maintenance Due", "registered"),
    730: StatusInfo("Published for Opposition", "publication"),
    740: StatusInfo("In Opposition Proceeding", "ttab"),
    750: StatusInfo("Opposition Period Expired", "publication"),

    # Registration
    800: StatusInfo("Registered", "registered"),
    810: StatusInfo("Registered - Section 8 Due", "registered"),
    820: StatusInfo("Registered - Section 9 Due", "registered"),
    830: StatusInfo("Registered - Renewal Filed", "registered"),

    # Abandonment / cancellation
    900: StatusInfo("Abandoned - Failure to Respond", "abandoned"),
    901: StatusInfo("Abandoned - Express Abandonment", "abandoned"),
    902: StatusInfo("Abandoned - Failure to File Statement of Use", "abandoned"),
    910: StatusInfo("Cancelled - Section 8", "cancelled"),
    911: StatusInfo("Cancelled - Section 71", "cancelled"),
    920: StatusInfo("Expired", "expired"),
}

STATUS_CATEGORIES: Dict[str, str] = {
    "application": "Application",
    "examination": "Examination",
    "office_action": "Office Action",
    "publication": "Publication",
    "ttab": "TTAB",
    "registered": "Registered",
    "abandoned": "Abandoned",
    "cancelled": "Cancelled",
    "expired": "Expired",
    "appeal": "Appeal",
    "suspended": "Suspended",
    "unknown": "Unknown",
}

# Statuses in which an office action is outstanding and a response is due.
OFFICE_ACTION_PENDING_CODES = frozenset({600, 601, 602, 603, 610, 611, 612, 614, 615, 616})

FILING_BASIS_LABELS: Dict[FilingBasis, str] = {
    FilingBasis.USE_IN_COMMERCE: "Use in Commerce",
    FilingBasis.INTENT_TO_USE: "Intent to Use",
    FilingBasis.FOREIGN_PRIORITY: "Foreign Priority",
    FilingBasis.FOREIGN_REGISTRATION: "Foreign Registration",
    FilingBasis.MADRID_PROTOCOL: "Madrid Protocol",
}


def status_info(code: int) -> StatusInfo:
    """Return label/category for *code*; unknown codes get an ``unknown`` record."""
    return STATUS_CODES.get(code, StatusInfo(f"Unknown ({code})", "unknown"))


def status_category(code: int) -> str:
    return status_info(code).category


def is_office_action_pending(code: int) -> bool:
    return code in OFFICE_ACTION_PENDING_CODES


def is_madrid_protocol(basis: "FilingBasis | str | None") -> bool:
    """
    True only for the Madrid Protocol basis (``66(a)``).

    Accepts the enum or its raw registry code.  Anything else, including
    unrecognised codes, selects the domestic regime.
    """
    if isinstance(basis, FilingBasis):
        return basis is FilingBasis.MADRID_PROTOCOL
    return basis == FilingBasis.MADRID_PROTOCOL.value
