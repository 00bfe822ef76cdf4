"""
Pytest configuration: make sure `import markflow` works regardless of
where pytest is invoked, and provide shared fixtures.

It prepends the project root (one directory above *tests/*) to
``sys.path`` **before** any tests are collected.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from markflow.models import FilingBasis, Matter  # noqa: E402


@pytest.fixture
def as_of():
    """Fixed evaluation date shared by docket tests."""
    return date(2025, 3, 3)


@pytest.fixture
def registered_matter():
    return Matter(
        serial_number="97123456",
        mark_text="ACME ROCKET",
        filing_date=date(2018, 6, 1),
        filing_basis=FilingBasis.USE_IN_COMMERCE,
        status_code=800,
        registration_date=date(2020, 1, 15),
        registration_number="6789012",
        client="Acme Corporation",
    )


@pytest.fixture
def office_action_matter():
    return Matter(
        serial_number="97234567",
        mark_text="TECHVENTURE AI",
        filing_date=date(2022, 9, 1),
        filing_basis="1(b)",
        status_code=600,
        office_action_date=date(2023, 1, 10),
    )
