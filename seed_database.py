#!/usr/bin/env python
"""
Seed database with a sample docket for testing.

This script creates sample matters and their engine-derived deadlines in
the database to populate the dashboard with meaningful data.  Dates are
laid out relative to *as_of* so the urgency buckets always have members.
"""

from datetime import date, timedelta
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from markflow import clock
from markflow.docket import NotComputable, compute_matter_deadlines, to_deadline
from markflow.models import Deadline, DeadlineType, FilingBasis, Matter

# Maintenance deadlines are computed on read, never stored.
_COMPUTED_ON_READ = {DeadlineType.SECTION_8_15, DeadlineType.SECTION_9}


def sample_matters(as_of: date) -> List[Matter]:
    """Sample matters spread across the prosecution life-cycle."""
    return [
        Matter(
            serial_number="97123456",
            mark_text="ACME ROCKET",
            filing_date=as_of - relativedelta(years=2),
            filing_basis=FilingBasis.USE_IN_COMMERCE,
            status_code=700,
            registration_date=as_of - relativedelta(months=6),
            registration_number="6789012",
            client="Acme Corporation",
        ),
        Matter(
            serial_number="97234567",
            mark_text="TECHVENTURE AI",
            filing_date=as_of - relativedelta(years=1),
            filing_basis=FilingBasis.INTENT_TO_USE,
            status_code=600,
            office_action_date=as_of - relativedelta(months=2, days=20),
            client="TechVenture Labs",
            notes="Likelihood of confusion with TECHVENTURES; prepare distinction arguments.",
        ),
        Matter(
            serial_number="97345678",
            mark_text="GREEN EARTH ORGANIC",
            filing_date=as_of - relativedelta(months=14),
            filing_basis=FilingBasis.USE_IN_COMMERCE,
            status_code=730,
            publication_date=as_of - timedelta(days=10),
            client="Green Earth Foods",
        ),
        Matter(
            serial_number="97456789",
            mark_text="LUXE COUTURE",
            filing_date=as_of - relativedelta(years=7),
            filing_basis=FilingBasis.FOREIGN_REGISTRATION,
            status_code=810,
            registration_date=as_of - relativedelta(years=5, months=10),
            registration_number="5123456",
            client="Luxe Fashion Group",
            notes="Section 8 declaration coming due. Client confirmed continued use.",
        ),
        Matter(
            serial_number="97567890",
            mark_text="NORDIC FROST",
            filing_date=as_of - relativedelta(months=10),
            filing_basis=FilingBasis.MADRID_PROTOCOL,
            status_code=600,
            office_action_date=as_of - relativedelta(months=5, days=15),
            client="Nordic Beverages AB",
            notes="WIPO designation. 6-month response deadline, no extension available.",
        ),
        Matter(
            serial_number="97678901",
            mark_text="ACME THUNDERBOLT",
            filing_date=as_of - relativedelta(years=2),
            filing_basis=FilingBasis.INTENT_TO_USE,
            status_code=250,
            noa_date=as_of - relativedelta(months=8),
            sou_extensions_used=1,
            client="Acme Corporation",
        ),
        Matter(
            serial_number="97789012",
            mark_text="SOLAR PEAK",
            filing_date=as_of - relativedelta(months=9),
            filing_basis=FilingBasis.USE_IN_COMMERCE,
            status_code=610,
            client="Green Earth Foods",
            notes="Final action status imported without a mailing date.",
        ),
    ]


def build_sample_docket(as_of: Optional[date] = None) -> Tuple[List[Matter], List[Deadline]]:
    """Return sample matters plus the storable deadlines the engine derives for them."""
    as_of = clock.resolve(as_of)
    matters = sample_matters(as_of)
    deadlines: List[Deadline] = []
    for matter in matters:
        for kind, result in compute_matter_deadlines(matter, as_of).items():
            if isinstance(result, NotComputable) or kind in _COMPUTED_ON_READ:
                continue
            deadlines.append(to_deadline(matter, kind, result))
    return matters, deadlines


def seed_database(pm=None, as_of: Optional[date] = None) -> int:
    """Add the sample docket to *pm* (default: the SQLite registry); return deadlines added."""
    if pm is None:
        from markflow.portfolio_db import DBMatterPortfolio
        pm = DBMatterPortfolio()

    matters, deadlines = build_sample_docket(as_of)
    for matter in matters:
        pm.add(matter)
        print(f"Added: {matter.mark_text} ({matter.serial_number})")
    for deadline in deadlines:
        pm.add_deadline(deadline)

    print(f"\nAdded {len(matters)} matters and {len(deadlines)} deadlines to the database!")
    return len(deadlines)


if __name__ == "__main__":
    # Initialize DB if needed
    from markflow.db import create_all
    print("Ensuring database tables exist...")
    create_all()

    print("Seeding database with sample docket...")
    seed_database()

    print("\nDone! You can now run the API server with:")
    print("uvicorn api.main:app --reload --port 8001")
