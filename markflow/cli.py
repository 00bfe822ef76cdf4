"""
markflow.cli
============

Command‑line front end for the law engine.  Every subcommand prints JSON.

Examples
--------
$ markflow office-action 2023-01-10 --basis "1(b)" --as-of 2023-02-01
$ markflow maintenance 2020-01-15
$ markflow statement-of-use 2023-01-01 --extensions 2
$ markflow holidays 2025
$ markflow docket 97123456          # reads the SQLite registry
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import date
from typing import List, Optional

from . import clock, law_engine
from .business_calendar import federal_holidays
from .models import DeadlineStatus
from .settings import configure_logging

logger = logging.getLogger(__name__)


def _iso_date(value: str) -> date:
    try:
        return law_engine.as_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="markflow", description="Trademark deadline calculator")
    parser.add_argument("--as-of", type=_iso_date, default=None,
                        help="evaluation date for days-remaining (default: today)")
    parser.add_argument("--log-level", default=None, help="override MARKFLOW_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("holidays", help="observed federal holidays for a year")
    p.add_argument("year", type=int)

    p = sub.add_parser("office-action", help="office action response deadline")
    p.add_argument("issue_date", type=_iso_date)
    p.add_argument("--basis", required=True, help="filing basis code, e.g. 1(a), 66(a)")
    p.add_argument("--extension-filed", action="store_true")

    p = sub.add_parser("maintenance", help="Section 8 & 15 and Section 9 windows")
    p.add_argument("registration_date", type=_iso_date)

    p = sub.add_parser("statement-of-use", help="statement of use deadline")
    p.add_argument("noa_date", type=_iso_date)
    p.add_argument("--extensions", type=int, default=0)

    p = sub.add_parser("opposition", help="opposition period deadline")
    p.add_argument("publication_date", type=_iso_date)
    p.add_argument("--extension-days", type=int, default=0)

    p = sub.add_parser("urgency", help="urgency level for a days-remaining count")
    p.add_argument("days", type=int)
    p.add_argument("--status", choices=[s.value for s in DeadlineStatus], default="open")

    p = sub.add_parser("docket", help="annotated docket of a stored matter")
    p.add_argument("serial")

    return parser


def run(args: argparse.Namespace) -> object:
    """Execute a parsed command and return a JSON‑serialisable result."""
    as_of = clock.resolve(args.as_of)

    if args.command == "holidays":
        return sorted(federal_holidays(args.year))
    if args.command == "office-action":
        return asdict(law_engine.calculate_office_action_deadline(
            args.issue_date, args.basis, args.extension_filed, as_of))
    if args.command == "maintenance":
        return asdict(law_engine.calculate_maintenance_deadlines(args.registration_date))
    if args.command == "statement-of-use":
        return asdict(law_engine.calculate_statement_of_use_deadline(args.noa_date, args.extensions, as_of))
    if args.command == "opposition":
        return asdict(law_engine.calculate_opposition_deadline(args.publication_date, args.extension_days, as_of))
    if args.command == "urgency":
        return law_engine.deadline_urgency(args.days, args.status)
    if args.command == "docket":
        from .db import create_all
        from .portfolio_db import DBMatterPortfolio

        create_all()
        with DBMatterPortfolio() as pm:
            return [asdict(e) for e in pm.docket(args.serial, as_of)]
    raise ValueError(f"unknown command {args.command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        result = run(args)
    except KeyError as exc:
        logger.error(f"not found: {exc}")
        return 1
    json.dump(result, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
