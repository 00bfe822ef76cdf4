"""
MarkFlow
========

A trademark docketing toolkit: tracks matters (applications and
registrations), derives prosecution and maintenance deadlines from the
statutory timing rules, and classifies how urgent each one is.

Import structure
----------------
`import markflow` is intentionally cheap: only the stdlib-based
sub‑modules are imported by default.  *sqlmodel* is only imported by
:pymod:`markflow.db` / :pymod:`markflow.portfolio_db` and *matplotlib*
only by :pymod:`markflow.viz`.

Sub‑modules
~~~~~~~~~~~
- :pymod:`markflow.models`            – ``Matter`` / ``Deadline`` dataclasses + enums
- :pymod:`markflow.status_codes`      – registry status table, Madrid lookup
- :pymod:`markflow.business_calendar` – federal holidays, business‑day rolling
- :pymod:`markflow.law_engine`        – deadline calculators + urgency
- :pymod:`markflow.docket`            – per‑matter docket aggregation
- :pymod:`markflow.lifecycle`         – deadline state‑machine guard
- :pymod:`markflow.portfolio`         – ``MatterPortfolio`` in‑memory registry
- :pymod:`markflow.viz`               – plotting helpers

Quick start
-----------
>>> from datetime import date
>>> from markflow.law_engine import calculate_office_action_deadline
>>> r = calculate_office_action_deadline(date(2023, 1, 10), "1(b)", as_of=date(2023, 2, 1))
>>> r.deadline, r.is_extendable
(datetime.date(2023, 4, 10), True)

"""

__all__ = [
    "models",
    "status_codes",
    "business_calendar",
    "law_engine",
    "docket",
    "lifecycle",
    "portfolio",
    "viz",
]

__version__ = "0.1.0"
