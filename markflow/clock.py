"""
markflow.clock
==============

The one place the package reads the wall clock.

Engine functions take an explicit ``as_of`` date; only when a caller
leaves it out does :func:`resolve` fall back to :func:`today`.  Tests
substitute a fixed date by passing ``as_of`` or by patching
``markflow.clock.today``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from .settings import settings


def today() -> date:
    """Current calendar date in the docket's time zone."""
    return datetime.now(ZoneInfo(settings.docket_timezone)).date()


def resolve(as_of: Optional[date]) -> date:
    return today() if as_of is None else as_of
