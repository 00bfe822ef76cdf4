"""
api.deps
========

FastAPI dependency providers.

`get_portfolio` returns a **DBMatterPortfolio** so every request talks to
the persistent SQLite store.  Tests override it with the in‑memory
MatterPortfolio via ``app.dependency_overrides``.
"""

from functools import lru_cache

from markflow.db import create_all
from markflow.portfolio_db import DBMatterPortfolio
from markflow.settings import Settings, settings


@lru_cache
def get_portfolio() -> DBMatterPortfolio:
    """Singleton DB‑backed registry (persists across requests)."""
    create_all()
    return DBMatterPortfolio()


@lru_cache
def get_settings() -> Settings:
    """Application settings; routes read the upcoming-deadline horizon from here."""
    return settings
