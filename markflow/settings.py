"""
markflow.settings
=================

Configuration settings for the MarkFlow docket.

This module provides centralized configuration options that can be used across
the package, the CLI and the HTTP layer.  Defaults can be overridden via
environment variables (or a ``.env`` file for the pydantic model below).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# Database settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("MARKFLOW_DB_FILE", BASE_DIR / "markflow.db")
DB_URL = f"sqlite:///{DB_FILE}"
DB_ECHO = os.environ.get("MARKFLOW_DB_ECHO", "False").lower() == "true"

# API settings
# ---------------------------------------------------------------------------
API_HOST = os.environ.get("MARKFLOW_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("MARKFLOW_API_PORT", "8000"))
API_DEBUG = os.environ.get("MARKFLOW_API_DEBUG", "False").lower() == "true"


# ---------------------------------------------------------------------------
# Pydantic settings model for docket behaviour
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for docket settings, loaded from environment variables."""

    docket_timezone: str = Field(
        "America/New_York",
        description="IANA zone whose calendar date is 'today' for days-remaining counts",
    )
    urgent_window_days: int = Field(
        30, ge=0, description="Horizon used by upcoming-deadline lists and the KPI summary"
    )
    log_level: str = Field("INFO", description="Root log level for the CLI and API")

    class Config:
        """Configuration for the settings model."""
        env_prefix = "MARKFLOW_"
        env_file = ".env"
        case_sensitive = False


# Initialize settings
settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once for CLI / server entry points."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
