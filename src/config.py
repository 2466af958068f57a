"""
Umpire Poll Scheduler — Centralized configuration.

Loads the commitment-window settings from .env and validates them.
The scheduling core never reads these directly; callers turn them into a
WindowPolicy and pass it in.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from src.core.windows import WindowPolicy

# Load .env from project root (two levels up from src/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Commitment window
    SLOT_LEAD_MINUTES: int = 30           # buffer before the match start
    SLOT_GRANULARITY_MINUTES: int = 15    # window starts snap down to this
    SLOT_DURATION_MINUTES: int = 120
    SLOT_MERGE_TOLERANCE_MINUTES: int = 15

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator(
        "SLOT_LEAD_MINUTES",
        "SLOT_GRANULARITY_MINUTES",
        "SLOT_DURATION_MINUTES",
        "SLOT_MERGE_TOLERANCE_MINUTES",
        mode="before",
    )
    @classmethod
    def parse_minutes(cls, v: str | int) -> int:
        if isinstance(v, str):
            v = v.strip()
        return int(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def parse_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v!r}")
        return level

    def window_policy(self) -> WindowPolicy:
        """Build the WindowPolicy described by these settings."""
        return WindowPolicy(
            lead_minutes=self.SLOT_LEAD_MINUTES,
            granularity_minutes=self.SLOT_GRANULARITY_MINUTES,
            duration_minutes=self.SLOT_DURATION_MINUTES,
            merge_tolerance_minutes=self.SLOT_MERGE_TOLERANCE_MINUTES,
        )


def _load_settings() -> Settings:
    """Load settings from environment, falling back to the defaults."""
    return Settings(
        SLOT_LEAD_MINUTES=os.getenv("SLOT_LEAD_MINUTES", "30"),
        SLOT_GRANULARITY_MINUTES=os.getenv("SLOT_GRANULARITY_MINUTES", "15"),
        SLOT_DURATION_MINUTES=os.getenv("SLOT_DURATION_MINUTES", "120"),
        SLOT_MERGE_TOLERANCE_MINUTES=os.getenv("SLOT_MERGE_TOLERANCE_MINUTES", "15"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for a host application embedding the engine."""
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format=_LOG_FORMAT,
    )


# Singleton — imported by callers as:
#   from src.config import settings
settings = _load_settings()
