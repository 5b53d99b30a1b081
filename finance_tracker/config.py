"""Configuration management for the finance tracker.

This module centralizes configuration values (display timezone, chart
window size, default data directory and log level) together with their
environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

# Base project root - assumes this file is in finance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Directory holding JSON exports of the four list endpoints
DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data"))

# Timezone in which dates are bucketed and displayed
TIMEZONE = os.getenv("FINTRACK_TIMEZONE", "UTC")


def _positive_int(raw: Optional[str], default: int) -> int:
    """Parse a positive integer setting, falling back to ``default``."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


# Number of calendar months shown by the rolling monthly chart
MONTH_WINDOW = _positive_int(os.getenv("FINTRACK_MONTH_WINDOW"), 12)

LOG_LEVEL = os.getenv("FINTRACK_LOG_LEVEL", "INFO")


def get_timezone() -> ZoneInfo:
    """Return the configured display timezone."""
    return ZoneInfo(TIMEZONE)


def get_data_dir() -> str:
    """Get the export directory as a string."""
    return str(DATA_DIR)
