"""Configuration management for the expense tracker.

This module centralizes the configuration values used by the app and the
command-line scripts: where the SQLite database lives and how verbose the
logs are.  Every value can be overridden with an environment variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory
DATA_DIR = Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))

# Database
DB_PATH = Path(
    os.getenv("EXPENSE_TRACKER_DB_PATH", DATA_DIR / "expenses.db")
).resolve()

# Logging
LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once only adjusts the level; a second handler
    is never added.
    """
    logger = logging.getLogger("expense_tracker")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = resolved.upper()
    logger.setLevel(resolved)
    return logger
