"""Runtime configuration defaults for storage and logging."""

from __future__ import annotations

import logging
import os

STORAGE_PATH = "data/billing.db"
BILLS_STORAGE_KEY = "bills"

CURRENCY_SYMBOL = "₹"

LOG_PATH = "/tmp/billing-debug.log"
LOG_LEVEL = "INFO"

_STORAGE_PATH_ENV = "BILLING_STORAGE_PATH"
_LOG_PATH_ENV = "BILLING_LOG_PATH"
_LOG_LEVEL_ENV = "BILLING_LOG_LEVEL"


def resolve_storage_path() -> str:
    """Return the SQLite file path, honoring BILLING_STORAGE_PATH."""
    return os.environ.get(_STORAGE_PATH_ENV, "").strip() or STORAGE_PATH


def resolve_log_path() -> str:
    """Return the debug log path, honoring BILLING_LOG_PATH."""
    return os.environ.get(_LOG_PATH_ENV, "").strip() or LOG_PATH


def resolve_log_level() -> int:
    """Return a numeric log level, honoring BILLING_LOG_LEVEL.

    Unknown names fall back to INFO.
    """
    name = os.environ.get(_LOG_LEVEL_ENV, "").strip().upper() or LOG_LEVEL
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.INFO
