"""File logging for the billing app.

The terminal belongs to the Textual UI, so records only go to a file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(path: str | Path, level: int = logging.INFO) -> logging.Logger:
    """Attach a file handler to the ``billing`` logger.

    Calling again with the same path only updates the level.
    """
    log_path = Path(path)
    logger = logging.getLogger("billing")
    logger.setLevel(level)
    logger.propagate = False

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(log_path):
            handler.setLevel(level)
            return logger

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)
    return logger
