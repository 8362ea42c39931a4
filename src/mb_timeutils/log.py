"""Logging setup for the CLI."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_MAX_BYTES = 1_000_000
_BACKUP_COUNT = 3


def setup_logging(log_path: Path | None, *, debug: bool = False) -> None:
    """Route package logs to a rotating file, or to stderr when log_path is None.

    Replaces handlers installed by a previous call.
    """
    handler: logging.Handler
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8")
        level = logging.DEBUG if debug else logging.INFO
    else:
        handler = logging.StreamHandler(sys.stderr)
        level = logging.DEBUG if debug else logging.WARNING
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger = logging.getLogger("mb_timeutils")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(level)
