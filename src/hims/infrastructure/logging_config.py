"""Logging setup for the CLI.

Every module logs through ``logging.getLogger(__name__)``, so configuring
the ``hims`` logger once at startup covers the whole package. Records go
to a rotating file; only warnings and above reach stderr.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOGS_DIR = os.path.join(os.getcwd(), "logs")

LOG_FORMAT = (
    "%(asctime)s %(levelname)-8s "
    "[%(filename)s:%(lineno)d %(funcName)s()] %(message)s"
)


def setup_logging(
    name: str = "hims",
    log_file: str = "hims.log",
    level: int | str = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """Attach a rotating file handler and a stderr handler to ``name``.

    A relative ``log_file`` is placed under ``./logs/``; an absolute path
    is used as given. Calling this again replaces the handlers instead of
    stacking duplicates.
    """
    logger = logging.getLogger(name)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    if os.path.isabs(log_file):
        log_path = log_file
    else:
        os.makedirs(LOGS_DIR, exist_ok=True)
        log_path = os.path.join(LOGS_DIR, os.path.basename(log_file))

    file_handler = RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # stderr only carries warnings and above
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(logging.WARNING)
    logger.addHandler(stream_handler)

    logger.setLevel(level if isinstance(level, int) else str(level).upper())
    return logger
