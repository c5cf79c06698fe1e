"""Logging setup for the command line and the catalog store.

Two loggers are configured:
  - ``shelfrank`` (system): timestamped lines to console and ``<logs_dir>/<file_name>``
  - ``shelfrank.user``: plain messages meant for the person running the tool

The ingestion and scoring core never logs; callers report its results.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import AppConfig


SYSTEM_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
SYSTEM_DATEFMT = "%Y-%m-%d %H:%M:%S"
HUMAN_FMT = "%(message)s"
LOGGER_NAME = "shelfrank"
USER_LOGGER_NAME = "shelfrank.user"


def _ensure_logs_dir(config: AppConfig) -> Path:
    logs_dir = Path(config.paths.logs_dir).expanduser().resolve()
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def _safe_add_file_handler(logger: logging.Logger, path: Path, formatter: logging.Formatter) -> None:
    try:
        fh = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to attach file handler %s (%s); logging to console only", str(path), exc)
        return
    fh.setFormatter(formatter)
    logger.addHandler(fh)


def get_logger(config: Optional[AppConfig] = None, name: str = LOGGER_NAME) -> logging.Logger:
    """Return the system logger with console + file handlers.

    Handlers are reset on every call so repeated setup does not duplicate output.
    """

    config = config or AppConfig()
    logs_dir = _ensure_logs_dir(config)
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.logging.level, logging.INFO))
    logger.handlers = []

    formatter = logging.Formatter(SYSTEM_FMT, datefmt=SYSTEM_DATEFMT)
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    _safe_add_file_handler(logger, logs_dir / config.logging.file_name, formatter)
    logger.debug("Logging initialised. Logs will be written to %s", logs_dir / config.logging.file_name)
    return logger


def get_user_logger() -> logging.Logger:
    """Return a console logger that prints bare messages to stdout."""

    logger = logging.getLogger(USER_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.handlers = []
    logger.propagate = False

    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(logging.Formatter(HUMAN_FMT))
    logger.addHandler(sh)
    return logger
