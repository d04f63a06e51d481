"""
Logging setup for the salon scheduler.

Level and directory default to the LOG_LEVEL and LOG_DIR settings. The
reminder scheduler owns scheduler.log; booking and storage modules log
through plain module loggers whose package loggers are wired to the same
file by configure_app_logging.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, List, Optional

from config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGERS = ("booking", "db")
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def _formatter(level: int) -> logging.Formatter:
    # Source locations only help while debugging
    fmt = DEBUG_LOG_FORMAT if level <= logging.DEBUG else LOG_FORMAT
    return logging.Formatter(fmt, datefmt=DATE_FORMAT)


def setup_logging(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console and, optionally, rotating file handlers to a logger.

    Calling it again for a configured logger returns it unchanged.

    Args:
        name: Logger name (typically __name__ or a package name)
        log_level: Level name; settings.log_level when omitted
        log_file: File name inside log_dir; console only when omitted
        log_dir: Directory for log_file; settings.log_dir when omitted
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = getattr(logging, str(log_level or settings.log_level).upper(), logging.INFO)
    logger.setLevel(level)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        directory = Path(log_dir or settings.log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                directory / log_file,
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUPS,
                encoding="utf-8",
            )
        )

    formatter = _formatter(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_app_logging(
    log_file: str = "scheduler.log",
    log_dir: Optional[str] = None,
    names: Iterable[str] = APP_LOGGERS,
) -> List[logging.Logger]:
    """Route the booking and storage package loggers to log_file."""
    return [setup_logging(name, log_file=log_file, log_dir=log_dir) for name in names]
