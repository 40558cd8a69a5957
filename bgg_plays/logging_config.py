"""
Centralized logging configuration for the BGG Plays package.

Each CLI run writes its own log file under LOGS_DIR. Store write events are
logged at DEBUG on the ``bgg_plays.database`` logger, so verbose runs lower
only that logger and leave the driver libraries at WARNING.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import LOGS_DIR

STORE_LOGGER = "bgg_plays.database"

# Driver and HTTP loggers that are noisy at INFO and below
QUIET_LOGGERS = ("pymongo", "pymongo.command", "pymongo.connection", "motor", "requests", "urllib3")


def run_log_file(command: str, now: Optional[datetime] = None) -> str:
    """Per-run log file name, e.g. ``run_20241019_142500_sync.log``."""
    ts = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"run_{ts}_{command}.log"


def setup_logging(log_file: str = "bgg_plays.log", level: int = logging.INFO,
                  verbose_store: bool = False) -> Path:
    """
    Set up centralized logging for the BGG Plays package.

    Args:
        log_file: Name of the log file inside LOGS_DIR, or an absolute path
        level: Logging level for the console and file handlers
        verbose_store: Also emit every store write (count and ObjectId) at DEBUG

    Returns:
        Path of the log file in use
    """
    log_path = Path(log_file)
    if not log_path.is_absolute():
        log_path = LOGS_DIR / log_path.name

    root_logger = logging.getLogger()
    # Avoid duplicate handlers if already configured
    if root_logger.handlers:
        return log_path

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler_level = logging.DEBUG if verbose_store else level

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
    for handler in (console_handler, file_handler):
        handler.setFormatter(formatter)
        handler.setLevel(handler_level)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    if verbose_store:
        logging.getLogger(STORE_LOGGER).setLevel(logging.DEBUG)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_path
