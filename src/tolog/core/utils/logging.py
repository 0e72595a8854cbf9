"""
Logging configuration using loguru.

Library modules only ever ``from loguru import logger``; the front end calls
:func:`configure_logging` once at startup to decide where records go.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from tolog.core.config import Config

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} | {message}"
DEFAULT_LOG_NAME = "tolog.log"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's sinks with stderr plus an optional rotating file.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)


def configure_logging(config: Config) -> None:
    """Set up logging from the ``logging`` section of the config.

    ``logging.file`` may be a path, or ``true`` for ``<paths.log_dir>/tolog.log``.
    """
    file_setting = config.get("logging.file")
    if file_setting is True or str(file_setting).lower() in ("true", "yes", "1"):
        log_file = os.path.join(os.path.expanduser(config.get("paths.log_dir")), DEFAULT_LOG_NAME)
    elif file_setting:
        log_file = os.path.expanduser(str(file_setting))
    else:
        log_file = None
    setup_logging(level=str(config.get("logging.level", "WARNING")), log_file=log_file)
