"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from taskboard.config.settings import settings
from taskboard.config.constants import LOG_FORMAT, LOG_DATE_FORMAT

LOG_DIR = Path(__file__).parent.parent.parent / "logs"


def setup_logger(
    name: str = "taskboard",
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Setup and configure logger

    Console output follows the configured level; the optional log file
    always records debug output.

    Args:
        name: Logger name
        level: Level name, defaults to LOG_LEVEL
        log_file: File to append to; with LOG_TO_FILE set it defaults to logs/<name>.log

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    console_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    # Re-running setup must not stack handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is None and settings.LOG_TO_FILE:
        log_file = LOG_DIR / f"{name}.log"

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    return logger


# Global logger instance
logger = setup_logger()
