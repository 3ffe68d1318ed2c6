"""
Logging configuration for the treatment plan assistant.

Every module logs through ``logging.getLogger(__name__)``; configuring the
``treatment_assistant`` logger here covers the whole package, the API
included.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from treatment_assistant.config import Settings


LOGGER_NAME = "treatment_assistant"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the package logger from settings.

    Safe to call more than once; handlers from an earlier call are replaced.

    Args:
        settings: Level and optional log file. Defaults to Settings().

    Returns:
        The configured ``treatment_assistant`` logger
    """
    settings = settings or Settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(
        f"Logging configured at {settings.log_level.upper()}"
        + (f", writing to {settings.log_file}" if settings.log_file else "")
    )
    return logger
