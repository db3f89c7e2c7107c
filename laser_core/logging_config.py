"""
Logging configuration for the laser_core namespace.
"""
from __future__ import annotations

import logging
import sys

LOGGER_NAME = "laser_core"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int | str = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'laser_core' logger.

    Args:
        level: logging level, either numeric or a name such as "DEBUG".
        log_file: optional path that receives a copy of the log.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Streamlit reruns the script on every interaction; avoid stacking handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
