#!/usr/bin/env python3

"""Module which sets up logging for the VolumeBot."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)-7s] %(message)s"
DEFAULT_LOG_LEVEL = logging.INFO

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

formatter = logging.Formatter(LOG_FORMAT)

stdout_handler = logging.StreamHandler(stream=sys.stdout)
stdout_handler.setFormatter(formatter)

logger = logging.getLogger(__name__)

logger.setLevel(DEFAULT_LOG_LEVEL)
logger.addHandler(stdout_handler)


def configure_logging(level: Union[str, int] = DEFAULT_LOG_LEVEL, log_file: Optional[Path] = None) -> None:
    """Sets the log level of all handlers and optionally adds a file handler.

    Args:
        level (Union[str, int]): Level name (see LOG_LEVELS) or numeric logging level. Defaults to INFO.
        log_file (Optional[Path]): File to additionally write the log to. Defaults to None.

    Raises:
        ValueError: If the level name is unknown.
    """
    if isinstance(level, str):
        if level.lower() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: '{level}'.")
        level = LOG_LEVELS[level.lower()]

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
