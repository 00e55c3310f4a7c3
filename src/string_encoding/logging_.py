"""Logging utilities.

We use Python's standard `logging` module. Every module logs under the
``string_encoding`` logger hierarchy.

- Logs go to: `<log_dir>/<run_name>.log` when a log directory is given
- Also prints to stderr.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import LoggingConfig

LOGGER_NAME = "string_encoding"


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[str] = None,
    run_name: str = "string_encoding",
) -> logging.Logger:
    """
    Setup logging configuration for the package logger.

    Args:
        level: Logging level name
        log_dir: Directory for the log file (console only if None)
        run_name: Log file name without extension

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    # Drop handlers from an earlier call so records are not duplicated
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # File
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, f"{run_name}.log"), encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    return logger


def setup_logging_from_config(config: LoggingConfig, run_name: str = "string_encoding") -> logging.Logger:
    """Setup logging from a LoggingConfig section."""
    return setup_logging(level=config.level, log_dir=config.log_dir, run_name=run_name)
