"""
Logging configuration for polygon weather coloring.

Console output for the operator, a detailed file log for debugging. Refresh
cycles run on timer threads, so file records carry the thread name.
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

from . import constants

FILE_FORMAT = "%(asctime)s - %(threadName)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "polygon_weather",
    log_file: Optional[str] = None,
    log_level: str = constants.DEFAULT_LOG_LEVEL
) -> logging.Logger:
    """
    Set up application logger with console and file handlers.

    The file handler records everything at the configured level. The console
    shows INFO and above, or less if the configured level is stricter.

    Args:
        name: Logger name
        log_file: Path to log file. If None, uses LOG_FILE env var or default
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    if log_file is None:
        log_file = os.getenv("LOG_FILE", constants.DEFAULT_LOG_FILE)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Repeated setup (tests, re-created apps) must not stack handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.INFO))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, TIMESTAMP_FORMAT))
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, TIMESTAMP_FORMAT))
    logger.addHandler(file_handler)

    logger.propagate = False
    return logger


class LoggerContext:
    """
    Log start, duration and outcome of an operation.

    A failure is logged once, with traceback, and the exception propagates.
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.duration: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self):
        self._started = time.monotonic()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.monotonic() - self._started

        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation} after {self.duration:.2f}s: {exc_val}",
                exc_info=True
            )
            return False

        self.logger.info(f"Completed {self.operation} in {self.duration:.2f}s")
        return False
