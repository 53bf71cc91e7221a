"""
Logging configuration for the geomagnetic timeseries dashboard.

The dashboard logs to the console; a log file receives the detailed format
when one is configured.
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional


CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are only interesting when debugging requests
LIBRARY_LOGGERS = ("urllib3", "requests")


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(
    name: str = "geomag_dashboard",
    log_file: Optional[str] = None,
    log_level: str = "INFO"
) -> logging.Logger:
    """
    Set up the dashboard logger.

    Args:
        name: Logger name
        log_file: Path to log file. If None, uses LOG_FILE env var; without
                  either, only the console is used
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    if log_file is None:
        log_file = os.getenv("LOG_FILE")

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring replaces the handlers of a previous call
    logger.handlers.clear()
    logger.addHandler(_console_handler(level))
    if log_file:
        logger.addHandler(_file_handler(log_file))

    logger.propagate = False

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for library in LIBRARY_LOGGERS:
        logging.getLogger(library).setLevel(library_level)

    return logger


class LoggerContext:
    """Log the start, duration and outcome of an operation."""

    def __init__(self, logger: logging.Logger, operation: str):
        """
        Initialize logger context.

        Args:
            logger: Logger instance
            operation: Name of the operation being logged
        """
        self.logger = logger
        self.operation = operation
        self.started: Optional[float] = None

    @property
    def elapsed(self) -> float:
        """Seconds since the operation started."""
        if self.started is None:
            return 0.0
        return time.monotonic() - self.started

    def __enter__(self):
        self.started = time.monotonic()
        self.logger.debug(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log completion or failure; exceptions always propagate."""
        if exc_type is not None:
            self.logger.error(f"Failed {self.operation} after {self.elapsed:.2f}s: {exc_val}")
        else:
            self.logger.info(f"Completed {self.operation} in {self.elapsed:.2f}s")
        return False
