"""
Core utilities for the geomagnetic timeseries dashboard.

Provides configuration management, logging and date handling.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .date_utils import DateUtils

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
]
