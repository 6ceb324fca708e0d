"""
Core utilities for the Zero-Hydro simulation engine.

Provides configuration management, logging, exceptions and date handling.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .date_utils import DateUtils
from .exceptions import (
    ZeroHydroError,
    UpstreamDataUnavailable,
    MalformedSample,
    InvalidProfile,
    NumericDivergence,
)

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
    "ZeroHydroError",
    "UpstreamDataUnavailable",
    "MalformedSample",
    "InvalidProfile",
    "NumericDivergence",
]
