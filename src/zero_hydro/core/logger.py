"""
Logging configuration for the Zero-Hydro simulation engine.

Console output is always on; a detailed file log is added unless disabled.
Locations may sync on parallel threads, so records carry the thread name.
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

DEFAULT_LOG_FILE = "logs/zero_hydro.log"


def resolve_level(log_level: Optional[str] = None) -> int:
    """
    Get a numeric logging level.

    Args:
        log_level: Level name; None reads LOG_LEVEL (default INFO)

    Returns:
        logging level constant

    Raises:
        ValueError: If the level name is unknown
    """
    name = (log_level or os.getenv("LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def setup_logger(
    name: str = "zero_hydro",
    log_file: Optional[str] = None,
    log_level: Optional[str] = None
) -> logging.Logger:
    """
    Set up application logger with console and optional file handlers.

    Args:
        name: Logger name
        log_file: Path to log file. None uses LOG_FILE env var or the
                  default path; an empty string logs to the console only
        log_level: Logging level name. None uses LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if log_file is None:
        log_file = os.getenv("LOG_FILE", DEFAULT_LOG_FILE)

    level = resolve_level(log_level)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] "
            "%(filename)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.INFO))
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


class LoggerContext:
    """
    Context manager for logging a timed operation.

    Start and completion are logged at the given level; failures always at
    ERROR. The elapsed time stays available as `duration` after exit.
    """

    def __init__(
        self,
        logger: logging.Logger,
        operation: str,
        level: int = logging.INFO
    ):
        """
        Initialize logger context.

        Args:
            logger: Logger instance
            operation: Name of the operation being logged
            level: Level of the start and completion records
        """
        self.logger = logger
        self.operation = operation
        self.level = level
        self.duration: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self):
        """Enter context and log start."""
        self._started = time.monotonic()
        self.logger.log(self.level, f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context and log completion or error."""
        self.duration = time.monotonic() - self._started

        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation} after {self.duration:.2f}s: {exc_val}",
                exc_info=True
            )
            return False

        self.logger.log(self.level, f"Completed {self.operation} in {self.duration:.2f}s")
        return False
