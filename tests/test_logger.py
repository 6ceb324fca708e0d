"""
Tests for logging setup and timed operation logging.
"""

import logging
import unittest
from unittest.mock import Mock

import pytest  # type: ignore

from src.zero_hydro.core.logger import LoggerContext, resolve_level, setup_logger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSetupLogger:
    """Test cases for setup_logger."""

    def test_console_only(self):
        """An empty log file path disables the file handler."""
        logger = setup_logger("zero_hydro.test.console", log_file="")

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert not logger.propagate

    def test_file_handler(self, tmp_path):
        """The log directory is created and the file receives debug records."""
        path = tmp_path / "nested" / "run.log"
        logger = setup_logger("zero_hydro.test.file", log_file=str(path), log_level="DEBUG")

        logger.debug("thermal step detail")
        for handler in logger.handlers:
            handler.flush()

        assert logger.level == logging.DEBUG
        assert "thermal step detail" in path.read_text(encoding="utf-8")

    def test_level_from_environment(self, monkeypatch):
        """LOG_LEVEL applies when no level is passed."""
        monkeypatch.setenv("LOG_LEVEL", "warning")

        logger = setup_logger("zero_hydro.test.env", log_file="")

        assert logger.level == logging.WARNING

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        """Calling setup twice does not duplicate handlers."""
        path = str(tmp_path / "run.log")
        setup_logger("zero_hydro.test.repeat", log_file=path)
        logger = setup_logger("zero_hydro.test.repeat", log_file=path)

        assert len(logger.handlers) == 2

    def test_unknown_level(self):
        """Unknown level names are rejected."""
        with pytest.raises(ValueError, match="LOUD"):
            resolve_level("loud")


class TestLoggerContext(unittest.TestCase):
    """Test LoggerContext."""

    def test_success_logs_at_level(self):
        """Start and completion use the requested level and record the duration."""
        logger = Mock()

        with LoggerContext(logger, "simulation of 3 hours", logging.DEBUG) as ctx:
            pass

        levels = [call.args[0] for call in logger.log.call_args_list]
        self.assertEqual(levels, [logging.DEBUG, logging.DEBUG])
        self.assertIn("Completed simulation of 3 hours", logger.log.call_args.args[1])
        self.assertIsNotNone(ctx.duration)
        self.assertGreaterEqual(ctx.duration, 0.0)
        logger.error.assert_not_called()

    def test_failure_logged_and_raised(self):
        """Exceptions are logged at error level and propagate."""
        logger = Mock()

        with self.assertRaises(RuntimeError):
            with LoggerContext(logger, "sync of Lake"):
                raise RuntimeError("boom")

        logger.error.assert_called_once()
        self.assertIn("Failed sync of Lake", logger.error.call_args.args[0])


if __name__ == "__main__":
    unittest.main()
