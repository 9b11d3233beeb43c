"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from vibe_profiler.logging_config import ROOT_LOGGER, get_logger, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(ROOT_LOGGER)
    before = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in [h for h in logger.handlers if h not in before]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


class TestGetLogger:
    def test_namespaced(self):
        """Short names are placed under the package logger."""
        assert get_logger("personas.engine").name == "vibe_profiler.personas.engine"

    def test_module_name_kept(self):
        """``__name__`` of an engine module is used as is."""
        assert get_logger("vibe_profiler.coverage.probe").name == "vibe_profiler.coverage.probe"

    def test_root(self):
        """No name gives the package logger."""
        assert get_logger().name == ROOT_LOGGER


class TestSetupLogging:
    def test_default_level_is_warning(self, package_logger):
        """Without flags only warnings and errors are shown."""
        assert setup_logging().level == logging.WARNING

    def test_verbose_and_quiet(self, package_logger):
        """Quiet wins over verbose."""
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(verbose=True, quiet=True).level == logging.ERROR

    def test_repeated_setup_replaces_handlers(self, package_logger):
        """Each call leaves exactly one console handler."""
        setup_logging()
        setup_logging(verbose=True)
        rich_handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert rich_handlers[0].level == logging.DEBUG

    def test_root_logger_untouched(self, package_logger):
        """Handlers go on the package logger, not the root logger."""
        root_handlers = list(logging.getLogger().handlers)
        setup_logging()
        assert logging.getLogger().handlers == root_handlers

    def test_log_file(self, package_logger, tmp_path):
        """Records are written to the log file with their logger name."""
        path = tmp_path / "profiler.log"
        setup_logging(log_file=str(path))
        get_logger("personas.engine").warning("Persona %s matched (%s)", "x", "B in [40,60]")
        for handler in package_logger.handlers:
            handler.flush()
        text = path.read_text(encoding="utf-8")
        assert "vibe_profiler.personas.engine - WARNING" in text
        assert "B in [40,60]" in text
