"""Tests for logging setup."""

import logging

import pytest

from rogue.log_utils import LOG_LEVEL_ENV, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """Test setup_logging."""

    def test_sets_level_and_single_console_handler(self, restore_root_logger, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1

    def test_env_overrides_level(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "error")
        setup_logging(logging.DEBUG)
        assert restore_root_logger.level == logging.ERROR

    def test_log_file(self, restore_root_logger, monkeypatch, tmp_path):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        log_file = tmp_path / "rogue.log"
        setup_logging(logging.INFO, log_file=str(log_file))
        logging.getLogger("rogue.test").info("hello")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
