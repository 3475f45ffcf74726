"""
Tests for logging setup
"""

import logging
from taskboard.utils.logger import setup_logger


def test_setup_logger_console_only():
    """Test level name is applied and setup does not stack handlers"""
    logger = setup_logger("taskboard.test_console", level="warning")
    logger = setup_logger("taskboard.test_console", level="warning")

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_setup_logger_writes_file(tmp_path):
    """Test log file receives debug output"""
    log_file = tmp_path / "logs" / "app.log"
    logger = setup_logger("taskboard.test_file", level="INFO", log_file=log_file)

    logger.debug("debug line")
    for handler in logger.handlers:
        handler.flush()

    assert "debug line" in log_file.read_text(encoding="utf-8")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
