"""Test logging setup."""

import logging

from image_selector.utils.logger import configure_package_loggers, setup_logger


def test_setup_logger_replaces_handlers():
    """Test that repeated setup does not stack handlers."""
    logger = setup_logger("image_selector.tests.once")
    setup_logger("image_selector.tests.once")

    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_setup_logger_with_file(tmp_path):
    """Test that the file handler receives debug output."""
    log_file = tmp_path / "logs" / "selector.log"
    logger = setup_logger("image_selector.tests.file", log_file=log_file)

    logger.debug("hidden from console")
    logger.info("moved something")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "moved something" in content
    assert "image_selector.tests.file" in content


def test_configure_package_loggers_sets_level():
    """Test that existing package loggers pick up the new level."""
    logger = setup_logger("image_selector.tests.level")
    other = logging.getLogger("someone_else")
    other.setLevel(logging.WARNING)

    configure_package_loggers(level=logging.DEBUG)

    assert logger.level == logging.DEBUG
    assert other.level == logging.WARNING

    configure_package_loggers(level=logging.INFO)
