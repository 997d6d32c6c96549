"""Logging configuration for image-selector."""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "image_selector"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Console output goes to stderr so it stays out of the way of the
    terminal view, which renders on stdout.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional file path for log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        fmt="%(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # More verbose in file
        file_format = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


def configure_package_loggers(
    level: int = logging.INFO, log_file: Optional[Path] = None
) -> None:
    """
    Re-apply level and handlers to every image_selector logger.

    Module loggers are created at import time with the defaults; the CLI
    calls this once it knows about --verbose and the configured log file.
    """
    names = [
        name
        for name in logging.root.manager.loggerDict
        if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + ".")
    ]
    for name in names:
        setup_logger(name, level=level, log_file=log_file)
