"""Utility functions for configuration and logging."""

from image_selector.utils.config import Config
from image_selector.utils.logger import setup_logger

__all__ = ["Config", "setup_logger"]
