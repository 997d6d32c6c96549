"""Core scanning, moving and navigation logic."""

from image_selector.core.browse import BrowseState
from image_selector.core.errors import (
    DirectoryCreateError,
    DirectoryReadError,
    ImageSelectorError,
    InvalidPathError,
    MoveError,
)
from image_selector.core.mover import MoveEngine
from image_selector.core.scanner import DirectoryScanner

__all__ = [
    "BrowseState",
    "DirectoryCreateError",
    "DirectoryReadError",
    "DirectoryScanner",
    "ImageSelectorError",
    "InvalidPathError",
    "MoveEngine",
    "MoveError",
]
