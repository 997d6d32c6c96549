"""
Image Selector - triage a folder of images into two destinations.

Images are shown one at a time; each is sent to one of two folders and the
view advances to the next remaining image.
"""

__version__ = "0.1.0"
__author__ = "Image Selector Contributors"

from image_selector.core.browse import BrowseState
from image_selector.core.mover import MoveEngine
from image_selector.core.scanner import DirectoryScanner

__all__ = ["BrowseState", "DirectoryScanner", "MoveEngine", "__version__"]
