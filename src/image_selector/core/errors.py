"""Error types raised by the scanning and moving core."""

from pathlib import Path
from typing import Optional


class ImageSelectorError(Exception):
    """Base class for all image-selector errors."""


class DirectoryReadError(ImageSelectorError):
    """A directory could not be listed (missing, not a directory, no access)."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot read directory {self.path}: {cause}")


class DirectoryCreateError(ImageSelectorError):
    """A destination directory could not be created."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot create directory {self.path}: {cause}")


class MoveError(ImageSelectorError):
    """Moving a file failed for a reason other than a filesystem boundary."""

    def __init__(
        self,
        source: Path,
        destination: Path,
        cause: Optional[BaseException] = None,
    ):
        self.source = Path(source)
        self.destination = Path(destination)
        self.cause = cause
        super().__init__(
            f"Failed to move file, source: {self.source}, "
            f"dest: {self.destination}: {cause}"
        )


class InvalidPathError(ImageSelectorError):
    """A path is missing a component the core relies on (e.g. a file name)."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid path {self.path}: {reason}")
