"""Single-file move with collision avoidance and cross-device fallback."""

import errno
import os
import shutil
from pathlib import Path
from typing import Optional

from image_selector.core.errors import (
    DirectoryCreateError,
    InvalidPathError,
    MoveError,
)
from image_selector.utils.config import Config
from image_selector.utils.logger import setup_logger

logger = setup_logger(__name__)


class MoveEngine:
    """Moves one file at a time into a destination directory.

    Existing files are never overwritten: a taken name is extended with the
    collision separator until a free one is found, so ``photo.png`` becomes
    ``photo_.png``, then ``photo__.png``. When the destination is on another
    filesystem the file is copied and the source removed afterwards; an
    interruption between the two steps can leave both copies behind.
    """

    def __init__(self, config: Optional[Config] = None, separator: Optional[str] = None):
        """
        Initialize the move engine.

        Args:
            config: Configuration instance (supplies the collision separator)
            separator: Collision separator, overrides the configured one

        Raises:
            ValueError: If the separator is empty or contains a path separator
        """
        if separator is None:
            separator = config.collision_separator if config is not None else "_"
        if not separator or any(
            sep and sep in separator for sep in (os.sep, os.altsep)
        ):
            raise ValueError(f"Invalid collision separator: {separator!r}")
        self.separator = separator

    def move(self, source: Path, dest_dir: Path) -> Path:
        """
        Move ``source`` into ``dest_dir``.

        Args:
            source: File to move
            dest_dir: Destination directory (created if missing)

        Returns:
            The destination path actually used

        Raises:
            InvalidPathError: If ``source`` has no file name
            DirectoryCreateError: If ``dest_dir`` cannot be created
            MoveError: If the rename, copy or delete fails
        """
        source = Path(source)
        dest_dir = Path(dest_dir)

        if not source.name:
            raise InvalidPathError(source, "no file name component")

        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(dest_dir, e) from e

        destination = self.resolve_destination(dest_dir / source.name)

        try:
            os.rename(source, destination)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise MoveError(source, destination, e) from e
            logger.debug(
                f"Rename crosses filesystems, copying instead: {source} -> {destination}"
            )
            self._copy_then_delete(source, destination)

        logger.info(f"Moved: {source} -> {destination}")
        return destination

    def resolve_destination(self, target: Path) -> Path:
        """
        Return ``target`` or, if it is taken, the first free variant of it.

        Each candidate extends the previous stem by one separator and keeps
        the original suffix.

        Args:
            target: Preferred destination path

        Returns:
            A path that did not exist at the time of the check
        """
        if not target.exists():
            return target

        stem = target.stem
        suffix = target.suffix
        candidate = target
        while candidate.exists():
            stem += self.separator
            candidate = target.with_name(f"{stem}{suffix}")

        logger.debug(f"Name collision: {target.name} -> {candidate.name}")
        return candidate

    def _copy_then_delete(self, source: Path, destination: Path) -> None:
        try:
            shutil.copy2(source, destination)
        except OSError as e:
            self._discard_partial_copy(destination)
            raise MoveError(source, destination, e) from e

        try:
            source.unlink()
        except OSError as e:
            logger.warning(
                f"Copied {source} to {destination} but could not remove the source"
            )
            raise MoveError(source, destination, e) from e

    def _discard_partial_copy(self, destination: Path) -> None:
        try:
            destination.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to remove partial copy {destination}: {e}")
