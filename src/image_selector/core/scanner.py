"""Directory scanner for discovering candidate images."""

from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from image_selector.core.errors import DirectoryReadError
from image_selector.utils.config import Config
from image_selector.utils.logger import setup_logger

logger = setup_logger(__name__)


class DirectoryScanner:
    """Lists the images directly inside a directory, in enumeration order."""

    def __init__(
        self,
        config: Optional[Config] = None,
        show_progress: bool = False,
        extension: Optional[str] = None,
    ):
        """
        Initialize the directory scanner.

        Args:
            config: Configuration instance (supplies the accepted extension)
            show_progress: Show progress bar while filtering entries
            extension: Accepted extension, overrides the configured one
        """
        self.config = config
        self.show_progress = show_progress

        if extension is None:
            extension = config.extension if config is not None else ".png"
        if not extension.startswith("."):
            extension = f".{extension}"
        self.extension = extension

    def scan_directory(self, directory: Path) -> List[Path]:
        """
        Scan a directory for candidate image files.

        Only direct children are considered. The match against the accepted
        extension is exact and case-sensitive; anything else (including
        subdirectories) is skipped without being reported.

        Args:
            directory: Directory path to scan

        Returns:
            List of image file paths in filesystem enumeration order

        Raises:
            DirectoryReadError: If the directory or one of its entries
                cannot be read
        """
        directory = Path(directory)
        logger.debug(f"Scanning directory: {directory}")

        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise DirectoryReadError(directory, e) from e

        if self.show_progress:
            entry_iter = tqdm(entries, desc="Scanning images", unit="file")
        else:
            entry_iter = entries

        image_files: List[Path] = []
        for entry in entry_iter:
            if not self._is_candidate(entry):
                continue
            try:
                if entry.is_dir():
                    continue
            except OSError as e:
                raise DirectoryReadError(entry, e) from e
            image_files.append(entry)

        logger.info(
            f"Found {len(image_files)} {self.extension} files in {directory}"
        )
        return image_files

    def _is_candidate(self, file_path: Path) -> bool:
        return file_path.suffix == self.extension
