"""Navigation state over the candidate images of a source directory."""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from image_selector.core.errors import DirectoryReadError
from image_selector.core.mover import MoveEngine
from image_selector.core.scanner import DirectoryScanner
from image_selector.utils.logger import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


class BrowseState:
    """
    Tracks which image the user is looking at.

    The candidate list is a snapshot taken by the scanner. Instead of
    watching the directory, every operation that is about to act on the
    current item first checks it still exists; if it does not, the whole
    list is re-derived from disk and the index goes back to 0.

    Invariant: while the list is non-empty, ``index`` is a valid position
    in it.
    """

    SLOT_COUNT = 2

    def __init__(
        self,
        scanner: Optional[DirectoryScanner] = None,
        mover: Optional[MoveEngine] = None,
    ):
        """
        Initialize an empty browse state.

        Args:
            scanner: Scanner used to (re)build the candidate list
            mover: Engine used to move the current item
        """
        self.scanner = scanner or DirectoryScanner()
        self.mover = mover or MoveEngine()

        self._source_dir: Optional[Path] = None
        self._destinations: List[Optional[Path]] = [None] * self.SLOT_COUNT
        self._candidates: List[Path] = []
        self._index = 0

    # ------------------------------------------------------------------
    # Read-only view

    @property
    def source_directory(self) -> Optional[Path]:
        return self._source_dir

    @property
    def destinations(self) -> Tuple[Optional[Path], ...]:
        return tuple(self._destinations)

    @property
    def candidates(self) -> List[Path]:
        return list(self._candidates)

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_empty(self) -> bool:
        return not self._candidates

    @property
    def has_current(self) -> bool:
        return not self.is_empty

    @property
    def current(self) -> Optional[Path]:
        """Path of the image being viewed, or None when there is none."""
        if self.is_empty:
            return None
        return self._candidates[self._index]

    def is_slot_configured(self, slot: int) -> bool:
        self._check_slot(slot)
        return self._destinations[slot] is not None

    # ------------------------------------------------------------------
    # Transitions

    def set_source_directory(self, path: PathLike) -> None:
        """
        Replace the source directory and rescan it.

        Raises:
            DirectoryReadError: If the directory cannot be listed; the
                candidate list is left empty
        """
        self._source_dir = Path(path)
        self._rescan()

    def set_destination(self, slot: int, path: Optional[PathLike]) -> None:
        """Configure destination ``slot``; an empty value unconfigures it."""
        self._check_slot(slot)
        self._destinations[slot] = Path(path) if path else None
        logger.debug(f"Destination {slot}: {self._destinations[slot]}")

    def refresh(self) -> None:
        """Rescan the current source directory from scratch."""
        self._rescan()

    def next(self) -> None:
        """Advance to the next image, wrapping to the first."""
        if self.is_empty:
            return
        if self._current_is_stale("next"):
            return
        self._index = (self._index + 1) % len(self._candidates)

    def previous(self) -> None:
        """Go back to the previous image, wrapping to the last."""
        if self.is_empty:
            return
        if self._current_is_stale("previous"):
            return
        self._index = (self._index - 1) % len(self._candidates)

    def move_current_to(self, slot: int) -> Optional[Path]:
        """
        Move the current image into destination ``slot``.

        Does nothing when there is no current image or the slot is not
        configured. If the current image has vanished from disk the list is
        rescanned instead.

        Args:
            slot: Destination slot (0 or 1)

        Returns:
            Destination path used, or None if nothing was moved

        Raises:
            ValueError: If ``slot`` is not a valid slot number
            DirectoryCreateError: If the destination cannot be created
            MoveError: If the move fails; the state is left unchanged
            DirectoryReadError: If a triggered rescan fails. When the
                rescan follows moving the last image, the file has already
                been moved and the list is left empty
        """
        self._check_slot(slot)
        destination_dir = self._destinations[slot]
        if self.is_empty or destination_dir is None:
            return None
        if self._current_is_stale("move"):
            return None

        moved_to = self.mover.move(self._candidates[self._index], destination_dir)

        del self._candidates[self._index]
        if self._index >= len(self._candidates):
            self._index = 0
        if not self._candidates:
            logger.info("Last image moved, rescanning for new arrivals")
            self._rescan()

        return moved_to

    # ------------------------------------------------------------------

    def _current_is_stale(self, action: str) -> bool:
        current = self._candidates[self._index]
        if current.exists():
            return False
        logger.info(f"{current} disappeared before {action}, rescanning")
        self._rescan()
        return True

    def _rescan(self) -> None:
        self._index = 0
        if self._source_dir is None:
            self._candidates = []
            return
        try:
            self._candidates = self.scanner.scan_directory(self._source_dir)
        except DirectoryReadError:
            self._candidates = []
            raise

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < self.SLOT_COUNT:
            raise ValueError(f"Destination slot must be 0 or 1, got {slot}")
