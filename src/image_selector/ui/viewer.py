"""
Keyboard-driven terminal view for triaging images.

Shows the current image's details and routes keypresses to the browse state.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

import click
from PIL import Image
from rich import box
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from image_selector.core.browse import BrowseState
from image_selector.core.errors import (
    DirectoryCreateError,
    DirectoryReadError,
    MoveError,
)

logger = logging.getLogger(__name__)

# Action names understood by TriageUI.dispatch
MOVE_UP = "move_up"
MOVE_DOWN = "move_down"
PREVIOUS = "previous"
NEXT = "next"
REFRESH = "refresh"
EDIT_SOURCE = "edit_source"
EDIT_UP = "edit_up"
EDIT_DOWN = "edit_down"
QUIT = "quit"

KEY_BINDINGS: Dict[str, str] = {
    "w": MOVE_UP,
    "\x1b[A": MOVE_UP,
    "\xe0H": MOVE_UP,
    "s": MOVE_DOWN,
    "\x1b[B": MOVE_DOWN,
    "\xe0P": MOVE_DOWN,
    "a": PREVIOUS,
    "\x1b[D": PREVIOUS,
    "\xe0K": PREVIOUS,
    "d": NEXT,
    "\x1b[C": NEXT,
    "\xe0M": NEXT,
    "r": REFRESH,
    "o": EDIT_SOURCE,
    "1": EDIT_UP,
    "2": EDIT_DOWN,
    "q": QUIT,
    "\x1b": QUIT,
}

SLOT_ARROWS = ("↑", "↓")


def prompt_path(label: str, current: Optional[Path]) -> str:
    """Ask for a folder on the terminal. An empty answer means none."""
    if current is not None:
        label = f"{label} (now {current})"
    return click.prompt(label, default="", show_default=False)


class ImageMetadata:
    """Image details shown next to the file name."""

    def __init__(self, path: Path):
        """
        Read metadata for an image.

        Args:
            path: Path to the image file
        """
        self.path = path
        self.size_bytes = 0
        self.modified: Optional[datetime] = None
        self.width: Optional[int] = None
        self.height: Optional[int] = None
        self.format: Optional[str] = None

        try:
            stat = path.stat()
            self.size_bytes = stat.st_size
            self.modified = datetime.fromtimestamp(stat.st_mtime)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return

        try:
            with Image.open(path) as img:
                self.width, self.height = img.size
                self.format = img.format
        except Exception as e:
            logger.debug(f"Could not read image metadata for {path}: {e}")

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024

    @property
    def resolution(self) -> Optional[str]:
        """Resolution as 'WIDTHxHEIGHT' or None."""
        if self.width and self.height:
            return f"{self.width}x{self.height}"
        return None


class TriageUI:
    """Terminal front end over a BrowseState."""

    def __init__(
        self,
        state: BrowseState,
        console: Optional[Console] = None,
        prompt: Callable[[str, Optional[Path]], str] = prompt_path,
    ):
        """
        Initialize the triage view.

        Args:
            state: Browse state to drive
            console: Rich console instance (creates new one if None)
            prompt: Function asking for a folder, given a label and the
                current value
        """
        self.state = state
        self.console = console or Console()
        self.prompt = prompt
        self.status: Optional[str] = None

    def render(self) -> None:
        """Draw the current state."""
        details = Table(show_header=False, box=None, padding=(0, 1))
        details.add_column("Key", style="cyan")
        details.add_column("Value")

        source = self.state.source_directory
        details.add_row("Source", escape(str(source)) if source else "[dim]not set[/dim]")
        for slot, destination in enumerate(self.state.destinations):
            details.add_row(
                f"Send to {SLOT_ARROWS[slot]}",
                escape(str(destination)) if destination else "[dim]not set[/dim]",
            )

        current = self.state.current
        if current is None:
            body = Text("No images", style="yellow")
            title = "Image Selector"
        else:
            body = self._image_table(current)
            title = (
                f"Image Selector ({self.state.index + 1}/"
                f"{len(self.state.candidates)})"
            )

        parts = [details, Text(""), body]
        if self.status:
            parts.extend([Text(""), Text(self.status, style="bold red")])
        parts.extend([Text(""), Text(self._help_line(), style="dim")])

        self.console.print(Panel(Group(*parts), title=title, box=box.ROUNDED))

    def _image_table(self, path: Path) -> Table:
        metadata = ImageMetadata(path)
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Key", style="magenta")
        table.add_column("Value")
        table.add_row("File", f"[bold]{escape(path.name)}[/bold]")
        table.add_row("Resolution", metadata.resolution or "N/A")
        table.add_row("Size", f"{metadata.size_kb:.1f} KB")
        table.add_row(
            "Modified",
            metadata.modified.strftime("%Y-%m-%d %H:%M")
            if metadata.modified
            else "N/A",
        )
        return table

    def _help_line(self) -> str:
        moves = [
            f"[{key}] send {SLOT_ARROWS[slot]}"
            for slot, key in enumerate(("W/↑", "S/↓"))
            if self.state.is_slot_configured(slot)
        ]
        keys = ["[A/←] prev", "[D/→] next", "[R] refresh", "[O] source"]
        keys += ["[1/2] destinations", "[Q] quit"]
        return "  ".join(moves + keys)

    def handle_key(self, key: str) -> bool:
        """
        Handle one keypress.

        Args:
            key: Key as returned by click.getchar

        Returns:
            False if the user asked to quit, True otherwise
        """
        action = KEY_BINDINGS.get(key) or KEY_BINDINGS.get(key.lower())
        if action is None:
            return True
        return self.dispatch(action)

    def dispatch(self, action: str) -> bool:
        """Run ``action`` against the state, reporting failures as status."""
        if action == QUIT:
            return False

        self.status = None
        try:
            if action == MOVE_UP:
                self._move(0)
            elif action == MOVE_DOWN:
                self._move(1)
            elif action == PREVIOUS:
                self.state.previous()
            elif action == NEXT:
                self.state.next()
            elif action == REFRESH:
                self.state.refresh()
            elif action == EDIT_SOURCE:
                self._edit_source()
            elif action == EDIT_UP:
                self._edit_destination(0)
            elif action == EDIT_DOWN:
                self._edit_destination(1)
        except (DirectoryReadError, DirectoryCreateError, MoveError) as e:
            logger.error(str(e))
            self.status = str(e)
        return True

    def _move(self, slot: int) -> None:
        moved_to = self.state.move_current_to(slot)
        if moved_to is not None:
            logger.debug(f"Sent to {SLOT_ARROWS[slot]}: {moved_to}")

    def _ask(self, label: str, current: Optional[Path]) -> Optional[str]:
        try:
            return self.prompt(label, current).strip()
        except click.Abort:
            return None

    def _edit_source(self) -> None:
        answer = self._ask("Source folder, empty to keep", self.state.source_directory)
        if answer:
            self.state.set_source_directory(Path(answer).expanduser())

    def _edit_destination(self, slot: int) -> None:
        answer = self._ask(
            f"Send to {SLOT_ARROWS[slot]} folder, empty to unset",
            self.state.destinations[slot],
        )
        if answer is None:
            return
        self.state.set_destination(slot, Path(answer).expanduser() if answer else None)

    def run(self, read_key: Callable[[], str] = click.getchar) -> None:
        """
        Render and process keys until the user quits.

        Args:
            read_key: Function returning the next keypress
        """
        while True:
            self.console.clear()
            self.render()
            try:
                key = read_key()
            except (KeyboardInterrupt, EOFError):
                break
            if not key or not self.handle_key(key):
                break
