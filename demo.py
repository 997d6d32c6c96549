"""
End-to-end demo script to showcase a triage session.

Creates sample images, sorts them into two folders, and demonstrates collision
handling and recovery from files that vanish behind the tool's back.
"""

from pathlib import Path
from tempfile import TemporaryDirectory

from PIL import Image
from rich.console import Console

from image_selector.core.browse import BrowseState
from image_selector.core.mover import MoveEngine
from image_selector.core.scanner import DirectoryScanner
from image_selector.ui.viewer import TriageUI


def create_demo_images(inbox: Path) -> None:
    """
    Create sample images for demonstration.

    Args:
        inbox: Directory to create images in
    """
    print(f"Creating demo images in: {inbox}")
    inbox.mkdir(parents=True, exist_ok=True)

    colors = {
        "sunset": (255, 120, 40),
        "forest": (34, 139, 34),
        "ocean": (0, 105, 148),
        "blurry": (128, 128, 128),
    }
    for name, color in colors.items():
        Image.new("RGB", (640, 480), color=color).save(inbox / f"{name}.png", "PNG")

    # Not a candidate: wrong extension
    Image.new("RGB", (320, 240), color=(0, 0, 0)).save(inbox / "notes.jpg", "JPEG")

    print(f"✓ Created {len(colors)} PNG images and 1 JPEG")


def main():
    """Run the demo."""
    console = Console()
    console.rule("[bold cyan]IMAGE SELECTOR - END-TO-END DEMO[/bold cyan]")

    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        inbox = root / "inbox"
        keep = root / "keep"
        discard = root / "discard"

        create_demo_images(inbox)

        # A file already waiting in "keep" forces a collision later
        keep.mkdir()
        Image.new("RGB", (10, 10)).save(keep / "forest.png", "PNG")

        state = BrowseState(DirectoryScanner(), MoveEngine())
        state.set_source_directory(inbox)
        state.set_destination(0, keep)
        state.set_destination(1, discard)
        ui = TriageUI(state, console)

        console.print("\n[bold]1. Initial state[/bold]")
        ui.render()

        console.print("\n[bold]2. Sorting every image by name[/bold]")
        while state.has_current:
            current = state.current
            if current.name == "ocean.png" and (inbox / "sunset.png").exists():
                # Simulate another program taking an image while we browse
                (inbox / "sunset.png").unlink()
                console.print("[dim]sunset.png deleted externally[/dim]")
            slot = 1 if current.stem == "blurry" else 0
            moved_to = state.move_current_to(slot)
            if moved_to is not None:
                console.print(f"  {current.name} -> {moved_to.relative_to(root)}")
            else:
                console.print(f"  {current.name} vanished, list rescanned")

        console.print("\n[bold]3. Final state[/bold]")
        ui.render()

        console.print("\n[bold]Results:[/bold]")
        for folder in (keep, discard):
            names = sorted(p.name for p in folder.iterdir())
            console.print(f"  {folder.name}: {', '.join(names)}")

    console.rule("[bold green]Demo complete[/bold green]")


if __name__ == "__main__":
    main()
