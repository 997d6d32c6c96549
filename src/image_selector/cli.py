"""Command-line interface for image-selector."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from image_selector import __version__
from image_selector.core.browse import BrowseState
from image_selector.core.errors import DirectoryReadError, ImageSelectorError
from image_selector.core.mover import MoveEngine
from image_selector.core.scanner import DirectoryScanner
from image_selector.ui.viewer import TriageUI
from image_selector.utils.config import Config
from image_selector.utils.logger import configure_package_loggers, setup_logger

console = Console()
logger = setup_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="image-selector")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: ~/.image-selector/config.json)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_file: Optional[Path]) -> None:
    """
    Image Selector - sort a folder of images into two destinations, one at a time.
    """
    ctx.ensure_object(dict)
    config = Config(config_file)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    log_file = config.get_log_file()
    if verbose or log_file:
        configure_package_loggers(level=level, log_file=log_file)


@cli.command()
@click.option(
    "--source",
    "-s",
    type=click.Path(file_okay=False, path_type=Path),
    help="Folder with images to triage (default: current directory)",
)
@click.option(
    "--up",
    "-u",
    type=click.Path(file_okay=False, path_type=Path),
    help="Destination for images sent up (W / ↑)",
)
@click.option(
    "--down",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    help="Destination for images sent down (S / ↓)",
)
@click.option("--extension", "-e", help="Image extension (default: from config)")
@click.pass_context
def run(
    ctx: click.Context,
    source: Optional[Path],
    up: Optional[Path],
    down: Optional[Path],
    extension: Optional[str],
) -> None:
    """
    Triage images interactively.

    Example:
        image-selector run --source ~/Pictures/inbox --up keep --down discard
    """
    config: Config = ctx.obj["config"]
    try:
        mover = MoveEngine(config)
    except ValueError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    state = BrowseState(DirectoryScanner(config, extension=extension), mover)
    state.set_destination(0, up)
    state.set_destination(1, down)

    try:
        state.set_source_directory(source or Path.cwd())
    except DirectoryReadError as e:
        # Best-effort default: start empty and let the user refresh.
        logger.warning(str(e))
        console.print(f"[yellow]{escape(str(e))}[/yellow]")

    TriageUI(state, console).run()

    console.print(f"[green]Done.[/green] {len(state.candidates)} images left.")


@cli.command()
@click.option(
    "--path",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    help="Directory to list",
)
@click.option("--extension", "-e", help="Image extension (default: from config)")
@click.option(
    "--show-progress/--no-progress",
    default=None,
    help="Show progress bar (default: from config)",
)
@click.pass_context
def scan(
    ctx: click.Context,
    path: Path,
    extension: Optional[str],
    show_progress: Optional[bool],
) -> None:
    """
    List the images that a triage session would show, in order.
    """
    config: Config = ctx.obj["config"]
    if show_progress is None:
        show_progress = bool(config.get("scan.show_progress", False))

    scanner = DirectoryScanner(config, show_progress=show_progress, extension=extension)
    try:
        images = scanner.scan_directory(path)
    except DirectoryReadError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    if not images:
        console.print(f"[yellow]No {scanner.extension} images found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("File")
    for number, image in enumerate(images, 1):
        table.add_row(str(number), escape(image.name))

    console.print(table)
    console.print(f"[green]Total:[/green] {len(images)}")


@cli.command()
@click.argument("source", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("dest_dir", type=click.Path(file_okay=False, path_type=Path))
@click.pass_context
def move(ctx: click.Context, source: Path, dest_dir: Path) -> None:
    """
    Move SOURCE into DEST_DIR without overwriting anything there.
    """
    config: Config = ctx.obj["config"]
    try:
        destination = MoveEngine(config).move(source, dest_dir)
    except (ImageSelectorError, ValueError) as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Moved to:[/green] {escape(str(destination))}")


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
