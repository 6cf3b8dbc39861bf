"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from .config import DEFAULT_OUTPUT_DIR_NAME
from .errors import BatchCropError, GeometryError, ImageLoadError, SettingsError
from .geometry import CropRect, ImageSize, constrain, default_rect
from .processing import (
    BatchProgress,
    CropResult,
    PillowCropBackend,
    batch_crop,
    can_start_crop,
    collect_image_files,
)
from .settings import SettingsManager
from .utils.console_logger import ensure_console_logger

app = typer.Typer(help="Crop many images with one rectangle")

_LOGGER = logging.getLogger(__name__)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (GeometryError, ImageLoadError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except BatchCropError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    ensure_console_logger(logging.getLogger("batchcrop"), "batchcrop-cli", level=level, use_rich=True)


def _load_settings(path: Optional[Path]) -> SettingsManager:
    manager = SettingsManager(path)
    if path is not None:
        manager.load()
    return manager


def _collect(files: List[Path]) -> list[Path]:
    images = collect_image_files(files)
    if not images:
        typer.echo("Error: no supported image files given", err=True)
        raise typer.Exit(1)
    return images


def _resolve_output_dir(output: Optional[Path], settings: SettingsManager, first: Path) -> Path:
    if output is not None:
        return output
    configured = settings.get("output.directory")
    if configured:
        return Path(configured)
    return first.parent / DEFAULT_OUTPUT_DIR_NAME


def _run_batch(
    images: list[Path],
    rect: CropRect,
    output_dir: Path,
    suffix: str,
    workers: int,
    backend: PillowCropBackend,
) -> list[CropResult]:
    if not can_start_crop(images, rect):
        raise GeometryError(f"Nothing to crop with rectangle {rect}")

    with Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
    ) as progress:
        task = progress.add_task("Cropping", total=len(images))

        def _on_progress(update: BatchProgress) -> None:
            progress.update(task, completed=update.current, description=update.current_file)

        results = batch_crop(
            images,
            rect,
            backend,
            output_dir,
            suffix=suffix,
            progress_callback=_on_progress,
            max_workers=workers,
        )

    failed = [result for result in results if not result.success]
    print(f"[green]Cropped {len(results) - len(failed)} of {len(results)} images into {output_dir}")
    for result in failed:
        print(f"[red]Failed[/red] {result.input_file}: {result.error}")
    if failed:
        raise typer.Exit(1)
    return results


@app.command()
@_handle_errors
def info(
    files: List[Path] = typer.Argument(..., exists=True, help="Images or folders"),
    default_size: Optional[int] = typer.Option(None, "--default-size", min=1),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings file"),
) -> None:
    """Show image sizes and the default crop rectangle for each file."""

    settings = _load_settings(settings_path)
    size = default_size or settings.get("crop.default_size")
    backend = PillowCropBackend()

    table = Table(title="Images")
    table.add_column("File")
    table.add_column("Size", justify="right")
    table.add_column("Default crop", justify="right")
    for path in _collect(files):
        image = backend.read_size(path)
        rect = default_rect(image, size)
        table.add_row(
            str(path),
            f"{image.width} x {image.height}",
            f"{rect.x:g},{rect.y:g},{rect.width:g},{rect.height:g}",
        )
    print(table)


@app.command()
@_handle_errors
def crop(
    files: List[Path] = typer.Argument(..., exists=True, help="Images or folders"),
    rect_text: Optional[str] = typer.Option(None, "--rect", help="x,y,width,height in pixels"),
    default_size: Optional[int] = typer.Option(None, "--default-size", min=1),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory"),
    suffix: Optional[str] = typer.Option(None, "--suffix"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Crop every image with the same rectangle."""

    _configure_logging(verbose)
    settings = _load_settings(settings_path)
    images = _collect(files)
    backend = PillowCropBackend()

    if rect_text is not None:
        rect = CropRect.parse(rect_text)
    else:
        first: ImageSize = backend.read_size(images[0])
        rect = default_rect(first, default_size or settings.get("crop.default_size"))
    _LOGGER.debug("Using crop rectangle %s", rect)

    _run_batch(
        images,
        rect,
        _resolve_output_dir(output, settings, images[0]),
        suffix if suffix is not None else settings.get("output.suffix"),
        workers or settings.get("output.max_workers"),
        backend,
    )


@app.command()
@_handle_errors
def select(
    files: List[Path] = typer.Argument(..., exists=True, help="Images or folders"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory"),
    suffix: Optional[str] = typer.Option(None, "--suffix"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Pick the rectangle on the first image, then crop them all."""

    from .gui.main import run_selector

    _configure_logging(verbose)
    settings = _load_settings(settings_path)
    images = _collect(files)
    backend = PillowCropBackend()

    # Without --settings nothing is written back to the user config.
    rect = run_selector(images[0], settings=settings if settings_path is not None else None)
    if rect is None:
        print("[yellow]Selection cancelled")
        raise typer.Exit(1)
    rect = constrain(rect, backend.read_size(images[0]))
    print(f"Selected {rect.x:g},{rect.y:g},{rect.width:g},{rect.height:g}")

    _run_batch(
        images,
        rect,
        _resolve_output_dir(output, settings, images[0]),
        suffix if suffix is not None else settings.get("output.suffix"),
        workers or settings.get("output.max_workers"),
        backend,
    )


if __name__ == "__main__":
    app()
