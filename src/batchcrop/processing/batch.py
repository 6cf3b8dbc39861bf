"""Apply one crop rectangle to many image files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_OUTPUT_SUFFIX
from ..geometry import CropRect, constrain, is_usable
from .backend import CropBackend

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchProgress:
    """Progress snapshot passed to the progress callback."""

    progress: int
    current: int
    total: int
    current_file: str


@dataclass(frozen=True)
class CropResult:
    """Outcome of cropping one input file."""

    input_file: Path
    success: bool
    output_file: Optional[Path] = None
    error: Optional[str] = None


ProgressCallback = Callable[[BatchProgress], None]


def can_start_crop(files: Sequence[Path], rect: CropRect | None) -> bool:
    """Return True when there is something to crop and a usable rectangle."""

    return len(files) > 0 and is_usable(rect)


def output_path_for(source: Path, output_dir: Path, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> Path:
    """Return ``<output_dir>/<stem><suffix><ext>`` for *source*."""

    return output_dir / f"{source.stem}{suffix}{source.suffix}"


def get_unique_destination(destination: Path, reserved: set[Path] | None = None) -> Path:
    """Return *destination* or a variant with a counter if it is taken."""

    taken = reserved if reserved is not None else set()
    if not destination.exists() and destination not in taken:
        return destination

    parent = destination.parent
    stem = destination.stem
    suffix = destination.suffix
    counter = 1
    while True:
        candidate = parent / f"{stem} ({counter}){suffix}"
        if not candidate.exists() and candidate not in taken:
            return candidate
        counter += 1


def _crop_one(backend: CropBackend, source: Path, rect: CropRect, destination: Path) -> CropResult:
    try:
        # The rectangle was drawn on one image; other files in the batch may
        # be smaller, so it is re-normalised against each file's own size.
        size = backend.read_size(source)
        file_rect = constrain(rect, size)
        written = backend.crop(source, file_rect, destination)
    except Exception as exc:
        _LOGGER.exception("Crop failed for %s", source)
        return CropResult(input_file=source, success=False, error=str(exc))
    return CropResult(input_file=source, success=True, output_file=written)


def batch_crop(
    files: Sequence[Path],
    rect: CropRect,
    backend: CropBackend,
    output_dir: Path,
    *,
    suffix: str = DEFAULT_OUTPUT_SUFFIX,
    progress_callback: ProgressCallback | None = None,
    max_workers: int = 1,
) -> list[CropResult]:
    """Crop every file in *files* with *rect* and write the results.

    A failure on one file is logged and reported in its :class:`CropResult`;
    the remaining files are still processed.  Results keep the input order.
    """

    total = len(files)
    output_dir.mkdir(parents=True, exist_ok=True)

    reserved: set[Path] = set()
    destinations: list[Path] = []
    for source in files:
        destination = get_unique_destination(output_path_for(source, output_dir, suffix), reserved)
        reserved.add(destination)
        destinations.append(destination)

    def _report(current: int, name: str) -> None:
        if progress_callback is None or total == 0:
            return
        progress_callback(
            BatchProgress(
                progress=round(current / total * 100),
                current=current,
                total=total,
                current_file=name,
            )
        )

    results: list[CropResult | None] = [None] * total
    if max_workers <= 1:
        for index, source in enumerate(files):
            _report(index, source.name)
            results[index] = _crop_one(backend, source, rect, destinations[index])
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {
                pool.submit(_crop_one, backend, source, rect, destinations[index]): index
                for index, source in enumerate(files)
            }
            completed = 0
            for future in as_completed(futures):
                index = futures[future]
                results[index] = future.result()
                # Files finish out of order, so workers report completions.
                completed += 1
                _report(completed, files[index].name)

    _report(total, "done")
    final = [result for result in results if result is not None]
    failed = sum(1 for result in final if not result.success)
    _LOGGER.info("Batch crop finished: %d succeeded, %d failed", total - failed, failed)
    return final
