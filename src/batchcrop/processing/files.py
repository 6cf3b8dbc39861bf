"""Helpers for turning command line paths into a list of image files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..config import SUPPORTED_EXTENSIONS


def is_supported_image(path: Path) -> bool:
    """Return True when *path* has an image extension we can crop."""

    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def collect_image_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories and keep supported images, preserving order.

    Directory contents are sorted by name; files listed twice are kept once.
    """

    seen: set[Path] = set()
    collected: list[Path] = []

    def _add(candidate: Path) -> None:
        key = candidate.resolve()
        if key in seen or not is_supported_image(candidate):
            return
        seen.add(key)
        collected.append(candidate)

    for path in paths:
        if path.is_dir():
            for child in sorted(path.iterdir(), key=lambda item: item.name.lower()):
                if child.is_file():
                    _add(child)
        elif path.is_file():
            _add(path)
    return collected
