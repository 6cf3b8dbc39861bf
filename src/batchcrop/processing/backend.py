"""Image backends that perform the actual pixel crop."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from ..errors import CropFailedError, ImageLoadError
from ..geometry import CropRect, ImageSize

_LOGGER = logging.getLogger(__name__)


class CropBackend(Protocol):
    """Minimal contract the batch pipeline needs from an image library."""

    def read_size(self, path: Path) -> ImageSize:
        ...

    def crop(self, source: Path, rect: CropRect, destination: Path) -> Path:
        ...


class PillowCropBackend:
    """Crop images with Pillow.

    Pixels are cropped as stored; EXIF orientation is not applied so that the
    rectangle chosen on screen addresses the same pixels the file contains.
    """

    def __init__(self, *, jpeg_quality: int = 95) -> None:
        self._jpeg_quality = int(jpeg_quality)

    def read_size(self, path: Path) -> ImageSize:
        try:
            with Image.open(path) as image:
                width, height = image.size
        except (OSError, UnidentifiedImageError) as exc:
            raise ImageLoadError(f"Cannot read image {path}: {exc}") from exc
        return ImageSize(int(width), int(height))

    def crop(self, source: Path, rect: CropRect, destination: Path) -> Path:
        try:
            image = Image.open(source)
        except (OSError, UnidentifiedImageError) as exc:
            raise ImageLoadError(f"Cannot open image {source}: {exc}") from exc

        with image:
            box = rect.to_box()
            try:
                cropped = image.crop(box)
                save_kwargs = {}
                if destination.suffix.lower() in {".jpg", ".jpeg"}:
                    if cropped.mode not in ("RGB", "L"):
                        cropped = cropped.convert("RGB")
                    save_kwargs["quality"] = self._jpeg_quality
                destination.parent.mkdir(parents=True, exist_ok=True)
                cropped.save(destination, **save_kwargs)
            except (OSError, ValueError) as exc:
                raise CropFailedError(f"Cannot crop {source} to {destination}: {exc}") from exc

        _LOGGER.debug("Cropped %s with box %s into %s", source, box, destination)
        return destination
