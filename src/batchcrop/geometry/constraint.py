"""Normalisation rules that keep a crop rectangle inside its image."""

from __future__ import annotations

from ..config import DEFAULT_CROP_SIZE, MIN_CROP_SIZE
from .types import CropRect, ImageSize


def constrain(rect: CropRect, image: ImageSize, min_size: float = MIN_CROP_SIZE) -> CropRect:
    """Return *rect* clamped to *image* with both sides at least *min_size*.

    Position yields before size: a rectangle hanging off the right or bottom
    edge is shifted back first and only shrunk when it is larger than the
    image.  Images smaller than *min_size* still get a *min_size* rectangle,
    which then overhangs the image.
    """

    width = max(min_size, rect.width)
    height = max(min_size, rect.height)
    x = max(0, rect.x)
    y = max(0, rect.y)

    if x + width > image.width:
        x = max(0, image.width - width)
    if y + height > image.height:
        y = max(0, image.height - height)

    width = min(width, image.width - x)
    height = min(height, image.height - y)

    width = max(min_size, width)
    height = max(min_size, height)
    return CropRect(x, y, width, height)


def default_rect(image: ImageSize, default_size: int = DEFAULT_CROP_SIZE) -> CropRect:
    """Return a *default_size* square centred on *image*.

    Each side is capped to the matching image dimension independently.
    """

    x = max(0, (image.width - default_size) // 2)
    y = max(0, (image.height - default_size) // 2)
    return CropRect(
        x,
        y,
        min(default_size, image.width),
        min(default_size, image.height),
    )


def nudge(rect: CropRect, image: ImageSize, dx: float, dy: float) -> CropRect:
    """Move *rect* by a keyboard step without letting it leave the image."""

    x = rect.x + dx
    y = rect.y + dy
    x = max(0, min(x, image.width - rect.width))
    y = max(0, min(y, image.height - rect.height))
    return constrain(CropRect(x, y, rect.width, rect.height), image)


def is_usable(rect: CropRect | None) -> bool:
    """Return True when *rect* describes a non-empty crop."""

    return rect is not None and rect.width > 0 and rect.height > 0
