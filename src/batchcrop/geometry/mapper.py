"""
Coordinate conversions between original, base display and viewport space.

All functions are pure.  A ``viewport`` of ``None`` stands for the identity
transform, so the plain and the zoom-aware conversions share one code path.
Callers must check :func:`has_geometry` first: a zero display size is a
precondition violation here, not something these helpers try to recover from.
"""

from __future__ import annotations

import math

from ..config import CONTAINER_PADDING, FALLBACK_DISPLAY_SIZE
from .types import DisplaySize, ImageSize
from .viewport import ViewportTransform


def has_geometry(image: ImageSize | None, display: DisplaySize | None) -> bool:
    """Return True when both sizes are present and strictly positive."""

    return image is not None and display is not None and image.is_valid and display.is_valid


def original_to_display(
    x: float, y: float, image: ImageSize, display: DisplaySize
) -> tuple[float, float]:
    """Map original pixel coordinates to base display coordinates."""

    scale_x = display.width / image.width
    scale_y = display.height / image.height
    return x * scale_x, y * scale_y


def display_to_original(
    x: float, y: float, image: ImageSize, display: DisplaySize
) -> tuple[int, int]:
    """Map base display coordinates back to original pixels.

    The result is floored onto the pixel grid.  Rounding instead would shift
    hit-test boundaries by one pixel relative to :func:`original_to_display`.
    """

    scale_x = image.width / display.width
    scale_y = image.height / display.height
    return math.floor(x * scale_x), math.floor(y * scale_y)


def screen_to_base(
    x: float,
    y: float,
    display: DisplaySize,
    viewport: ViewportTransform | None = None,
) -> tuple[float, float]:
    """Undo the viewport's scale-about-origin, yielding base display space."""

    if viewport is None:
        return x, y
    origin_x, origin_y = viewport.origin_pixels(display)
    base_x = origin_x + (x - origin_x) / viewport.scale - viewport.translate_x
    base_y = origin_y + (y - origin_y) / viewport.scale - viewport.translate_y
    return base_x, base_y


def base_to_screen(
    x: float,
    y: float,
    display: DisplaySize,
    viewport: ViewportTransform | None = None,
) -> tuple[float, float]:
    """Apply the viewport's scale-about-origin to a base display point."""

    if viewport is None:
        return x, y
    origin_x, origin_y = viewport.origin_pixels(display)
    screen_x = origin_x + (x + viewport.translate_x - origin_x) * viewport.scale
    screen_y = origin_y + (y + viewport.translate_y - origin_y) * viewport.scale
    return screen_x, screen_y


def screen_to_original(
    x: float,
    y: float,
    image: ImageSize,
    display: DisplaySize,
    viewport: ViewportTransform | None = None,
) -> tuple[int, int]:
    """Map a pointer position on the rendering surface to original pixels.

    The viewport scale is removed around its origin first and only then is
    the point rescaled to original pixels; swapping the two steps gives wrong
    coordinates whenever the scale differs from 1.
    """

    base_x, base_y = screen_to_base(x, y, display, viewport)
    return display_to_original(base_x, base_y, image, display)


def original_to_screen(
    x: float,
    y: float,
    image: ImageSize,
    display: DisplaySize,
    viewport: ViewportTransform | None = None,
) -> tuple[float, float]:
    """Map original pixels to unrounded screen coordinates."""

    base_x, base_y = original_to_display(x, y, image, display)
    return base_to_screen(base_x, base_y, display, viewport)


def compute_display_size(
    image: ImageSize | None,
    container_width: float,
    container_height: float,
    image_scale: float = 1.0,
    padding: float = CONTAINER_PADDING,
) -> DisplaySize:
    """Return the base display size that fits *image* inside the container.

    The fit scale never exceeds 1.0 so small images are not upscaled; the
    user controlled *image_scale* layer is applied on top of it.
    """

    if image is None or not image.is_valid:
        return DisplaySize(0, 0)

    available_w = container_width - padding
    available_h = container_height - padding
    fit_scale = min(available_w / image.width, available_h / image.height, 1.0)
    final_scale = fit_scale * image_scale

    width = round(image.width * final_scale)
    height = round(image.height * final_scale)
    if width <= 0 or height <= 0:
        return DisplaySize(*FALLBACK_DISPLAY_SIZE)
    return DisplaySize(width, height)
