"""
Projection of the crop rectangle onto the rendering surface.

The overlay is computed in floating point all the way through and rounded to
device pixels only in :func:`project`.  Hit testing uses the unrounded
:func:`project_bounds` so that painting and pointer classification agree.
"""

from __future__ import annotations

from .mapper import has_geometry, original_to_display
from .types import CropHandle, CropRect, DisplaySize, ImageSize, ScreenBounds, ScreenRect
from .viewport import ViewportTransform


def project_bounds(
    image: ImageSize | None,
    display: DisplaySize | None,
    rect: CropRect | None,
    viewport: ViewportTransform | None = None,
) -> ScreenBounds | None:
    """Return the unrounded screen rectangle for *rect*, or None.

    None means there is nothing to draw: geometry is missing, the rectangle
    is empty, or it would be thinner than one screen pixel.
    """

    if rect is None or not has_geometry(image, display):
        return None
    if rect.width <= 0 or rect.height <= 0:
        return None

    base_left, base_top = original_to_display(rect.x, rect.y, image, display)
    base_width, base_height = original_to_display(rect.width, rect.height, image, display)

    if viewport is None:
        left, top = base_left, base_top
        width, height = base_width, base_height
    else:
        origin_x, origin_y = viewport.origin_pixels(display)
        left = origin_x + (base_left + viewport.translate_x - origin_x) * viewport.scale
        top = origin_y + (base_top + viewport.translate_y - origin_y) * viewport.scale
        width = base_width * viewport.scale
        height = base_height * viewport.scale

    if width < 1 or height < 1:
        return None
    return ScreenBounds(left, top, width, height)


def project(
    image: ImageSize | None,
    display: DisplaySize | None,
    rect: CropRect | None,
    viewport: ViewportTransform | None = None,
) -> ScreenRect | None:
    """Return the crop overlay rectangle in integer device pixels."""

    bounds = project_bounds(image, display, rect, viewport)
    if bounds is None:
        return None
    return ScreenRect(
        round(bounds.left),
        round(bounds.top),
        round(bounds.width),
        round(bounds.height),
    )


def handle_anchors(bounds: ScreenBounds) -> dict[CropHandle, tuple[float, float]]:
    """Return the screen-space anchor point of each resize grip."""

    left, top = bounds.left, bounds.top
    right, bottom = bounds.right, bounds.bottom
    mid_x = left + bounds.width / 2.0
    mid_y = top + bounds.height / 2.0
    return {
        CropHandle.NW: (left, top),
        CropHandle.NE: (right, top),
        CropHandle.SW: (left, bottom),
        CropHandle.SE: (right, bottom),
        CropHandle.N: (mid_x, top),
        CropHandle.S: (mid_x, bottom),
        CropHandle.W: (left, mid_y),
        CropHandle.E: (right, mid_y),
    }
