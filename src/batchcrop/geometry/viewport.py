"""Zoom state for the crop canvas and the pure transitions that update it."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from ..config import BUTTON_ZOOM_STEP, MAX_VIEWPORT_SCALE, MIN_VIEWPORT_SCALE
from .types import DisplaySize

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewportTransform:
    """Scale-about-a-point transform layered on top of the base display size.

    ``origin_x`` and ``origin_y`` are percentages of the display size, the way
    a CSS ``transform-origin`` or a Qt painter translation would express them.
    """

    scale: float = 1.0
    origin_x: float = 50.0
    origin_y: float = 50.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    @property
    def is_identity(self) -> bool:
        return (
            abs(self.scale - 1.0) <= 1e-9
            and abs(self.translate_x) <= 1e-9
            and abs(self.translate_y) <= 1e-9
        )

    def origin_pixels(self, display: DisplaySize) -> tuple[float, float]:
        """Return the transform origin in base display pixels."""
        return (
            self.origin_x / 100.0 * display.width,
            self.origin_y / 100.0 * display.height,
        )

    def as_descriptor(self) -> dict[str, Any]:
        """Return a render-ready description of the transform."""
        return {
            "scale": self.scale,
            "origin_x": self.origin_x,
            "origin_y": self.origin_y,
            "translate_x": self.translate_x,
            "translate_y": self.translate_y,
            "transform": (
                f"scale({self.scale}) "
                f"translate({self.translate_x}px, {self.translate_y}px)"
            ),
            "transform_origin": f"{self.origin_x}% {self.origin_y}%",
        }


IDENTITY_VIEWPORT = ViewportTransform()


def clamp_scale(scale: float) -> float:
    return max(MIN_VIEWPORT_SCALE, min(MAX_VIEWPORT_SCALE, scale))


def zoom_at_point(
    viewport: ViewportTransform,
    scale_factor: float,
    pointer_x: float,
    pointer_y: float,
    display_width: float,
    display_height: float,
) -> ViewportTransform:
    """Zoom so the image appears to scale under the pointer.

    Moving the transform origin onto the pointer is enough to keep the point
    under the cursor fixed; no translation is computed.  When the clamped
    scale does not change the input transform is returned as-is.
    """

    new_scale = clamp_scale(viewport.scale * scale_factor)
    if new_scale == viewport.scale:
        return viewport
    if display_width <= 0 or display_height <= 0:
        return viewport

    origin_x = max(0.0, min(100.0, pointer_x / display_width * 100.0))
    origin_y = max(0.0, min(100.0, pointer_y / display_height * 100.0))
    _LOGGER.debug(
        "Wheel zoom %.3f -> %.3f at (%.1f%%, %.1f%%)",
        viewport.scale,
        new_scale,
        origin_x,
        origin_y,
    )
    return ViewportTransform(
        scale=new_scale,
        origin_x=origin_x,
        origin_y=origin_y,
        translate_x=viewport.translate_x,
        translate_y=viewport.translate_y,
    )


def zoom_by_step(viewport: ViewportTransform, scale_factor: float) -> ViewportTransform:
    """Zoom about the image centre, discarding any pointer-centred origin."""

    return ViewportTransform(scale=clamp_scale(viewport.scale * scale_factor))


def reset_viewport() -> ViewportTransform:
    return IDENTITY_VIEWPORT


class ViewportController:
    """Own the viewport transform of the currently displayed image."""

    def __init__(
        self,
        *,
        on_changed: Optional[Callable[[ViewportTransform], None]] = None,
        zoom_step: float = BUTTON_ZOOM_STEP,
    ) -> None:
        self._transform = IDENTITY_VIEWPORT
        self._on_changed = on_changed
        self._zoom_step = float(zoom_step)

    @property
    def transform(self) -> ViewportTransform:
        return self._transform

    def zoom_at_point(
        self,
        scale_factor: float,
        pointer_x: float,
        pointer_y: float,
        display: DisplaySize,
    ) -> ViewportTransform:
        return self._apply(
            zoom_at_point(
                self._transform,
                scale_factor,
                pointer_x,
                pointer_y,
                display.width,
                display.height,
            )
        )

    def zoom_by_step(self, scale_factor: float) -> ViewportTransform:
        return self._apply(zoom_by_step(self._transform, scale_factor))

    def zoom_in(self) -> ViewportTransform:
        return self.zoom_by_step(self._zoom_step)

    def zoom_out(self) -> ViewportTransform:
        return self.zoom_by_step(1.0 / self._zoom_step)

    def reset(self) -> ViewportTransform:
        return self._apply(reset_viewport())

    def _apply(self, transform: ViewportTransform) -> ViewportTransform:
        if transform == self._transform:
            return self._transform
        self._transform = transform
        if self._on_changed is not None:
            self._on_changed(transform)
        return transform
