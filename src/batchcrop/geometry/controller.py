"""
Crop interaction controller.

This module acts as the coordinator for one displayed image: it owns the
current crop rectangle, the drag state machine and the viewport, and turns
toolkit-neutral pointer/keyboard input into callbacks for the hosting widget.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from ..config import DEFAULT_CROP_SIZE, NUDGE_STEP, NUDGE_STEP_LARGE, WHEEL_ZOOM_STEP
from .constraint import constrain, default_rect, nudge
from .hit_tester import HitResult, classify
from .interaction import (
    IDLE,
    GeometryContext,
    InteractionState,
    PointerEvent,
    PointerEventKind,
    TransitionOutput,
    transition,
)
from .mapper import has_geometry
from .projector import project, project_bounds
from .types import CropRect, DisplaySize, ImageSize, InteractionZone, ScreenBounds, ScreenRect
from .viewport import ViewportController, ViewportTransform

_LOGGER = logging.getLogger(__name__)

_NUDGE_DIRECTIONS: dict[str, tuple[int, int]] = {
    "left": (-1, 0),
    "right": (1, 0),
    "up": (0, -1),
    "down": (0, 1),
}

DRAGGING_CURSORS: dict[InteractionZone, str] = {
    InteractionZone.CREATE: "crosshair",
    InteractionZone.MOVE: "grabbing",
}


class CropInteractionController:
    """Manages crop interactions and zoom state for one canvas."""

    def __init__(
        self,
        *,
        on_crop_changed: Callable[[CropRect], None],
        on_cursor_change: Callable[[Optional[str]], None],
        on_request_update: Callable[[], None],
        default_crop_size: int = DEFAULT_CROP_SIZE,
        nudge_step: int = NUDGE_STEP,
        nudge_step_large: int = NUDGE_STEP_LARGE,
    ) -> None:
        """Initialize the crop interaction controller.

        Parameters
        ----------
        on_crop_changed:
            Callback when the crop rectangle changes.
        on_cursor_change:
            Callback with a cursor hint such as ``"nw-resize"``, or None to
            restore the default cursor.
        on_request_update:
            Callback to request a repaint.
        default_crop_size:
            Side of the square placed on a newly shown image.
        nudge_step, nudge_step_large:
            Arrow-key step without and with Shift, in original pixels.
        """
        self._on_crop_changed = on_crop_changed
        self._on_cursor_change = on_cursor_change
        self._on_request_update = on_request_update
        self._default_crop_size = int(default_crop_size)
        self._nudge_step = int(nudge_step)
        self._nudge_step_large = int(nudge_step_large)

        self._image: ImageSize | None = None
        self._display: DisplaySize | None = None
        self._rect: CropRect | None = None
        self._state: InteractionState = IDLE
        self._viewport = ViewportController(on_changed=self._on_viewport_changed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def image(self) -> ImageSize | None:
        return self._image

    @property
    def display_size(self) -> DisplaySize | None:
        return self._display

    @property
    def viewport(self) -> ViewportTransform:
        return self._viewport.transform

    def crop_rect(self) -> CropRect | None:
        return self._rect

    def is_dragging(self) -> bool:
        return self._state.is_dragging

    def set_image(self, image: ImageSize | None) -> None:
        """Switch to a new image, resetting zoom and centring the crop."""
        self._state = IDLE
        self._image = image
        self._viewport.reset()
        if image is None or not image.is_valid:
            self._rect = None
            self._on_request_update()
            return
        self.reset_crop()

    def set_display_size(self, display: DisplaySize | None) -> None:
        self._display = display
        self._on_request_update()

    def set_crop_rect(self, rect: CropRect) -> None:
        """Replace the crop rectangle, normalising it against the image."""
        if self._image is None:
            return
        self._store(constrain(rect, self._image))

    def reset_crop(self) -> None:
        """Put the default square back in the middle of the image."""
        if self._image is None:
            return
        self._store(default_rect(self._image, self._default_crop_size))

    def current_screen_rect(self) -> ScreenRect | None:
        """Return the overlay rectangle in device pixels, if visible."""
        return project(self._image, self._display, self._rect, self._viewport.transform)

    def current_screen_bounds(self) -> ScreenBounds | None:
        return project_bounds(self._image, self._display, self._rect, self._viewport.transform)

    def hit_test(self, x: float, y: float) -> HitResult:
        return classify((x, y), self._rect, self._image, self._display, self._viewport.transform)

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------
    def zoom_in(self) -> ViewportTransform:
        return self._viewport.zoom_in()

    def zoom_out(self) -> ViewportTransform:
        return self._viewport.zoom_out()

    def reset_zoom(self) -> ViewportTransform:
        return self._viewport.reset()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def handle_mouse_press(self, x: float, y: float) -> None:
        """Handle a primary-button press at (*x*, *y*) on the canvas."""
        output = self._dispatch(PointerEventKind.DOWN, x, y)
        if output.hit is None:
            return
        hit = output.hit
        if hit.zone is InteractionZone.RESIZE:
            self._on_cursor_change(hit.cursor_hint)
        else:
            self._on_cursor_change(DRAGGING_CURSORS[hit.zone])

    def handle_mouse_move(self, x: float, y: float) -> None:
        output = self._dispatch(PointerEventKind.MOVE, x, y)
        if output.hit is not None:
            self._on_cursor_change(output.hit.cursor_hint)
        if output.rect is not None:
            self._store(output.rect)

    def handle_mouse_release(self, x: float, y: float) -> None:
        self._finish(PointerEventKind.UP, x, y)

    def handle_mouse_leave(self, x: float, y: float) -> None:
        self._finish(PointerEventKind.LEAVE, x, y)

    def handle_wheel(self, angle_delta: float, x: float, y: float) -> None:
        """Zoom under the pointer; positive deltas zoom in."""
        if angle_delta == 0 or not has_geometry(self._image, self._display):
            return
        factor = WHEEL_ZOOM_STEP if angle_delta > 0 else 1.0 / WHEEL_ZOOM_STEP
        self._viewport.zoom_at_point(factor, x, y, self._display)

    def handle_key(self, key: str, shift: bool = False) -> bool:
        """Nudge the crop with an arrow key; return True when handled."""
        direction = _NUDGE_DIRECTIONS.get(key)
        if direction is None or self._image is None or self._rect is None:
            return False
        if self._state.is_dragging:
            return False
        step = self._nudge_step_large if shift else self._nudge_step
        self._store(nudge(self._rect, self._image, direction[0] * step, direction[1] * step))
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _dispatch(self, kind: PointerEventKind, x: float, y: float) -> TransitionOutput:
        context = GeometryContext(
            image=self._image,
            display=self._display,
            rect=self._rect,
            viewport=self._viewport.transform,
        )
        self._state, output = transition(self._state, PointerEvent(kind, x, y), context)
        return output

    def _finish(self, kind: PointerEventKind, x: float, y: float) -> None:
        was_dragging = self._state.is_dragging
        output = self._dispatch(kind, x, y)
        if not was_dragging:
            return
        if output.rect is not None:
            _LOGGER.debug("Crop area set to %s", output.rect)
            self._store(output.rect)
        self._on_cursor_change(None)

    def _store(self, rect: CropRect) -> None:
        if rect == self._rect:
            return
        self._rect = rect
        self._on_crop_changed(rect)
        self._on_request_update()

    def _on_viewport_changed(self, transform: ViewportTransform) -> None:
        del transform  # unused
        self._on_request_update()
