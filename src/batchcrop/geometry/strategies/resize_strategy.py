"""
Resize strategy for crop box edge/corner dragging.
"""

from __future__ import annotations

from ...config import MIN_CROP_SIZE
from ..types import CropHandle, CropRect
from .abstract import InteractionStrategy


class ResizeStrategy(InteractionStrategy):
    """Strategy for resizing the crop box via one of its eight grips."""

    def __init__(
        self,
        *,
        handle: CropHandle,
        start_rect: CropRect,
        min_size: float = MIN_CROP_SIZE,
    ) -> None:
        """Initialize resize strategy.

        Parameters
        ----------
        handle:
            The grip being dragged.
        start_rect:
            Crop rectangle at pointer-down.
        min_size:
            Smallest allowed width and height, in original pixels.
        """
        self._handle = handle
        self._start_rect = start_rect
        self._min_size = float(min_size)

    @property
    def handle(self) -> CropHandle:
        return self._handle

    def on_drag(
        self, anchor: tuple[float, float], current: tuple[float, float]
    ) -> CropRect:
        """Move the edges owned by the grip, keeping the opposite edges fixed."""
        start = self._start_rect
        handle = self._handle
        delta_x = current[0] - anchor[0]
        delta_y = current[1] - anchor[1]
        min_size = self._min_size

        left, top = start.x, start.y
        right, bottom = start.right, start.bottom

        # Each axis is clamped on its own so a corner grip dragged past both
        # opposite edges stops at min_size in both directions.
        if handle.moves_left:
            left = min(left + delta_x, right - min_size)
        if handle.moves_right:
            right = max(right + delta_x, left + min_size)
        if handle.moves_top:
            top = min(top + delta_y, bottom - min_size)
        if handle.moves_bottom:
            bottom = max(bottom + delta_y, top + min_size)

        return CropRect(left, top, right - left, bottom - top)
