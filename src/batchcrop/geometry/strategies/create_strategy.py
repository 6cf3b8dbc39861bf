"""
Strategy for drawing a new crop rectangle.
"""

from __future__ import annotations

from ..types import CropRect
from .abstract import InteractionStrategy


class CreateStrategy(InteractionStrategy):
    """Span the axis-aligned box between the anchor and the pointer."""

    def on_drag(
        self, anchor: tuple[float, float], current: tuple[float, float]
    ) -> CropRect:
        ax, ay = anchor
        cx, cy = current
        return CropRect(min(ax, cx), min(ay, cy), abs(cx - ax), abs(cy - ay))
