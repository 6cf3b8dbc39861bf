"""
Move strategy for crop box interaction.
"""

from __future__ import annotations

from ..types import CropRect
from .abstract import InteractionStrategy


class MoveStrategy(InteractionStrategy):
    """Strategy for moving the entire crop box."""

    def __init__(self, *, start_rect: CropRect) -> None:
        self._start_rect = start_rect

    def on_drag(
        self, anchor: tuple[float, float], current: tuple[float, float]
    ) -> CropRect:
        return self._start_rect.translated(current[0] - anchor[0], current[1] - anchor[1])
