"""
Drag strategies for crop interactions.

This package implements the Strategy pattern for the three drag modes
(create, move, resize); each strategy turns a pointer delta into a new,
not yet constrained, crop rectangle.
"""

from ..types import CropHandle, CropRect, InteractionZone
from .abstract import InteractionStrategy
from .create_strategy import CreateStrategy
from .move_strategy import MoveStrategy
from .resize_strategy import ResizeStrategy

__all__ = [
    "CreateStrategy",
    "InteractionStrategy",
    "MoveStrategy",
    "ResizeStrategy",
    "strategy_for",
]


def strategy_for(
    zone: InteractionZone, handle: CropHandle | None, start_rect: CropRect
) -> InteractionStrategy:
    """Return the strategy matching a classified pointer-down."""

    if zone is InteractionZone.RESIZE and handle is not None:
        return ResizeStrategy(handle=handle, start_rect=start_rect)
    if zone is InteractionZone.MOVE:
        return MoveStrategy(start_rect=start_rect)
    return CreateStrategy()
