"""
Abstract base class for crop drag strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..types import CropRect


class InteractionStrategy(ABC):
    """Base class for crop drag strategies (create, move, resize)."""

    @abstractmethod
    def on_drag(
        self, anchor: tuple[float, float], current: tuple[float, float]
    ) -> CropRect:
        """Return the rectangle for the pointer at *current*.

        Parameters
        ----------
        anchor:
            Pointer-down position in original image pixels.
        current:
            Current pointer position in original image pixels.
        """
