"""
Value types shared by the crop geometry modules.

Every type here is an immutable dataclass so geometry helpers can be called
from any thread without coordinating access.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from dataclasses import dataclass

from ..errors import GeometryError


@dataclass(frozen=True)
class ImageSize:
    """Pixel dimensions of an original image."""

    width: int
    height: int

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class DisplaySize:
    """Base (unzoomed) on-screen size of the image."""

    width: int
    height: int

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle in original image pixel coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """Return True when (*px*, *py*) lies inside or on the border."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def translated(self, dx: float, dy: float) -> CropRect:
        return CropRect(self.x + dx, self.y + dy, self.width, self.height)

    def to_box(self) -> tuple[int, int, int, int]:
        """Return integer ``(left, top, right, bottom)`` for the crop backend."""
        left = int(math.floor(self.x))
        top = int(math.floor(self.y))
        return (
            left,
            top,
            left + int(round(self.width)),
            top + int(round(self.height)),
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, values: Mapping[str, float]) -> CropRect:
        try:
            return cls(
                float(values["x"]),
                float(values["y"]),
                float(values["width"]),
                float(values["height"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise GeometryError(f"Invalid crop rectangle mapping: {values!r}") from exc

    @classmethod
    def parse(cls, text: str) -> CropRect:
        """Parse ``"x,y,width,height"`` as typed on the command line."""
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 4:
            raise GeometryError(f"Expected x,y,width,height but got {text!r}")
        try:
            x, y, width, height = (float(part) for part in parts)
        except ValueError as exc:
            raise GeometryError(f"Crop rectangle must be numeric: {text!r}") from exc
        if width <= 0 or height <= 0:
            raise GeometryError(f"Crop rectangle must have a positive size: {text!r}")
        return cls(x, y, width, height)


@dataclass(frozen=True)
class ScreenRect:
    """Rectangle in integer device pixels, ready for painting."""

    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class ScreenBounds:
    """Unrounded projection of a crop rectangle in screen space."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, px: float, py: float) -> bool:
        return self.left <= px <= self.right and self.top <= py <= self.bottom


class InteractionZone(str, enum.Enum):
    """Where a pointer sits relative to the crop rectangle."""

    CREATE = "create"
    MOVE = "move"
    RESIZE = "resize"


class CropHandle(str, enum.Enum):
    """The eight resize grips on the crop rectangle border."""

    NW = "nw"
    NE = "ne"
    SW = "sw"
    SE = "se"
    N = "n"
    S = "s"
    W = "w"
    E = "e"

    @property
    def moves_left(self) -> bool:
        return self in (CropHandle.W, CropHandle.NW, CropHandle.SW)

    @property
    def moves_right(self) -> bool:
        return self in (CropHandle.E, CropHandle.NE, CropHandle.SE)

    @property
    def moves_top(self) -> bool:
        return self in (CropHandle.N, CropHandle.NW, CropHandle.NE)

    @property
    def moves_bottom(self) -> bool:
        return self in (CropHandle.S, CropHandle.SW, CropHandle.SE)

    @property
    def cursor_hint(self) -> str:
        return f"{self.value}-resize"


# Probe order for hit testing: corners win over edge midpoints.
HANDLE_ORDER: tuple[CropHandle, ...] = (
    CropHandle.NW,
    CropHandle.NE,
    CropHandle.SW,
    CropHandle.SE,
    CropHandle.N,
    CropHandle.S,
    CropHandle.W,
    CropHandle.E,
)
