"""
Hit testing logic for crop handles.

This module contains pure geometric functions for deciding whether a pointer
sits on a resize grip, on the crop body or outside it, with no dependency on
Qt events or UI state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import HANDLE_HIT_SIZE
from .projector import handle_anchors, project_bounds
from .types import (
    HANDLE_ORDER,
    CropHandle,
    CropRect,
    DisplaySize,
    ImageSize,
    InteractionZone,
    ScreenBounds,
)
from .viewport import ViewportTransform

MOVE_CURSOR = "move"
CREATE_CURSOR = "crosshair"


@dataclass(frozen=True)
class HitResult:
    """Classification of a pointer position against the crop rectangle."""

    zone: InteractionZone
    handle: Optional[CropHandle] = None
    cursor_hint: str = CREATE_CURSOR


OUTSIDE = HitResult(InteractionZone.CREATE, None, CREATE_CURSOR)


class HitTester:
    """Pure-function hit tester for crop box handles."""

    def __init__(self, handle_size: float = HANDLE_HIT_SIZE) -> None:
        """Initialize hit tester.

        Parameters
        ----------
        handle_size:
            Side length of the square hit box centred on each grip, in
            screen pixels.
        """
        self._half = float(handle_size) / 2.0

    def test(self, x: float, y: float, bounds: ScreenBounds | None) -> HitResult:
        """Classify the screen point (*x*, *y*) against *bounds*.

        Grips are checked first in :data:`HANDLE_ORDER`, then the body.  A
        missing rectangle classifies every point as ``create``.
        """
        if bounds is None:
            return OUTSIDE

        anchors = handle_anchors(bounds)
        for handle in HANDLE_ORDER:
            anchor_x, anchor_y = anchors[handle]
            if abs(x - anchor_x) <= self._half and abs(y - anchor_y) <= self._half:
                return HitResult(InteractionZone.RESIZE, handle, handle.cursor_hint)

        if bounds.contains(x, y):
            return HitResult(InteractionZone.MOVE, None, MOVE_CURSOR)

        return OUTSIDE


_DEFAULT_TESTER = HitTester()


def classify(
    pointer: tuple[float, float],
    rect: CropRect | None,
    image: ImageSize | None,
    display: DisplaySize | None,
    viewport: ViewportTransform | None = None,
    *,
    hit_tester: HitTester | None = None,
) -> HitResult:
    """Return the zone, grip and cursor hint for a pointer position.

    Safe for hover-only queries: nothing is mutated.
    """

    tester = hit_tester or _DEFAULT_TESTER
    bounds = project_bounds(image, display, rect, viewport)
    return tester.test(float(pointer[0]), float(pointer[1]), bounds)
