"""
Crop geometry engine.

This package provides the coordinate mapping, crop normalisation, viewport
zoom and drag interaction logic behind the crop canvas.  Nothing in here
touches Qt, files or rendering APIs.
"""

from .constraint import constrain, default_rect, is_usable, nudge
from .controller import CropInteractionController
from .hit_tester import HitResult, HitTester, classify
from .interaction import (
    IDLE,
    DragSession,
    GeometryContext,
    InteractionState,
    PointerEvent,
    PointerEventKind,
    TransitionOutput,
    begin_interaction,
    end_interaction,
    transition,
    update_interaction,
)
from .mapper import (
    compute_display_size,
    display_to_original,
    has_geometry,
    original_to_display,
    original_to_screen,
    screen_to_original,
)
from .projector import handle_anchors, project, project_bounds
from .types import (
    CropHandle,
    CropRect,
    DisplaySize,
    ImageSize,
    InteractionZone,
    ScreenBounds,
    ScreenRect,
)
from .viewport import (
    IDENTITY_VIEWPORT,
    ViewportController,
    ViewportTransform,
    reset_viewport,
    zoom_at_point,
    zoom_by_step,
)

__all__ = [
    "IDENTITY_VIEWPORT",
    "IDLE",
    "CropHandle",
    "CropInteractionController",
    "CropRect",
    "DisplaySize",
    "DragSession",
    "GeometryContext",
    "HitResult",
    "HitTester",
    "ImageSize",
    "InteractionState",
    "InteractionZone",
    "PointerEvent",
    "PointerEventKind",
    "ScreenBounds",
    "ScreenRect",
    "TransitionOutput",
    "ViewportController",
    "ViewportTransform",
    "begin_interaction",
    "classify",
    "compute_display_size",
    "constrain",
    "default_rect",
    "display_to_original",
    "end_interaction",
    "handle_anchors",
    "has_geometry",
    "is_usable",
    "nudge",
    "original_to_display",
    "original_to_screen",
    "project",
    "project_bounds",
    "reset_viewport",
    "screen_to_original",
    "transition",
    "update_interaction",
    "zoom_at_point",
    "zoom_by_step",
]
