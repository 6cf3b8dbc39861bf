"""
Crop drag sessions and the Idle/Dragging state machine.

The functions here are pure: a :class:`DragSession` is an immutable snapshot
taken at pointer-down and every update recomputes the rectangle from that
snapshot, so no error accumulates over a long drag.  :func:`transition`
packages the session API as ``(state, event) -> (state', output)`` for hosts
that prefer a single entry point.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import MIN_CROP_SIZE
from .constraint import constrain
from .hit_tester import HitResult, classify
from .mapper import has_geometry, screen_to_original
from .strategies import strategy_for
from .types import CropHandle, CropRect, DisplaySize, ImageSize, InteractionZone
from .viewport import ViewportTransform

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragSession:
    """State captured at pointer-down and kept until pointer-up."""

    mode: InteractionZone
    handle: Optional[CropHandle]
    anchor: tuple[int, int]
    start_rect: CropRect
    image: ImageSize


def begin_interaction(
    pointer: tuple[float, float],
    rect: CropRect | None,
    image: ImageSize | None,
    display: DisplaySize | None,
    viewport: ViewportTransform | None = None,
) -> DragSession | None:
    """Classify *pointer* and open a drag session.

    Returns None when there is no usable geometry; the update and end calls
    treat a None session as a no-op.
    """

    if not has_geometry(image, display):
        return None

    hit = classify(pointer, rect, image, display, viewport)
    anchor = screen_to_original(pointer[0], pointer[1], image, display, viewport)
    if hit.zone is InteractionZone.CREATE or rect is None:
        # A click that never moves still leaves a minimum-size rect behind.
        start_rect = CropRect(anchor[0], anchor[1], 0, 0)
        mode = InteractionZone.CREATE
    else:
        start_rect = rect
        mode = hit.zone

    _LOGGER.debug("Begin %s drag (handle=%s) at %s", mode.value, hit.handle, anchor)
    return DragSession(
        mode=mode,
        handle=hit.handle if mode is InteractionZone.RESIZE else None,
        anchor=anchor,
        start_rect=start_rect,
        image=image,
    )


def update_interaction(
    session: DragSession | None,
    pointer: tuple[float, float],
    image: ImageSize | None,
    display: DisplaySize | None,
    viewport: ViewportTransform | None = None,
) -> CropRect | None:
    """Return the constrained rectangle for the pointer at *pointer*."""

    if session is None or not has_geometry(image, display):
        return None

    current = screen_to_original(pointer[0], pointer[1], image, display, viewport)
    strategy = strategy_for(session.mode, session.handle, session.start_rect)
    return constrain(strategy.on_drag(session.anchor, current), image)


def end_interaction(
    session: DragSession | None, rect: CropRect | None = None
) -> CropRect | None:
    """Finalise a drag and return the rectangle to keep.

    *rect* is the last value produced by :func:`update_interaction`; when the
    pointer never moved the session's start rectangle is used instead.
    Ending without a session does nothing and returns None.
    """

    if session is None:
        return None

    final = rect if rect is not None else session.start_rect
    final = CropRect(
        final.x,
        final.y,
        max(MIN_CROP_SIZE, final.width),
        max(MIN_CROP_SIZE, final.height),
    )
    final = constrain(final, session.image)
    _LOGGER.debug("End %s drag with %s", session.mode.value, final)
    return final


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class PointerEventKind(str, enum.Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in the coordinate frame of the rendering surface."""

    kind: PointerEventKind
    x: float
    y: float


@dataclass(frozen=True)
class GeometryContext:
    """Everything the host currently displays."""

    image: Optional[ImageSize]
    display: Optional[DisplaySize]
    rect: Optional[CropRect]
    viewport: Optional[ViewportTransform] = None


@dataclass(frozen=True)
class InteractionState:
    """Idle when ``session`` is None, Dragging otherwise."""

    session: Optional[DragSession] = None
    current_rect: Optional[CropRect] = None

    @property
    def is_dragging(self) -> bool:
        return self.session is not None


IDLE = InteractionState()


@dataclass(frozen=True)
class TransitionOutput:
    """Result of one event.

    ``rect`` is set when the crop rectangle changed; ``hit`` carries the
    hover classification for cursor feedback.  ``finished`` marks the event
    that closed a drag.
    """

    rect: Optional[CropRect] = None
    hit: Optional[HitResult] = None
    finished: bool = False


def transition(
    state: InteractionState,
    event: PointerEvent,
    context: GeometryContext,
) -> tuple[InteractionState, TransitionOutput]:
    """Advance the interaction state machine by one pointer event."""

    pointer = (event.x, event.y)

    if event.kind is PointerEventKind.DOWN:
        if state.is_dragging:
            # A drag in progress is never pre-empted.
            return state, TransitionOutput()
        session = begin_interaction(
            pointer, context.rect, context.image, context.display, context.viewport
        )
        if session is None:
            return state, TransitionOutput()
        hit = classify(pointer, context.rect, context.image, context.display, context.viewport)
        return InteractionState(session=session), TransitionOutput(hit=hit)

    if event.kind is PointerEventKind.MOVE:
        if not state.is_dragging:
            hit = classify(pointer, context.rect, context.image, context.display, context.viewport)
            return state, TransitionOutput(hit=hit)
        rect = update_interaction(
            state.session, pointer, context.image, context.display, context.viewport
        )
        if rect is None:
            return state, TransitionOutput()
        return InteractionState(session=state.session, current_rect=rect), TransitionOutput(rect=rect)

    # UP and LEAVE finalise identically.
    if not state.is_dragging:
        return state, TransitionOutput()
    rect = end_interaction(state.session, state.current_rect)
    return IDLE, TransitionOutput(rect=rect, finished=True)
