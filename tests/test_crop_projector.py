"""Tests for projecting the crop rectangle onto the screen."""

from batchcrop.geometry import (
    CropHandle,
    CropRect,
    DisplaySize,
    ImageSize,
    ViewportTransform,
    handle_anchors,
    project,
    project_bounds,
)
from batchcrop.geometry.types import ScreenBounds, ScreenRect

IMAGE = ImageSize(1000, 1000)
DISPLAY = DisplaySize(500, 500)


def test_project_without_viewport():
    rect = CropRect(100, 100, 200, 200)
    assert project(IMAGE, DISPLAY, rect) == ScreenRect(50, 50, 100, 100)


def test_project_with_centred_zoom():
    """Scaling about the display centre pushes the rect outwards."""
    rect = CropRect(100, 100, 200, 200)
    viewport = ViewportTransform(scale=2.0)
    assert project(IMAGE, DISPLAY, rect, viewport) == ScreenRect(-150, -150, 200, 200)


def test_project_rounds_only_at_the_end():
    """Fractional bounds are kept until the final conversion."""
    rect = CropRect(101, 101, 201, 201)
    bounds = project_bounds(IMAGE, DISPLAY, rect)
    assert bounds == ScreenBounds(50.5, 50.5, 100.5, 100.5)
    assert project(IMAGE, DISPLAY, rect) == ScreenRect(
        round(50.5), round(50.5), round(100.5), round(100.5)
    )


def test_project_returns_none_without_geometry():
    rect = CropRect(0, 0, 100, 100)
    assert project(None, DISPLAY, rect) is None
    assert project(IMAGE, DisplaySize(0, 0), rect) is None
    assert project(IMAGE, DISPLAY, None) is None


def test_project_returns_none_for_empty_rect():
    assert project(IMAGE, DISPLAY, CropRect(10, 10, 0, 50)) is None


def test_project_returns_none_below_one_pixel():
    """A rect thinner than one screen pixel is not drawn."""
    assert project(IMAGE, DISPLAY, CropRect(10, 10, 1, 100)) is None


def test_handle_anchors_cover_corners_and_midpoints():
    anchors = handle_anchors(ScreenBounds(100, 100, 100, 50))
    assert anchors[CropHandle.NW] == (100, 100)
    assert anchors[CropHandle.SE] == (200, 150)
    assert anchors[CropHandle.N] == (150.0, 100)
    assert anchors[CropHandle.E] == (200, 125.0)
    assert len(anchors) == 8
