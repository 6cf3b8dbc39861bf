"""Tests for coordinate conversions between original, display and screen space."""

import pytest

from batchcrop.geometry import (
    DisplaySize,
    ImageSize,
    ViewportTransform,
    compute_display_size,
    display_to_original,
    has_geometry,
    original_to_display,
    original_to_screen,
    screen_to_original,
)


@pytest.fixture
def image():
    return ImageSize(1000, 800)


@pytest.fixture
def display():
    return DisplaySize(500, 400)


def test_has_geometry_requires_positive_sizes(image, display):
    """Missing or empty sizes mean no geometry."""
    assert has_geometry(image, display)
    assert not has_geometry(None, display)
    assert not has_geometry(image, None)
    assert not has_geometry(ImageSize(0, 800), display)
    assert not has_geometry(image, DisplaySize(500, 0))


def test_original_to_display_scales_per_axis(image, display):
    """Original pixels are scaled by display/original on each axis."""
    assert original_to_display(200, 100, image, display) == (100.0, 50.0)


def test_display_to_original_floors(image, display):
    """The inverse mapping snaps to the pixel grid with floor."""
    assert display_to_original(100.4, 50.9, image, display) == (200, 101)
    assert display_to_original(0.4, 0.4, image, display) == (0, 0)


@pytest.mark.parametrize("x, y", [(0, 0), (123, 456), (999, 799), (500, 1)])
def test_round_trip_within_one_display_pixel(image, display, x, y):
    """Display -> original -> display stays within one display pixel."""
    ox, oy = display_to_original(x / 2 + 0.3, y / 2 + 0.3, image, display)
    dx, dy = original_to_display(ox, oy, image, display)
    assert abs(dx - (x / 2 + 0.3)) <= 1
    assert abs(dy - (y / 2 + 0.3)) <= 1


def test_identity_viewport_matches_plain_mapping(image, display):
    """A default viewport reproduces the plain conversion."""
    identity = ViewportTransform()
    assert screen_to_original(123.0, 45.0, image, display, identity) == display_to_original(
        123.0, 45.0, image, display
    )
    assert original_to_screen(300, 200, image, display, identity) == original_to_display(
        300, 200, image, display
    )
    assert screen_to_original(123.0, 45.0, image, display) == (246, 90)


def test_screen_to_original_undoes_scale_about_origin(image, display):
    """The viewport scale is removed around its origin before rescaling."""
    viewport = ViewportTransform(scale=2.0, origin_x=0.0, origin_y=0.0)
    # Screen (200, 100) is base (100, 50) which is original (200, 100).
    assert screen_to_original(200.0, 100.0, image, display, viewport) == (200, 100)


def test_original_to_screen_with_centred_zoom(image, display):
    """Scaling about the centre keeps the centre fixed."""
    viewport = ViewportTransform(scale=2.0)
    assert original_to_screen(500, 400, image, display, viewport) == (250.0, 200.0)
    assert original_to_screen(0, 0, image, display, viewport) == (-250.0, -200.0)


def test_compute_display_size_fits_container():
    """Large images shrink to the container minus padding."""
    size = compute_display_size(ImageSize(2000, 1000), 1040, 1040)
    assert size == DisplaySize(1000, 500)


def test_compute_display_size_never_upscales():
    """Small images keep their size unless the user scale enlarges them."""
    assert compute_display_size(ImageSize(200, 100), 1000, 1000) == DisplaySize(200, 100)
    assert compute_display_size(ImageSize(200, 100), 1000, 1000, 1.5) == DisplaySize(300, 150)


def test_compute_display_size_falls_back_when_container_too_small():
    """A collapsed container yields the fallback size."""
    assert compute_display_size(ImageSize(200, 100), 10, 10) == DisplaySize(300, 200)


def test_compute_display_size_without_image():
    assert not compute_display_size(None, 800, 600).is_valid
