"""Tests for crop rectangle normalisation."""

import pytest

from batchcrop.config import MIN_CROP_SIZE
from batchcrop.geometry import CropRect, ImageSize, constrain, default_rect, is_usable, nudge

IMAGE = ImageSize(1000, 800)

RECTS = [
    CropRect(950, 0, 100, 100),
    CropRect(-20, -5, 50, 50),
    CropRect(100, 100, 2000, 2000),
    CropRect(10, 10, 0, 0),
    CropRect(995, 795, 3, 3),
    CropRect(450.5, 350.25, 99.5, 100.75),
    CropRect(-500, 900, 20, 20),
]


def test_default_rect_centres_square():
    """A 100px square is centred on a 1000x800 image."""
    assert default_rect(IMAGE, 100) == CropRect(450, 350, 100, 100)


def test_default_rect_floors_odd_offsets():
    assert default_rect(ImageSize(1001, 801), 100) == CropRect(450, 350, 100, 100)


def test_default_rect_caps_each_side_to_image():
    """Each side is capped to its own image dimension."""
    assert default_rect(ImageSize(60, 400), 100) == CropRect(0, 150, 60, 100)


def test_constrain_shifts_before_shrinking():
    """A rect hanging off the right edge moves back instead of shrinking."""
    assert constrain(CropRect(950, 0, 100, 100), IMAGE) == CropRect(900, 0, 100, 100)


def test_constrain_clamps_negative_position():
    assert constrain(CropRect(-20, -5, 50, 50), IMAGE) == CropRect(0, 0, 50, 50)


def test_constrain_shrinks_oversized_rect_to_image():
    assert constrain(CropRect(100, 100, 2000, 2000), IMAGE) == CropRect(0, 0, 1000, 800)


def test_constrain_enforces_minimum_size():
    assert constrain(CropRect(10, 10, 2, 3), IMAGE) == CropRect(10, 10, MIN_CROP_SIZE, MIN_CROP_SIZE)


def test_constrain_on_image_smaller_than_minimum_overhangs():
    """Images smaller than the minimum still get a minimum-size rect."""
    result = constrain(CropRect(0, 0, 3, 3), ImageSize(5, 5))
    assert result == CropRect(0, 0, MIN_CROP_SIZE, MIN_CROP_SIZE)


@pytest.mark.parametrize("rect", RECTS)
def test_constrain_is_idempotent(rect):
    once = constrain(rect, IMAGE)
    assert constrain(once, IMAGE) == once


@pytest.mark.parametrize("rect", RECTS)
def test_constrain_keeps_rect_inside_image(rect):
    result = constrain(rect, IMAGE)
    assert result.x >= 0
    assert result.y >= 0
    assert result.width >= MIN_CROP_SIZE
    assert result.height >= MIN_CROP_SIZE
    assert result.right <= IMAGE.width
    assert result.bottom <= IMAGE.height


def test_nudge_moves_by_step():
    rect = CropRect(100, 100, 50, 50)
    assert nudge(rect, IMAGE, 10, -1) == CropRect(110, 99, 50, 50)


def test_nudge_stops_at_image_edges():
    """Nudging never pushes the rect past the image border."""
    assert nudge(CropRect(0, 0, 100, 100), IMAGE, -1, -10) == CropRect(0, 0, 100, 100)
    assert nudge(CropRect(900, 700, 100, 100), IMAGE, 10, 1) == CropRect(900, 700, 100, 100)


def test_is_usable():
    assert is_usable(CropRect(0, 0, 10, 10))
    assert not is_usable(CropRect(0, 0, 0, 10))
    assert not is_usable(None)
