"""Tests for the crop interaction controller."""

from unittest.mock import MagicMock

import pytest

from batchcrop.geometry import CropInteractionController, CropRect, DisplaySize, ImageSize
from batchcrop.geometry.types import ScreenRect


def create_controller(**kwargs):
    controller = CropInteractionController(
        on_crop_changed=MagicMock(),
        on_cursor_change=MagicMock(),
        on_request_update=MagicMock(),
        **kwargs,
    )
    controller.set_image(ImageSize(1000, 800))
    controller.set_display_size(DisplaySize(500, 400))
    return controller


def test_set_image_places_default_square():
    controller = create_controller()
    assert controller.crop_rect() == CropRect(450, 350, 100, 100)
    controller._on_crop_changed.assert_called_with(CropRect(450, 350, 100, 100))
    assert controller.current_screen_rect() == ScreenRect(225, 175, 50, 50)


def test_default_crop_size_is_configurable():
    controller = create_controller(default_crop_size=200)
    assert controller.crop_rect() == CropRect(400, 300, 200, 200)


def test_hover_reports_cursor_without_changing_rect():
    controller = create_controller()
    controller._on_crop_changed.reset_mock()

    controller.handle_mouse_move(250, 200)
    controller._on_cursor_change.assert_called_with("move")
    controller.handle_mouse_move(225, 175)
    controller._on_cursor_change.assert_called_with("nw-resize")
    controller.handle_mouse_move(10, 10)
    controller._on_cursor_change.assert_called_with("crosshair")

    controller._on_crop_changed.assert_not_called()


def test_move_drag_updates_rect_and_cursor():
    controller = create_controller()

    controller.handle_mouse_press(250, 200)
    assert controller.is_dragging()
    controller._on_cursor_change.assert_called_with("grabbing")

    controller.handle_mouse_move(260, 210)
    assert controller.crop_rect() == CropRect(470, 370, 100, 100)

    controller.handle_mouse_release(260, 210)
    assert not controller.is_dragging()
    controller._on_cursor_change.assert_called_with(None)
    assert controller.crop_rect() == CropRect(470, 370, 100, 100)


def test_click_outside_creates_minimum_rect():
    controller = create_controller()
    controller.handle_mouse_press(10, 10)
    controller._on_cursor_change.assert_called_with("crosshair")
    controller.handle_mouse_release(10, 10)
    assert controller.crop_rect() == CropRect(20, 20, 10, 10)


def test_leave_ends_drag():
    controller = create_controller()
    controller.handle_mouse_press(275, 225)
    controller._on_cursor_change.assert_called_with("se-resize")
    controller.handle_mouse_move(300, 250)
    controller.handle_mouse_leave(300, 250)
    assert not controller.is_dragging()
    assert controller.crop_rect() == CropRect(450, 350, 150, 150)


def test_arrow_keys_nudge_crop():
    controller = create_controller()
    assert controller.handle_key("left")
    assert controller.crop_rect() == CropRect(449, 350, 100, 100)
    assert controller.handle_key("down", shift=True)
    assert controller.crop_rect() == CropRect(449, 360, 100, 100)
    assert not controller.handle_key("space")


def test_arrow_keys_ignored_while_dragging():
    controller = create_controller()
    controller.handle_mouse_press(250, 200)
    assert not controller.handle_key("left")


def test_wheel_zooms_under_pointer():
    controller = create_controller()
    controller._on_request_update.reset_mock()

    controller.handle_wheel(120, 125, 100)
    assert controller.viewport.scale == pytest.approx(1.1)
    assert controller.viewport.origin_x == pytest.approx(25.0)
    assert controller.viewport.origin_y == pytest.approx(25.0)
    controller._on_request_update.assert_called()

    controller.handle_wheel(-120, 125, 100)
    assert controller.viewport.scale == pytest.approx(1.0)


def test_zoom_buttons_and_reset():
    controller = create_controller()
    controller.zoom_in()
    assert controller.viewport.scale == pytest.approx(1.2)
    controller.zoom_out()
    controller.zoom_out()
    assert controller.viewport.scale == pytest.approx(1 / 1.2)
    controller.reset_zoom()
    assert controller.viewport.is_identity


def test_new_image_resets_zoom_and_crop():
    controller = create_controller()
    controller.zoom_in()
    controller.set_image(ImageSize(300, 300))
    assert controller.viewport.is_identity
    assert controller.crop_rect() == CropRect(100, 100, 100, 100)


def test_set_crop_rect_is_constrained():
    controller = create_controller()
    controller.set_crop_rect(CropRect(950, -10, 100, 100))
    assert controller.crop_rect() == CropRect(900, 0, 100, 100)


def test_clearing_image_drops_rect():
    controller = create_controller()
    controller.set_image(None)
    assert controller.crop_rect() is None
    assert controller.current_screen_rect() is None
    controller.handle_mouse_press(10, 10)
    assert not controller.is_dragging()


def test_drag_after_wheel_zoom_follows_pointer():
    """After zooming about the top-left corner, drags map through the zoom."""
    controller = create_controller()
    controller.handle_wheel(120, 0, 0)
    assert controller.viewport.scale == pytest.approx(1.1)
    assert (controller.viewport.origin_x, controller.viewport.origin_y) == (0.0, 0.0)

    # The crop now spans screen 247.5..302.5 by 192.5..247.5.
    controller.handle_mouse_press(275.3, 220.3)
    controller._on_cursor_change.assert_called_with("grabbing")
    controller.handle_mouse_move(297.3, 242.3)
    controller.handle_mouse_release(297.3, 242.3)
    assert controller.crop_rect() == CropRect(490, 390, 100, 100)


def test_resize_grip_after_wheel_zoom():
    controller = create_controller()
    controller.handle_wheel(120, 0, 0)

    controller.handle_mouse_press(302, 247)
    controller._on_cursor_change.assert_called_with("se-resize")
    controller.handle_mouse_move(324.3, 269.3)
    controller.handle_mouse_release(324.3, 269.3)
    assert controller.crop_rect() == CropRect(450, 350, 140, 140)
