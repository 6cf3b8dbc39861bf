"""Interactive crop canvas widget."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QPointF, QRect, QRectF, Qt, Signal
from PySide6.QtGui import (
    QColor,
    QCursor,
    QImageReader,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPen,
    QPixmap,
    QResizeEvent,
    QWheelEvent,
)
from PySide6.QtWidgets import QWidget

from ..config import (
    BUTTON_ZOOM_STEP,
    DEFAULT_CROP_SIZE,
    MAX_IMAGE_SCALE,
    MIN_IMAGE_SCALE,
    NUDGE_STEP,
    NUDGE_STEP_LARGE,
)
from ..errors import ImageLoadError
from ..geometry import (
    CropInteractionController,
    CropRect,
    DisplaySize,
    ImageSize,
    compute_display_size,
    handle_anchors,
)
from ..geometry.types import ScreenBounds

_LOGGER = logging.getLogger(__name__)

_CURSOR_SHAPES: dict[str, Qt.CursorShape] = {
    "nw-resize": Qt.CursorShape.SizeFDiagCursor,
    "se-resize": Qt.CursorShape.SizeFDiagCursor,
    "ne-resize": Qt.CursorShape.SizeBDiagCursor,
    "sw-resize": Qt.CursorShape.SizeBDiagCursor,
    "n-resize": Qt.CursorShape.SizeVerCursor,
    "s-resize": Qt.CursorShape.SizeVerCursor,
    "w-resize": Qt.CursorShape.SizeHorCursor,
    "e-resize": Qt.CursorShape.SizeHorCursor,
    "move": Qt.CursorShape.SizeAllCursor,
    "grabbing": Qt.CursorShape.ClosedHandCursor,
    "crosshair": Qt.CursorShape.CrossCursor,
}

_ARROW_KEYS: dict[int, str] = {
    Qt.Key.Key_Left: "left",
    Qt.Key.Key_Right: "right",
    Qt.Key.Key_Up: "up",
    Qt.Key.Key_Down: "down",
}

_GRIP_SIZE = 8.0


def cursor_for_hint(hint: Optional[str]) -> Qt.CursorShape:
    """Return the Qt cursor shape for a controller cursor hint."""
    if hint is None:
        return Qt.CursorShape.ArrowCursor
    return _CURSOR_SHAPES.get(hint, Qt.CursorShape.ArrowCursor)


class CropCanvas(QWidget):
    """Shows one image and lets the user draw, move and resize a crop box.

    Pointer positions are translated into the frame of the displayed image
    (its top-left corner at the origin) before they reach the controller, so
    the widget can centre the picture with any amount of surrounding space.
    """

    cropChanged = Signal(object)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        default_crop_size: int = DEFAULT_CROP_SIZE,
        nudge_step: int = NUDGE_STEP,
        nudge_step_large: int = NUDGE_STEP_LARGE,
    ) -> None:
        super().__init__(parent)
        self._pixmap: QPixmap | None = None
        self._image_scale = 1.0
        self._last_pointer = QPointF()
        self._controller = CropInteractionController(
            on_crop_changed=self.cropChanged.emit,
            on_cursor_change=self._apply_cursor,
            on_request_update=self.update,
            default_crop_size=default_crop_size,
            nudge_step=nudge_step,
            nudge_step_large=nudge_step_large,
        )
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(320, 240)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def controller(self) -> CropInteractionController:
        return self._controller

    @property
    def image_scale(self) -> float:
        return self._image_scale

    def load_image(self, path: Path) -> ImageSize:
        """Load *path* into the canvas and return its size in pixels."""
        reader = QImageReader(str(path))
        image = reader.read()
        if image.isNull():
            raise ImageLoadError(f"Cannot open {path}: {reader.errorString()}")
        self.set_pixmap(QPixmap.fromImage(image))
        _LOGGER.debug("Loaded %s (%dx%d)", path, image.width(), image.height())
        return ImageSize(image.width(), image.height())

    def set_pixmap(self, pixmap: QPixmap | None) -> None:
        if pixmap is None or pixmap.isNull():
            self._pixmap = None
            self._controller.set_image(None)
        else:
            self._pixmap = pixmap
            self._controller.set_image(ImageSize(pixmap.width(), pixmap.height()))
        self._image_scale = 1.0
        self._update_display_size()

    def crop_rect(self) -> CropRect | None:
        return self._controller.crop_rect()

    def set_crop_rect(self, rect: CropRect) -> None:
        self._controller.set_crop_rect(rect)

    def reset_crop(self) -> None:
        self._controller.reset_crop()

    def zoom_image_in(self) -> None:
        self.set_image_scale(self._image_scale * BUTTON_ZOOM_STEP)

    def zoom_image_out(self) -> None:
        self.set_image_scale(self._image_scale / BUTTON_ZOOM_STEP)

    def set_image_scale(self, scale: float) -> None:
        """Change the size of the base image layer under the viewport zoom.

        The scale is clamped to ``[MIN_IMAGE_SCALE, MAX_IMAGE_SCALE]``.
        """
        scale = max(MIN_IMAGE_SCALE, min(MAX_IMAGE_SCALE, scale))
        if scale == self._image_scale:
            return
        self._image_scale = scale
        self._update_display_size()

    def overlay_rect(self) -> QRect | None:
        """Return the crop frame in device pixels, relative to the image origin."""
        screen = self._controller.current_screen_rect()
        if screen is None:
            return None
        return QRect(screen.left, screen.top, screen.width, screen.height)

    # ------------------------------------------------------------------
    # Geometry helpers
    # ------------------------------------------------------------------
    def _display_size(self) -> DisplaySize | None:
        return self._controller.display_size

    def _image_offset(self) -> QPointF:
        display = self._display_size()
        if display is None:
            return QPointF()
        return QPointF(
            (self.width() - display.width) / 2.0,
            (self.height() - display.height) / 2.0,
        )

    def _to_image_frame(self, position: QPointF) -> tuple[float, float]:
        offset = self._image_offset()
        return position.x() - offset.x(), position.y() - offset.y()

    def _update_display_size(self) -> None:
        image = self._controller.image
        if image is None:
            self._controller.set_display_size(None)
            return
        display = compute_display_size(image, self.width(), self.height(), self._image_scale)
        self._controller.set_display_size(display)

    def _apply_cursor(self, hint: Optional[str]) -> None:
        if hint is None:
            self.unsetCursor()
            return
        self.setCursor(QCursor(cursor_for_hint(hint)))

    # ------------------------------------------------------------------
    # Qt event overrides
    # ------------------------------------------------------------------
    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._update_display_size()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        self._last_pointer = event.position()
        self._controller.handle_mouse_press(*self._to_image_frame(event.position()))
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        self._last_pointer = event.position()
        self._controller.handle_mouse_move(*self._to_image_frame(event.position()))
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        self._last_pointer = event.position()
        self._controller.handle_mouse_release(*self._to_image_frame(event.position()))
        event.accept()

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self._controller.handle_mouse_leave(*self._to_image_frame(self._last_pointer))
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:  # type: ignore[override]
        delta = event.angleDelta().y()
        if delta == 0:
            event.ignore()
            return
        self._controller.handle_wheel(delta, *self._to_image_frame(event.position()))
        event.accept()

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        key = event.key()
        direction = _ARROW_KEYS.get(key)
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            # Ctrl resizes the base image layer instead of the viewport.
            if key in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
                self.zoom_image_in()
            elif key == Qt.Key.Key_Minus:
                self.zoom_image_out()
            elif key == Qt.Key.Key_0:
                self.set_image_scale(1.0)
            else:
                super().keyPressEvent(event)
                return
            event.accept()
            return
        if direction is not None:
            shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
            if self._controller.handle_key(direction, shift):
                event.accept()
                return
        elif key in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
            self._controller.zoom_in()
            event.accept()
            return
        elif key == Qt.Key.Key_Minus:
            self._controller.zoom_out()
            event.accept()
            return
        elif key == Qt.Key.Key_0:
            self._controller.reset_zoom()
            event.accept()
            return
        elif key == Qt.Key.Key_R:
            self._controller.reset_crop()
            event.accept()
            return
        super().keyPressEvent(event)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), QColor("#1e1e1e"))

        display = self._display_size()
        if self._pixmap is None or display is None or not display.is_valid:
            painter.end()
            return

        offset = self._image_offset()
        painter.translate(offset)

        viewport = self._controller.viewport
        origin_x, origin_y = viewport.origin_pixels(display)
        painter.save()
        painter.translate(origin_x, origin_y)
        painter.scale(viewport.scale, viewport.scale)
        painter.translate(viewport.translate_x - origin_x, viewport.translate_y - origin_y)
        painter.drawPixmap(QRectF(0, 0, display.width, display.height), self._pixmap, QRectF(self._pixmap.rect()))
        painter.restore()

        frame = self.overlay_rect()
        if frame is not None:
            crop = QRectF(frame)
            bounds = ScreenBounds(frame.x(), frame.y(), frame.width(), frame.height())

            # Dim everything outside the crop box.
            outside = QPainterPath()
            outside.addRect(QRectF(-offset.x(), -offset.y(), self.width(), self.height()))
            inner = QPainterPath()
            inner.addRect(crop)
            painter.fillPath(outside.subtracted(inner), QColor(0, 0, 0, 140))

            painter.setPen(QPen(QColor("#ffffff"), 1.5))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(crop)

            painter.setPen(QPen(QColor("#ffffff"), 1))
            painter.setBrush(QColor("#2d8cf0"))
            half = _GRIP_SIZE / 2.0
            for anchor_x, anchor_y in handle_anchors(bounds).values():
                painter.drawRect(QRectF(anchor_x - half, anchor_y - half, _GRIP_SIZE, _GRIP_SIZE))

        painter.end()


__all__ = ["CropCanvas", "cursor_for_hint"]
