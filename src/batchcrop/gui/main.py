"""Stand-alone window for picking a crop rectangle on one image."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import QApplication, QDialog, QLabel, QVBoxLayout, QWidget

from ..geometry import CropRect
from ..settings import SettingsManager
from ..utils.console_logger import ensure_console_logger
from .crop_canvas import CropCanvas

_LOGGER = logging.getLogger(__name__)

_HELP_TEXT = "Drag to select  |  Enter: accept  |  Esc: cancel  |  +/-/0: zoom  |  Ctrl +/-/0: image size  |  R: reset"


class CropSelectorDialog(QDialog):
    """Dialog hosting a :class:`CropCanvas`; Enter accepts, Escape cancels."""

    def __init__(self, parent: QWidget | None = None, *, settings: SettingsManager | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Select crop area")
        self.resize(960, 720)

        kwargs = {}
        if settings is not None:
            kwargs = {
                "default_crop_size": settings.get("crop.default_size"),
                "nudge_step": settings.get("crop.nudge_step"),
                "nudge_step_large": settings.get("crop.nudge_step_large"),
            }
        self._settings = settings
        self.canvas = CropCanvas(self, **kwargs)
        self._status = QLabel(_HELP_TEXT, self)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.canvas, 1)
        layout.addWidget(self._status)

        self.canvas.cropChanged.connect(self._on_crop_changed)

    def load_image(self, path: Path) -> None:
        """Show *path*, restoring the last accepted rectangle if one is stored."""
        self.canvas.load_image(path)
        if self._settings is None:
            return
        remembered = self._settings.get("crop.last_rect")
        if remembered:
            self.canvas.set_crop_rect(CropRect.from_dict(remembered))

    def accept(self) -> None:  # type: ignore[override]
        rect = self.canvas.crop_rect()
        if self._settings is not None and rect is not None:
            self._settings.set("crop.last_rect", rect.as_dict())
        super().accept()

    def _on_crop_changed(self, rect: CropRect) -> None:
        left, top, right, bottom = rect.to_box()
        self._status.setText(f"{left}, {top}  {right - left} x {bottom - top}    {_HELP_TEXT}")

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.accept()
            return
        super().keyPressEvent(event)


def run_selector(path: Path, *, settings: SettingsManager | None = None) -> CropRect | None:
    """Show *path* in a selector dialog and return the chosen rectangle.

    Returns None when the dialog is cancelled.
    """

    app = QApplication.instance() or QApplication(sys.argv[:1])
    dialog = CropSelectorDialog(settings=settings)
    dialog.load_image(path)
    dialog.canvas.setFocus()
    accepted = dialog.exec() == QDialog.DialogCode.Accepted
    app.processEvents()
    if not accepted:
        _LOGGER.info("Selection cancelled")
        return None
    return dialog.canvas.crop_rect()


def main(argv: list[str] | None = None) -> int:
    """Open the selector for the image given on the command line."""

    arguments = list(sys.argv if argv is None else argv)
    ensure_console_logger(logging.getLogger("batchcrop"), "batchcrop-console")
    if len(arguments) < 2:
        _LOGGER.error("Usage: batchcrop-gui IMAGE")
        return 2
    app = QApplication.instance() or QApplication(arguments)
    app.setApplicationName("BatchCrop")
    rect = run_selector(Path(arguments[1]))
    if rect is None:
        return 1
    print(f"{rect.x:g},{rect.y:g},{rect.width:g},{rect.height:g}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
