"""Default configuration values for batchcrop."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Crop geometry
# ---------------------------------------------------------------------------

# Smallest crop edge, in original image pixels.
MIN_CROP_SIZE: Final[int] = 10
DEFAULT_CROP_SIZE: Final[int] = 100

# Side length of the square hit box centred on each resize grip, in screen
# pixels.  The box is measured after the viewport transform so grips stay
# equally easy to grab at every zoom level.
HANDLE_HIT_SIZE: Final[int] = 12

# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------

MIN_VIEWPORT_SCALE: Final[float] = 0.1
MAX_VIEWPORT_SCALE: Final[float] = 5.0
BUTTON_ZOOM_STEP: Final[float] = 1.2
WHEEL_ZOOM_STEP: Final[float] = 1.1

# Bounds of the user image-scale layer underneath the viewport zoom.
MIN_IMAGE_SCALE: Final[float] = 0.1
MAX_IMAGE_SCALE: Final[float] = 5.0

# The base display size leaves this many pixels of breathing room around the
# image inside its container.
CONTAINER_PADDING: Final[int] = 40
FALLBACK_DISPLAY_SIZE: Final[tuple[int, int]] = (300, 200)

# ---------------------------------------------------------------------------
# Keyboard interaction
# ---------------------------------------------------------------------------

NUDGE_STEP: Final[int] = 1
NUDGE_STEP_LARGE: Final[int] = 10

# ---------------------------------------------------------------------------
# Batch output
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_SUFFIX: Final[str] = "_cropped"
DEFAULT_OUTPUT_DIR_NAME: Final[str] = "BatchCrop_Output"
SUPPORTED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".jpg", ".jpeg", ".png", ".bmp", ".gif", ".tif", ".tiff", ".webp"}
)
