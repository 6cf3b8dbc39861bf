"""Custom exception hierarchy for batchcrop."""

from __future__ import annotations


class BatchCropError(Exception):
    """Base class for all custom errors raised by batchcrop."""


class GeometryError(BatchCropError):
    """Raised when user supplied geometry cannot be interpreted."""


# --- Backend errors ---

class BackendError(BatchCropError):
    """Base class for failures reported by the image backend."""


class ImageLoadError(BackendError):
    """Raised when an input image cannot be opened or measured."""


class CropFailedError(BackendError):
    """Raised when cropping or writing an output image fails."""


# --- Settings errors ---

class SettingsError(BatchCropError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
