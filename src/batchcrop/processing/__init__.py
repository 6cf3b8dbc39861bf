"""Batch crop pipeline and the image backend it delegates pixel work to."""

from .backend import CropBackend, PillowCropBackend
from .batch import BatchProgress, CropResult, batch_crop, can_start_crop, output_path_for
from .files import collect_image_files, is_supported_image

__all__ = [
    "BatchProgress",
    "CropBackend",
    "CropResult",
    "PillowCropBackend",
    "batch_crop",
    "can_start_crop",
    "collect_image_files",
    "is_supported_image",
    "output_path_for",
]
