"""Schema helpers for the batchcrop settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_CROP_SIZE,
    DEFAULT_OUTPUT_SUFFIX,
    MIN_CROP_SIZE,
    NUDGE_STEP,
    NUDGE_STEP_LARGE,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "batchcrop/settings.schema.json",
    "type": "object",
    "required": ["schema", "crop", "output"],
    "properties": {
        "schema": {"const": "batchcrop/settings@1"},
        "crop": {
            "type": "object",
            "properties": {
                "default_size": {"type": "integer", "minimum": MIN_CROP_SIZE},
                "nudge_step": {"type": "integer", "minimum": 1},
                "nudge_step_large": {"type": "integer", "minimum": 1},
                "last_rect": {
                    "type": ["object", "null"],
                    "required": ["x", "y", "width", "height"],
                    "properties": {
                        "x": {"type": "number", "minimum": 0},
                        "y": {"type": "number", "minimum": 0},
                        "width": {"type": "number", "exclusiveMinimum": 0},
                        "height": {"type": "number", "exclusiveMinimum": 0},
                    },
                },
            },
            "additionalProperties": True,
        },
        "output": {
            "type": "object",
            "properties": {
                "suffix": {"type": "string"},
                "directory": {"type": ["string", "null"]},
                "max_workers": {"type": "integer", "minimum": 1, "maximum": 64},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "batchcrop/settings@1",
    "crop": {
        "default_size": DEFAULT_CROP_SIZE,
        "nudge_step": NUDGE_STEP,
        "nudge_step_large": NUDGE_STEP_LARGE,
        "last_rect": None,
    },
    "output": {
        "suffix": DEFAULT_OUTPUT_SUFFIX,
        "directory": None,
        "max_workers": 1,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("crop", "output")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    if key == "output" and sub_key == "directory" and sub_value not in {None, ""}:
                        try:
                            sub_value = os.fspath(sub_value)
                        except TypeError:
                            continue
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)
